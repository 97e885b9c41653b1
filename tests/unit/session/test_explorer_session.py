"""Unit tests for the interactive explorer session."""

from __future__ import annotations

import threading
import time
from pathlib import Path
from typing import Sequence

import pytest

from core.config import ExplorerConfig
from core.errors import ExplorerSourceError
from core.types import ExplorerSnapshot, Record
from explore import record_search
from session.explorer_session import (
    FILTER_BEFORE_FETCH_MESSAGE,
    NO_FIELDS_MESSAGE,
    SEARCH_BEFORE_FETCH_MESSAGE,
    SELECT_OBJECT_FIRST_MESSAGE,
    ExplorerSession,
)
from sources.memory_source import InMemoryRecordSource
from sources.record_source import RawRow
from tests.record_builders import ACCOUNT_FIELDS, ACCOUNT_ROWS

INLINE_CONFIG = ExplorerConfig(
    data_root=Path("."),
    search_debounce_seconds=0.0,
    field_debounce_seconds=0.0,
)


class CountingSource(InMemoryRecordSource):
    """In-memory source that counts calls and can be told to fail."""

    def __init__(self) -> None:
        super().__init__(
            {"Account": list(ACCOUNT_ROWS), "Lead": [{"Id": "00Q1", "Name": "Lead One"}]},
            {"Account": list(ACCOUNT_FIELDS)},
        )
        self.field_calls: list[str] = []
        self.fail_fetch = False
        self.fail_fields = False
        self.fail_objects = False

    def list_objects(self) -> list[str]:
        if self.fail_objects:
            raise ExplorerSourceError("catalog offline")
        return super().list_objects()

    def list_fields(self, object_name: str) -> list[str]:
        self.field_calls.append(object_name)
        if self.fail_fields:
            raise ExplorerSourceError("describe failed")
        return super().list_fields(object_name)

    def fetch_records(self, object_name: str) -> list[RawRow]:
        if self.fail_fetch:
            raise RuntimeError("query timed out")
        return super().fetch_records(object_name)


def _session(source: CountingSource | None = None) -> ExplorerSession:
    return ExplorerSession(source or CountingSource(), INLINE_CONFIG)


def _loaded_session(source: CountingSource | None = None) -> ExplorerSession:
    return _loaded_session_with(INLINE_CONFIG, source)


def _loaded_session_with(
    config: ExplorerConfig, source: CountingSource | None = None
) -> ExplorerSession:
    session = ExplorerSession(source or CountingSource(), config)
    session.select_object("Account")
    session.fetch_records()
    return session


def _ids(session: ExplorerSession) -> list[str]:
    return [record.record_id for record in session.snapshot.records]


def _messages(session: ExplorerSession) -> Sequence[str]:
    return [notification.message for notification in session.notifier.history]


def test_load_objects_lists_source_catalog() -> None:
    """Object options should come from the source catalog."""
    session = _session()

    assert session.load_objects() == ("Account", "Lead")
    assert session.object_options == ("Account", "Lead")


def test_load_objects_reports_source_failure() -> None:
    """Catalog failures should raise an error notification."""
    source = CountingSource()
    source.fail_objects = True
    session = _session(source)

    objects = session.load_objects()

    assert objects == ()
    assert [item.level for item in session.notifier.history] == ["error"]
    assert _messages(session) == ["catalog offline"]


def test_select_object_loads_formatted_field_options() -> None:
    """Selecting an object should load its labelled field options."""
    session = _session()

    session.select_object("Account")

    assert [option.value for option in session.snapshot.field_options] == list(ACCOUNT_FIELDS)
    assert session.snapshot.selected_object == "Account"


def test_select_object_reuses_cached_fields() -> None:
    """Reselecting a type should not call the source again."""
    source = CountingSource()
    session = _session(source)

    session.select_object("Account")
    session.select_object("Lead")
    session.select_object("Account")

    assert source.field_calls == ["Account", "Lead"]
    assert len(session.snapshot.field_options) == len(ACCOUNT_FIELDS)


def test_select_object_resets_records_and_filters() -> None:
    """Changing the type should drop records, filters, and search."""
    session = _loaded_session()
    session.add_filter("Industry", "=", "Tech")
    session.set_search_term("acme")

    session.select_object("Lead")

    snapshot = session.snapshot
    assert (snapshot.records, snapshot.full_records, snapshot.filters) == ((), (), ())
    assert snapshot.search_term == ""


def test_select_object_with_debounce_defers_field_load() -> None:
    """Debounced field loads should wait until flushed."""
    config = ExplorerConfig(
        data_root=Path("."), search_debounce_seconds=60, field_debounce_seconds=60
    )
    source = CountingSource()
    session = ExplorerSession(source, config)

    session.select_object("Lead")
    session.select_object("Account")
    deferred_calls = list(source.field_calls)
    session.flush_pending()

    assert deferred_calls == []
    assert source.field_calls == ["Account"]
    assert session.snapshot.selected_object == "Account"


def test_load_fields_for_stale_object_does_not_apply_options() -> None:
    """Field options for a deselected type should be cached only."""
    session = _session()
    session.select_object("Account")

    session.load_fields("Lead")

    assert "Lead" in session.field_cache
    assert [option.value for option in session.snapshot.field_options] == list(ACCOUNT_FIELDS)


def test_load_fields_reports_source_failure() -> None:
    """Field lookup failures should raise an error notification."""
    source = CountingSource()
    source.fail_fields = True
    session = _session(source)

    session.select_object("Account")

    assert session.snapshot.field_options == ()
    assert session.notifier.has_errors()


def test_fetch_records_requires_selected_object() -> None:
    """Fetching without a type should only raise an info notification."""
    session = _session()

    session.fetch_records()

    assert _messages(session) == [SELECT_OBJECT_FIRST_MESSAGE]
    assert session.snapshot == ExplorerSnapshot()


def test_fetch_records_requires_field_metadata() -> None:
    """Fetching without field options should abort with an info notification."""
    source = CountingSource()
    source.fail_fields = True
    session = _session(source)
    session.select_object("Account")

    session.fetch_records()

    assert _messages(session)[-1] == NO_FIELDS_MESSAGE
    assert session.snapshot.full_records == ()


def test_fetch_records_projects_rows() -> None:
    """Fetched rows should become displayed records."""
    session = _loaded_session()

    snapshot = session.snapshot
    assert _ids(session) == ["001A", "001B", "001C", "001D", "001E"]
    assert snapshot.filtered_records == snapshot.full_records
    assert (snapshot.no_records, snapshot.is_loading) == (False, False)


def test_fetch_records_keeps_previous_records_on_failure() -> None:
    """A failing fetch should keep the last good snapshot."""
    source = CountingSource()
    session = _loaded_session(source)
    previous_records = session.snapshot.full_records
    source.fail_fetch = True

    session.fetch_records()

    assert session.snapshot.full_records is previous_records
    assert session.snapshot.is_loading is False
    assert _messages(session)[-1] == "query timed out"


def test_fetch_records_sets_no_records_for_empty_result() -> None:
    """An empty fetch should flag that nothing is displayed."""
    source = InMemoryRecordSource({"Lead": []}, {"Lead": ["Id", "Name"]})
    session = ExplorerSession(source, INLINE_CONFIG)
    session.select_object("Lead")

    session.fetch_records()

    assert session.snapshot.no_records is True


def test_set_search_term_requires_loaded_records() -> None:
    """Searching before a fetch should be rejected with an info notification."""
    session = _session()
    session.select_object("Account")

    accepted = session.set_search_term("acme")

    assert accepted is False
    assert session.snapshot.search_term == ""
    assert _messages(session) == [SEARCH_BEFORE_FETCH_MESSAGE]


def test_set_search_term_narrows_displayed_records() -> None:
    """Search input should narrow the displayed set."""
    session = _loaded_session()

    session.set_search_term("ACME")

    assert _ids(session) == ["001A"]


def test_search_with_no_match_sets_no_records() -> None:
    """A search with no hits should flag the empty display."""
    session = _loaded_session()

    session.set_search_term("zzz")

    assert session.snapshot.no_records is True


def test_apply_filters_requires_loaded_records() -> None:
    """Filtering before a fetch should only raise an info notification."""
    session = _session()
    session.select_object("Account")
    session.add_filter("Industry", "=", "Tech")

    session.apply_filters()

    assert _messages(session) == [FILTER_BEFORE_FETCH_MESSAGE]
    assert session.snapshot.filtered_records == ()


def test_apply_filters_then_search_layers_results() -> None:
    """Search should run over the filtered subset."""
    session = _loaded_session()
    session.add_filter("Industry", "=", "Tech")
    session.add_filter("Status", "!=", "Closed")
    session.toggle_filter_bar()

    session.apply_filters()
    filtered_ids = _ids(session)
    session.set_search_term("umbrella")

    assert filtered_ids == ["001A", "001D"]
    assert _ids(session) == ["001D"]
    assert session.snapshot.show_filters is False


def test_clear_filters_restores_full_set_with_search() -> None:
    """Clearing filters should redisplay the searched full set."""
    session = _loaded_session()
    session.add_filter("Industry", "=", "Finance")
    session.apply_filters()
    session.set_search_term("o")

    session.clear_filters()

    assert session.snapshot.filters == ()
    assert _ids(session) == ["001A", "001B", "001D", "001E"]


def test_update_and_remove_filter_rows() -> None:
    """Filter rows should be editable and removable by index."""
    session = _loaded_session()
    session.add_filter()
    session.add_filter("Status", "=", "Active")

    edited = session.update_filter(0, field="Industry", operator="LIKE", value="tec")
    removed = session.remove_filter(1)
    session.apply_filters()

    assert edited is not None and edited.field == "Industry"
    assert removed is True
    assert _ids(session) == ["001A", "001B", "001D"]


def test_filter_row_edits_ignore_out_of_range_indexes() -> None:
    """Invalid filter indexes should leave filters unchanged."""
    session = _loaded_session()
    session.add_filter("Status", "=", "Active")
    filters_before = session.snapshot.filters

    assert session.update_filter(5, value="x") is None
    assert session.remove_filter(-1) is False
    assert session.snapshot.filters == filters_before


def test_add_filter_assigns_unique_ids() -> None:
    """Every filter row should get its own identifier."""
    session = _session()

    first = session.add_filter()
    second = session.add_filter()

    assert first.filter_id != second.filter_id


def test_fetch_records_reapplies_active_filters() -> None:
    """Refetching should keep active filters in effect."""
    session = _loaded_session()
    session.add_filter("Industry", "=", "Media")
    session.apply_filters()

    session.fetch_records()

    assert _ids(session) == ["001E"]


def test_search_record_fields_only_updates_target_record() -> None:
    """Per-record field search should leave other records untouched."""
    session = _loaded_session()
    other_before = session.snapshot.records[1]

    session.toggle_expand("001A")
    session.search_record_fields("001A", "industry")

    target, other = session.snapshot.records[0], session.snapshot.records[1]
    shown = [field.name for chunk in target.field_chunks_filtered for field in chunk.fields]
    assert shown == ["Industry"]
    assert other is other_before


def test_toggle_expand_flips_only_target_record() -> None:
    """Expanding one record should not expand the others."""
    session = _loaded_session()

    session.toggle_expand("001B")

    assert [record.expanded for record in session.snapshot.records] == [
        False,
        True,
        False,
        False,
        False,
    ]


def test_subscribers_receive_new_snapshots() -> None:
    """Listeners should observe every published snapshot."""
    session = _session()
    snapshots: list[ExplorerSnapshot] = []
    session.subscribe(snapshots.append)

    session.select_object("Account")

    assert snapshots[-1] is session.snapshot
    assert snapshots[0].field_options == ()


@pytest.mark.parametrize("search_term", ["", "   "])
def test_blank_search_shows_source_in_order(search_term: str) -> None:
    """Blank search input should show the whole source in order."""
    session = _loaded_session()

    session.set_search_term(search_term)

    assert _ids(session) == ["001A", "001B", "001C", "001D", "001E"]


def test_update_filter_treats_none_as_empty_value() -> None:
    """A cleared filter value should compare as empty text."""
    session = _loaded_session()
    session.add_filter("Status", "=", "Active")

    edited = session.update_filter(0, value=None)
    session.apply_filters()

    assert edited is not None and edited.value == ""
    assert _ids(session) == ["001E"]


def test_debounced_search_does_not_overwrite_newer_filter_results(monkeypatch) -> None:
    """A timer-thread search should finish before filters apply, not after."""
    caller_thread = threading.current_thread()
    search_started = threading.Event()

    def slow_timer_search(source: Sequence[Record], query: str) -> tuple[Record, ...]:
        if threading.current_thread() is not caller_thread:
            search_started.set()
            time.sleep(0.05)
        return record_search.apply_search(source, query)

    monkeypatch.setattr("session.explorer_session.apply_search", slow_timer_search)
    config = ExplorerConfig(
        data_root=Path("."), search_debounce_seconds=0.01, field_debounce_seconds=0
    )
    session = _loaded_session_with(config)

    session.set_search_term("o")
    assert search_started.wait(timeout=5)
    session.add_filter("Industry", "=", "Nonexistent")
    session.apply_filters()

    assert session.snapshot.filtered_records == ()
    assert session.snapshot.records == ()
    assert session.snapshot.no_records is True
