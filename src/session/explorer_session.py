"""Interactive record explorer session.

This module owns the explorer state as immutable snapshots and exposes
every user operation: object selection, field loading, record fetch,
filter editing, search, per-record field search, and expansion.
Each operation reads the current snapshot, computes a new one with the
pure explore functions, and swaps it in.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import replace
from typing import Any, Callable

from core.config import ExplorerConfig
from core.constants import DEFAULT_FILTER_OPERATOR
from core.logging_config import get_logger
from core.types import ExplorerSnapshot, FieldOption, Filter, Record
from explore.field_search import apply_record_field_search, toggle_record_expansion
from explore.record_filtering import apply_filters
from explore.record_projection import build_field_options, coerce_value, project_records
from explore.record_search import apply_search, select_search_source
from session.debounce import Debouncer
from session.field_cache import FieldMetadataCache
from session.notifications import Notifier
from sources.record_source import RecordSource

_LOGGER = get_logger(__name__)

SnapshotListener = Callable[[ExplorerSnapshot], None]

SELECT_OBJECT_FIRST_MESSAGE = "Please select an object first"
NO_FIELDS_MESSAGE = "No fields available for selected object"
SEARCH_BEFORE_FETCH_MESSAGE = (
    "Please select an object and click Fetch to load records before searching."
)
FILTER_BEFORE_FETCH_MESSAGE = "No records loaded to filter. Click Fetch first."
_EDITABLE_FILTER_KEYS = frozenset({"field", "operator", "value"})


class ExplorerSession:
    """Stateful explorer over one record source.

    Operations hold the session lock from reading the snapshot until the
    new one is swapped in, so debounced calls running on timer threads
    never overwrite a newer state.
    """

    def __init__(
        self,
        source: RecordSource,
        config: ExplorerConfig | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        """Create an explorer session.

        Args:
            source: Collaborator that lists types and fetches rows.
            config: Optional runtime configuration for debounce delays.
            notifier: Optional notification channel shared with the caller.
        """
        self._config = config or ExplorerConfig.from_env()
        self._source = source
        self._notifier = notifier or Notifier()
        self._field_cache = FieldMetadataCache()
        self._object_options: tuple[str, ...] = ()
        self._snapshot = ExplorerSnapshot()
        self._lock = threading.RLock()
        self._listeners: list[SnapshotListener] = []
        self._debounced_load_fields = Debouncer(
            self.load_fields, self._config.field_debounce_seconds
        )
        self._debounced_search = Debouncer(self.apply_search, self._config.search_debounce_seconds)

    @property
    def snapshot(self) -> ExplorerSnapshot:
        """Return the latest state snapshot."""
        return self._snapshot

    @property
    def notifier(self) -> Notifier:
        """Return the notification channel."""
        return self._notifier

    @property
    def field_cache(self) -> FieldMetadataCache:
        """Return the per-type field metadata cache."""
        return self._field_cache

    @property
    def object_options(self) -> tuple[str, ...]:
        """Return record types listed by the last ``load_objects`` call."""
        return self._object_options

    def subscribe(self, listener: SnapshotListener) -> None:
        """Register a callback invoked with every new snapshot."""
        self._listeners.append(listener)

    def flush_pending(self) -> None:
        """Run debounced field loads and searches that are still waiting."""
        self._debounced_load_fields.flush()
        self._debounced_search.flush()

    def load_objects(self) -> tuple[str, ...]:
        """Load the record type catalog from the source.

        Returns:
            Record type identifiers; the previous list when the source fails.
        """
        try:
            objects = tuple(str(name) for name in self._source.list_objects())
        except Exception as error:
            self._report_source_failure("list_objects", error)
            return self._object_options
        self._object_options = objects
        _LOGGER.info("objects_loaded", object_count=len(objects))
        return objects

    def select_object(self, object_name: str) -> None:
        """Select a record type, resetting all record and filter state.

        Args:
            object_name: Record type identifier, empty to clear the selection.
        """
        with self._lock:
            self._debounced_search.cancel()
            self._update(
                selected_object=object_name,
                field_options=(),
                filters=(),
                full_records=(),
                filtered_records=(),
                records=(),
                search_term="",
                no_records=False,
            )
            if not object_name:
                return
            self._debounced_load_fields(object_name)

    def load_fields(self, object_name: str) -> tuple[FieldOption, ...]:
        """Load formatted field options for a record type.

        Cached types never call the source again. Results for a type
        that is no longer selected are cached but not applied.

        Args:
            object_name: Record type identifier.

        Returns:
            Field options, or an empty tuple when the source fails.
        """
        try:
            options = self._field_cache.get_or_load(object_name, self._fetch_field_options)
        except Exception as error:
            self._report_source_failure("list_fields", error, object_name=object_name)
            return ()
        with self._lock:
            if self._snapshot.selected_object == object_name:
                self._update(field_options=options)
        return options

    def fetch_records(self) -> tuple[Record, ...]:
        """Fetch and project records for the selected type.

        Active filters and the current search term are reapplied to the
        new records. On source failure the previous records are kept.

        Returns:
            Displayed records after the fetch.
        """
        with self._lock:
            current = self._snapshot
            if not current.selected_object:
                self._notifier.info("Info", SELECT_OBJECT_FIRST_MESSAGE)
                return current.records
            if not current.field_options:
                self._notifier.info("Info", NO_FIELDS_MESSAGE)
                return current.records
            self._update(is_loading=True, no_records=False)
            try:
                rows = self._source.fetch_records(current.selected_object)
                full_records = project_records(rows or (), current.field_options)
            except Exception as error:
                self._report_source_failure(
                    "fetch_records", error, object_name=current.selected_object
                )
                self._update(is_loading=False)
                return self._snapshot.records
            filtered_records = apply_filters(full_records, self._snapshot.filters)
            self._update(
                full_records=full_records,
                filtered_records=filtered_records,
                is_loading=False,
            )
            _LOGGER.info(
                "records_fetched",
                object_name=current.selected_object,
                record_count=len(full_records),
                field_count=len(current.field_options),
            )
            return self.apply_search()

    def set_search_term(self, search_term: str) -> bool:
        """Record search box input and schedule a debounced search.

        Args:
            search_term: Raw search box text.

        Returns:
            False when no records are loaded and the input was rejected.
        """
        with self._lock:
            if not self._snapshot.full_records:
                self._notifier.info("Info", SEARCH_BEFORE_FETCH_MESSAGE)
                self._update(search_term="")
                return False
            self._update(search_term=search_term or "")
            self._debounced_search()
            return True

    def apply_search(self) -> tuple[Record, ...]:
        """Recompute the displayed set from the filter results and search term.

        Returns:
            Displayed records.
        """
        with self._lock:
            current = self._snapshot
            source = select_search_source(
                current.full_records, current.filtered_records, current.filters
            )
            records = apply_search(source, current.search_term)
            self._update(records=records, no_records=not records)
            return records

    def toggle_filter_bar(self) -> bool:
        """Open or close the filter bar and return its new state."""
        with self._lock:
            show_filters = not self._snapshot.show_filters
            self._update(show_filters=show_filters)
            return show_filters

    def add_filter(
        self,
        field: str = "",
        operator: str = DEFAULT_FILTER_OPERATOR,
        value: str = "",
    ) -> Filter:
        """Append a filter row.

        Args:
            field: Field name, empty for an inactive row.
            operator: Operator tag or alias.
            value: Comparison value.

        Returns:
            The created filter.
        """
        new_filter = Filter(
            filter_id=uuid.uuid4().hex, field=field, operator=operator, value=value
        )
        with self._lock:
            self._update(filters=(*self._snapshot.filters, new_filter))
        return new_filter

    def update_filter(self, index: int, **changes: Any) -> Filter | None:
        """Edit the field, operator, or value of one filter row.

        A ``None`` change clears the attribute to empty text.

        Args:
            index: Zero-based filter row index.
            **changes: Any of ``field``, ``operator``, ``value``.

        Returns:
            The edited filter, or None when the index is out of range.
        """
        allowed = {
            key: coerce_value(value)
            for key, value in changes.items()
            if key in _EDITABLE_FILTER_KEYS
        }
        with self._lock:
            filters = self._snapshot.filters
            if not 0 <= index < len(filters):
                return None
            edited = replace(filters[index], **allowed)
            self._update(filters=filters[:index] + (edited,) + filters[index + 1 :])
            return edited

    def remove_filter(self, index: int) -> bool:
        """Remove one filter row; out-of-range indexes are ignored."""
        with self._lock:
            filters = self._snapshot.filters
            if not 0 <= index < len(filters):
                return False
            self._update(filters=filters[:index] + filters[index + 1 :])
            return True

    def clear_filters(self) -> tuple[Record, ...]:
        """Drop every filter and redisplay the searched full set."""
        with self._lock:
            self._update(filters=(), filtered_records=self._snapshot.full_records)
            return self.apply_search()

    def apply_filters(self) -> tuple[Record, ...]:
        """Apply the current filter rows to the full record set.

        Returns:
            Displayed records after filtering and search.
        """
        with self._lock:
            current = self._snapshot
            if not current.full_records:
                self._notifier.info("Info", FILTER_BEFORE_FETCH_MESSAGE)
                return current.records
            filtered_records = apply_filters(current.full_records, current.filters)
            self._update(filtered_records=filtered_records, show_filters=False)
            _LOGGER.info(
                "filters_applied",
                object_name=current.selected_object,
                filter_count=len(current.filters),
                matched_count=len(filtered_records),
                total_count=len(current.full_records),
            )
            return self.apply_search()

    def search_record_fields(self, record_id: str, query: str) -> tuple[Record, ...]:
        """Narrow the fields shown inside one displayed record.

        Args:
            record_id: Identifier of the record to update.
            query: Raw field query text.

        Returns:
            Displayed records with only that record replaced.
        """
        with self._lock:
            records = apply_record_field_search(self._snapshot.records, record_id, query)
            self._update(records=records)
            return records

    def toggle_expand(self, record_id: str) -> tuple[Record, ...]:
        """Expand or collapse one displayed record."""
        with self._lock:
            records = toggle_record_expansion(self._snapshot.records, record_id)
            self._update(records=records)
            return records

    def _fetch_field_options(self, object_name: str) -> tuple[FieldOption, ...]:
        field_names = self._source.list_fields(object_name) or ()
        options = build_field_options(str(name) for name in field_names)
        _LOGGER.info("fields_loaded", object_name=object_name, field_count=len(options))
        return options

    def _report_source_failure(self, operation: str, error: Exception, **fields: object) -> None:
        _LOGGER.error(
            "source_call_failed",
            operation=operation,
            error_type=type(error).__name__,
            error=str(error),
            **fields,
        )
        self._notifier.error("Error", str(error) or type(error).__name__)

    def _update(self, **changes: Any) -> ExplorerSnapshot:
        with self._lock:
            self._snapshot = replace(self._snapshot, **changes)
            snapshot = self._snapshot
        for listener in self._listeners:
            listener(snapshot)
        return snapshot

