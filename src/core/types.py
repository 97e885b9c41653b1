"""Shared typed models.

This module defines immutable data models used by the explore engine,
session, sources, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from core.constants import DEFAULT_FILTER_OPERATOR

NotificationLevel = Literal["info", "error"]


@dataclass(frozen=True)
class Field:
    """One named value extracted from a record.

    Attributes:
        name: Raw field identifier.
        label: Human-readable field label.
        value: Field value coerced to string, empty when absent.
    """

    name: str
    label: str
    value: str


@dataclass(frozen=True)
class FieldOption:
    """Selectable field for one record type.

    Attributes:
        label: Human-readable field label.
        value: Raw field identifier used for lookups.
    """

    label: str
    value: str


@dataclass(frozen=True)
class FieldChunk:
    """Contiguous slice of a field list shown in one display column.

    Attributes:
        key: Zero-based column index.
        fields: Ordered fields for this column.
    """

    key: int
    fields: tuple[Field, ...]


@dataclass(frozen=True)
class Record:
    """Record view model with derived column layouts.

    Attributes:
        record_id: Record identifier.
        display_name: Name shown in record headers.
        full_fields: Every selected field in metadata order.
        essential_chunks: Two-column layout of essential fields only.
        field_chunks: Layout of all fields.
        field_chunks_filtered: Layout currently shown for the expanded view.
        expanded: Whether the record detail view is open.
        field_search_term: Normalized per-record field query.
    """

    record_id: str
    display_name: str
    full_fields: tuple[Field, ...]
    essential_chunks: tuple[FieldChunk, ...]
    field_chunks: tuple[FieldChunk, ...]
    field_chunks_filtered: tuple[FieldChunk, ...]
    expanded: bool = False
    field_search_term: str = ""


@dataclass(frozen=True)
class Filter:
    """Single field predicate; several filters combine with AND.

    Attributes:
        filter_id: Unique token for this filter row.
        field: Field name, empty when the filter is inactive.
        operator: Comparison operator tag.
        value: Comparison value.
    """

    filter_id: str
    field: str = ""
    operator: str = DEFAULT_FILTER_OPERATOR
    value: str = ""

    @property
    def is_active(self) -> bool:
        """Return whether this filter names a field."""
        return bool(self.field)


@dataclass(frozen=True)
class Notification:
    """User-facing message raised by a session operation.

    Attributes:
        level: Notification category.
        title: Short heading.
        message: Free-text description.
    """

    level: NotificationLevel
    title: str
    message: str


@dataclass(frozen=True)
class ExplorerSnapshot:
    """Immutable view of explorer session state.

    Attributes:
        selected_object: Currently selected record type, empty if none.
        field_options: Field options for the selected type.
        filters: Filter rows in display order.
        full_records: Every fetched record.
        filtered_records: Records passing the last applied filters.
        records: Records currently displayed after filter and search.
        search_term: Raw search box text.
        no_records: True when the displayed set is empty after an update.
        is_loading: True while a record fetch is in flight.
        show_filters: Whether the filter bar is open.
    """

    selected_object: str = ""
    field_options: tuple[FieldOption, ...] = ()
    filters: tuple[Filter, ...] = ()
    full_records: tuple[Record, ...] = ()
    filtered_records: tuple[Record, ...] = ()
    records: tuple[Record, ...] = ()
    search_term: str = ""
    no_records: bool = False
    is_loading: bool = False
    show_filters: bool = False

    @property
    def has_active_filters(self) -> bool:
        """Return whether any filter row names a field."""
        return any(flt.is_active for flt in self.filters)
