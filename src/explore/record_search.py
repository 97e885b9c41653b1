"""Free-text record search.

This module layers a substring query on top of the filter results.
It matches record names and field values, never field names.
"""

from __future__ import annotations

from typing import Sequence

from core.types import Filter, Record


def select_search_source(
    full_records: Sequence[Record],
    filtered_records: Sequence[Record],
    filters: Sequence[Filter],
) -> Sequence[Record]:
    """Pick the record set a search runs over.

    Args:
        full_records: Every fetched record.
        filtered_records: Records passing the last applied filters.
        filters: Current filter rows.

    Returns:
        The filtered set when any filter is active, else the full set.
    """
    if any(flt.is_active for flt in filters):
        return filtered_records
    return full_records


def apply_search(source: Sequence[Record], query: str | None) -> tuple[Record, ...]:
    """Filter records by a case-insensitive substring query.

    Args:
        source: Records to search, in display order.
        query: Raw query text.

    Returns:
        Matching records in source order; all of ``source`` for an empty query.
    """
    normalized_query = normalize_query(query)
    if not normalized_query:
        return tuple(source)
    return tuple(record for record in source if record_matches(record, normalized_query))


def record_matches(record: Record, normalized_query: str) -> bool:
    """Return whether a record's display name or any value contains the query.

    The identifier only matches through the display name, which falls back
    to it when a record has no name.
    """
    if normalized_query in record.display_name.lower():
        return True
    return any(normalized_query in field.value.lower() for field in record.full_fields)


def normalize_query(query: str | None) -> str:
    """Trim and lowercase a raw query, treating None as empty."""
    return (query or "").strip().lower()
