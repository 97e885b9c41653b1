"""Per-record field search.

This module narrows the fields shown inside one expanded record.
Unlike record search, it also matches field names and labels.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from core.constants import NARROW_LAYOUT_COLUMNS
from core.types import Field, Record
from explore.chunking import chunk_fields
from explore.record_search import normalize_query


def search_fields(fields: Sequence[Field], query: str | None) -> tuple[Field, ...]:
    """Select fields whose name, label, or value contains the query.

    Args:
        fields: Ordered fields of one record.
        query: Raw query text.

    Returns:
        Matching fields in input order; every field for an empty query.
    """
    normalized_query = normalize_query(query)
    if not normalized_query:
        return tuple(fields)
    return tuple(field for field in fields if _field_matches(field, normalized_query))


def search_record_fields(record: Record, query: str | None) -> Record:
    """Return a record whose filtered layout reflects a field query.

    An empty query restores the unfiltered ``field_chunks`` object.

    Args:
        record: Record to update.
        query: Raw query text.

    Returns:
        Updated record with the same identifier.
    """
    normalized_query = normalize_query(query)
    if not normalized_query:
        return replace(record, field_search_term="", field_chunks_filtered=record.field_chunks)
    matching_fields = search_fields(record.full_fields, normalized_query)
    columns = len(record.field_chunks) or NARROW_LAYOUT_COLUMNS
    return replace(
        record,
        field_search_term=normalized_query,
        field_chunks_filtered=chunk_fields(matching_fields, columns),
    )


def apply_record_field_search(
    records: Sequence[Record],
    record_id: str,
    query: str | None,
) -> tuple[Record, ...]:
    """Apply a field query to one record, leaving the others untouched.

    Args:
        records: Current record sequence.
        record_id: Identifier of the record to update.
        query: Raw query text.

    Returns:
        Record sequence where only the matching record is replaced.
    """
    return tuple(
        search_record_fields(record, query) if record.record_id == record_id else record
        for record in records
    )


def toggle_record_expansion(records: Sequence[Record], record_id: str) -> tuple[Record, ...]:
    """Flip the expanded flag of one record.

    Expanding resets the field query and filtered layout.

    Args:
        records: Current record sequence.
        record_id: Identifier of the record to toggle.

    Returns:
        Record sequence where only the matching record is replaced.
    """
    return tuple(
        _toggle_expanded(record) if record.record_id == record_id else record
        for record in records
    )


def _toggle_expanded(record: Record) -> Record:
    if record.expanded:
        return replace(record, expanded=False)
    return replace(
        record,
        expanded=True,
        field_search_term="",
        field_chunks_filtered=record.field_chunks,
    )


def _field_matches(field: Field, normalized_query: str) -> bool:
    return (
        normalized_query in field.name.lower()
        or normalized_query in field.label.lower()
        or normalized_query in field.value.lower()
    )
