"""Record view-model projection.

This module converts raw key-value rows into typed records with
full, essential, and filtered column layouts for display.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from core.constants import (
    ESSENTIAL_FIELD_NAMES,
    ESSENTIAL_LAYOUT_COLUMNS,
    RECORD_ID_FIELD,
    RECORD_NAME_FIELDS,
)
from core.label_format import prettify_field_label
from core.types import Field, FieldOption, Record
from explore.chunking import chunk_fields, column_count_for

_ESSENTIAL_NAMES_LOWER = frozenset(name.lower() for name in ESSENTIAL_FIELD_NAMES)


def build_field_options(field_names: Iterable[str]) -> tuple[FieldOption, ...]:
    """Build labelled field options from raw field identifiers.

    Args:
        field_names: Raw field identifiers in catalog order.

    Returns:
        Field options in the same order.
    """
    return tuple(
        FieldOption(label=prettify_field_label(name), value=name) for name in field_names
    )


def project_records(
    rows: Iterable[Mapping[str, object]],
    field_options: Sequence[FieldOption],
) -> tuple[Record, ...]:
    """Project raw rows into record view models.

    Args:
        rows: Raw rows keyed by field identifier.
        field_options: Selected fields in display order.

    Returns:
        Records in row order.
    """
    return tuple(project_record(row, field_options) for row in rows)


def project_record(row: Mapping[str, object], field_options: Sequence[FieldOption]) -> Record:
    """Project one raw row into a record view model.

    Args:
        row: Raw row keyed by field identifier; values may be missing or None.
        field_options: Selected fields in display order.

    Returns:
        Record with full, essential, and filtered layouts.
    """
    full_fields = tuple(
        Field(name=option.value, label=option.label, value=coerce_value(row.get(option.value)))
        for option in field_options
    )
    essential_fields = [
        field for field in full_fields if field.name.lower() in _ESSENTIAL_NAMES_LOWER
    ]
    field_chunks = chunk_fields(full_fields, column_count_for(len(full_fields)))
    record_id = coerce_value(row.get(RECORD_ID_FIELD))
    return Record(
        record_id=record_id,
        display_name=_resolve_display_name(row, record_id),
        full_fields=full_fields,
        essential_chunks=chunk_fields(essential_fields, ESSENTIAL_LAYOUT_COLUMNS),
        field_chunks=field_chunks,
        field_chunks_filtered=field_chunks,
    )


def coerce_value(raw_value: object) -> str:
    """Coerce a raw row value to its display string, empty when absent."""
    if raw_value is None:
        return ""
    return str(raw_value)


def _resolve_display_name(row: Mapping[str, object], record_id: str) -> str:
    for name_field in RECORD_NAME_FIELDS:
        name_value = coerce_value(row.get(name_field))
        if name_value:
            return name_value
    return record_id
