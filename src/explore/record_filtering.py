"""Record field filtering.

This module applies AND-combined field predicates to record sets.
Comparisons are case-insensitive string comparisons.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from core.constants import (
    FILTER_OPERATOR_ALIASES,
    OPERATOR_CONTAINS,
    OPERATOR_EQUALS,
    OPERATOR_NOT_EQUALS,
)
from core.types import Filter, Record


def normalize_operator(operator: str) -> str:
    """Map operator aliases onto canonical operator tags.

    Args:
        operator: Raw operator value such as ``eq`` or ``=``.

    Returns:
        Canonical tag for known aliases, otherwise the input unchanged.
    """
    return FILTER_OPERATOR_ALIASES.get(operator, operator)


def apply_filters(records: Sequence[Record], filters: Sequence[Filter]) -> tuple[Record, ...]:
    """Filter records using AND-combined field predicates.

    Filters without a field are skipped. Unknown operators exclude
    every record they are evaluated against.

    Args:
        records: Input records to filter.
        filters: Filter rows to combine.

    Returns:
        Records passing every active filter, in input order.
    """
    active_filters = [flt for flt in filters if flt.is_active]
    if not active_filters:
        return tuple(records)
    filtered: list[Record] = []
    for record in records:
        value_map = build_value_map(record)
        if all(filter_passes(value_map, flt) for flt in active_filters):
            filtered.append(record)
    return tuple(filtered)


def build_value_map(record: Record) -> dict[str, str]:
    """Build a lowercase field-name to lowercase value map for a record."""
    return {field.name.lower(): field.value.lower() for field in record.full_fields}


def filter_passes(value_map: Mapping[str, str], flt: Filter) -> bool:
    """Evaluate one filter against a record value map.

    Args:
        value_map: Lowercase field-name to lowercase value mapping.
        flt: Filter to evaluate.

    Returns:
        True when the record satisfies the filter.
    """
    if not flt.is_active:
        return True
    field_value = value_map.get(flt.field.lower(), "")
    test_value = (flt.value or "").lower()
    operator = normalize_operator(flt.operator)
    if operator == OPERATOR_CONTAINS:
        return test_value in field_value
    if operator == OPERATOR_EQUALS:
        return field_value == test_value
    if operator == OPERATOR_NOT_EQUALS:
        return field_value != test_value
    return False
