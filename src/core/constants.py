"""Core constants used across record explorer modules.

This module centralizes layout, matching, and default values.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".explorer")
SUPPORTED_SOURCE_EXTENSIONS = (".jsonl", ".json", ".yaml", ".yml")
ESSENTIAL_FIELD_NAMES = ("Name", "Id", "Email", "Phone", "Status", "Type", "Industry")
RECORD_ID_FIELD = "Id"
RECORD_NAME_FIELDS = ("Name", "name")
WIDE_LAYOUT_FIELD_THRESHOLD = 15
WIDE_LAYOUT_COLUMNS = 3
NARROW_LAYOUT_COLUMNS = 2
ESSENTIAL_LAYOUT_COLUMNS = 2
OPERATOR_EQUALS = "="
OPERATOR_NOT_EQUALS = "!="
OPERATOR_CONTAINS = "LIKE"
SUPPORTED_FILTER_OPERATORS = (OPERATOR_EQUALS, OPERATOR_NOT_EQUALS, OPERATOR_CONTAINS)
FILTER_OPERATOR_ALIASES = {
    "eq": OPERATOR_EQUALS,
    "ne": OPERATOR_NOT_EQUALS,
    "like": OPERATOR_CONTAINS,
}
FILTER_OPERATOR_LABELS = {
    OPERATOR_EQUALS: "=",
    OPERATOR_NOT_EQUALS: "!=",
    OPERATOR_CONTAINS: "Contains",
}
DEFAULT_FILTER_OPERATOR = OPERATOR_EQUALS
DEFAULT_SEARCH_DEBOUNCE_MS = 200
DEFAULT_FIELD_DEBOUNCE_MS = 250
VIEW_SPEC_VERSION = 1
