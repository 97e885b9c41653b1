"""Field label formatting.

This module turns raw field identifiers such as ``Account_Type__c``
into readable labels such as ``Account Type``.
"""

from __future__ import annotations

import re

_CUSTOM_SUFFIX_PATTERN = re.compile(r"__c$", re.IGNORECASE)
_RELATION_SUFFIX_PATTERN = re.compile(r"__r$", re.IGNORECASE)
_CAMEL_BOUNDARY_PATTERN = re.compile(r"([a-z])([A-Z])")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def prettify_field_label(name: str | None) -> str:
    """Convert a raw field identifier into a human-readable label.

    Args:
        name: Raw field identifier, possibly empty.

    Returns:
        Title-cased label, or an empty string for empty input.
    """
    if not name:
        return ""
    label = _CUSTOM_SUFFIX_PATTERN.sub("", str(name))
    label = _RELATION_SUFFIX_PATTERN.sub("", label)
    label = label.replace("_", " ")
    label = _CAMEL_BOUNDARY_PATTERN.sub(r"\1 \2", label)
    label = _WHITESPACE_PATTERN.sub(" ", label).strip()
    return " ".join(_capitalize_word(word) for word in label.split(" "))


def _capitalize_word(word: str) -> str:
    if not word:
        return ""
    return word[0].upper() + word[1:].lower()
