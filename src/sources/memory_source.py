"""In-memory record source.

This module serves rows held in Python mappings, which suits SDK
callers that already have data loaded and unit tests.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from core.errors import ExplorerSourceError
from sources.record_source import RawRow


class InMemoryRecordSource:
    """Record source backed by dictionaries of rows."""

    def __init__(
        self,
        rows_by_object: Mapping[str, Sequence[RawRow]],
        fields_by_object: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        """Create an in-memory source.

        Args:
            rows_by_object: Raw rows keyed by record type.
            fields_by_object: Optional explicit field lists keyed by record type.
                Types without an entry use the first-seen union of row keys.
        """
        self._rows_by_object = {name: list(rows) for name, rows in rows_by_object.items()}
        self._fields_by_object = {
            name: list(fields) for name, fields in (fields_by_object or {}).items()
        }

    def list_objects(self) -> list[str]:
        return list(self._rows_by_object)

    def list_fields(self, object_name: str) -> list[str]:
        if object_name in self._fields_by_object:
            return list(self._fields_by_object[object_name])
        return collect_field_names(self._require_rows(object_name))

    def fetch_records(self, object_name: str) -> list[RawRow]:
        return list(self._require_rows(object_name))

    def _require_rows(self, object_name: str) -> list[RawRow]:
        rows = self._rows_by_object.get(object_name)
        if rows is None:
            raise ExplorerSourceError(
                f"Unknown object '{object_name}'. "
                f"Available objects: {sorted(self._rows_by_object)}."
            )
        return rows


def collect_field_names(rows: Sequence[RawRow]) -> list[str]:
    """Return the first-seen union of keys across rows.

    Args:
        rows: Raw rows.

    Returns:
        Field identifiers in first-seen order.
    """
    seen: dict[str, None] = {}
    for row in rows:
        for key in row:
            seen.setdefault(str(key), None)
    return list(seen)
