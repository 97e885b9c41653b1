"""Record source protocol.

This module defines the collaborator contract sessions call to list
record types, list field identifiers, and fetch raw rows.
"""

from __future__ import annotations

from typing import Mapping, Protocol, Sequence

RawRow = Mapping[str, object]


class RecordSource(Protocol):
    """Provider of record types, field identifiers, and raw rows."""

    def list_objects(self) -> Sequence[str]: ...

    def list_fields(self, object_name: str) -> Sequence[str]: ...

    def fetch_records(self, object_name: str) -> Sequence[RawRow]: ...
