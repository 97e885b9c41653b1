"""Per-type field metadata cache.

This module remembers formatted field options by record type so a
previously seen type never triggers another field lookup.
"""

from __future__ import annotations

from typing import Callable, Sequence

from core.types import FieldOption


class FieldMetadataCache:
    """Mapping from record type to its formatted field options."""

    def __init__(self) -> None:
        self._options_by_object: dict[str, tuple[FieldOption, ...]] = {}

    def get(self, object_name: str) -> tuple[FieldOption, ...] | None:
        """Return cached options for a type, or None when not cached."""
        return self._options_by_object.get(object_name)

    def put(self, object_name: str, options: Sequence[FieldOption]) -> tuple[FieldOption, ...]:
        """Store options for a type and return the stored tuple."""
        stored = tuple(options)
        self._options_by_object[object_name] = stored
        return stored

    def get_or_load(
        self,
        object_name: str,
        loader: Callable[[str], Sequence[FieldOption]],
    ) -> tuple[FieldOption, ...]:
        """Return cached options, loading and caching them on first use.

        Args:
            object_name: Record type identifier.
            loader: Callable producing options for an uncached type.

        Returns:
            Field options for the type.
        """
        cached = self.get(object_name)
        if cached is not None:
            return cached
        return self.put(object_name, loader(object_name))

    def __contains__(self, object_name: object) -> bool:
        return object_name in self._options_by_object

    def clear(self) -> None:
        """Drop every cached entry, forcing reloads."""
        self._options_by_object.clear()
