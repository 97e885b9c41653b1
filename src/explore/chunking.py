"""Column chunking for record field grids.

This module splits ordered field lists into fixed column groups.
Grid shape stays stable even when no fields are present.
"""

from __future__ import annotations

import math
from typing import Sequence

from core.constants import (
    NARROW_LAYOUT_COLUMNS,
    WIDE_LAYOUT_COLUMNS,
    WIDE_LAYOUT_FIELD_THRESHOLD,
)
from core.errors import ExplorerValueError
from core.types import Field, FieldChunk


def chunk_fields(fields: Sequence[Field], columns: int) -> tuple[FieldChunk, ...]:
    """Split fields into contiguous column groups.

    Args:
        fields: Ordered fields to lay out.
        columns: Number of display columns.

    Returns:
        Exactly ``columns`` chunks whose fields concatenate back to the input.

    Raises:
        ExplorerValueError: If ``columns`` is lower than one.
    """
    if columns < 1:
        raise ExplorerValueError(
            f"Invalid column count {columns}: expected a positive integer."
        )
    ordered_fields = tuple(fields)
    if not ordered_fields:
        return tuple(FieldChunk(key=index, fields=()) for index in range(columns))
    size = math.ceil(len(ordered_fields) / columns)
    return tuple(
        FieldChunk(key=index, fields=ordered_fields[index * size : index * size + size])
        for index in range(columns)
    )


def column_count_for(field_total: int) -> int:
    """Return the full-layout column count for a record's field total."""
    if field_total > WIDE_LAYOUT_FIELD_THRESHOLD:
        return WIDE_LAYOUT_COLUMNS
    return NARROW_LAYOUT_COLUMNS
