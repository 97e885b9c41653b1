"""Plain-text rendering of record field grids.

This module lays record chunks out side by side as terminal columns.
Collapsed records show essential fields; expanded records show the
current filtered layout.
"""

from __future__ import annotations

from itertools import zip_longest
from typing import Sequence

from core.types import Field, FieldChunk, Record

_COLUMN_SEPARATOR = " | "


def render_records(records: Sequence[Record]) -> list[str]:
    """Render records as text blocks separated by blank lines.

    Args:
        records: Displayed records.

    Returns:
        Output lines.
    """
    lines: list[str] = []
    for index, record in enumerate(records):
        if index:
            lines.append("")
        lines.extend(render_record(record))
    return lines


def render_record(record: Record) -> list[str]:
    """Render one record header and its field grid."""
    marker = "-" if record.expanded else "+"
    header = f"{marker} {record.display_name}"
    if record.record_id and record.record_id != record.display_name:
        header = f"{header} [{record.record_id}]"
    if record.expanded and record.field_search_term:
        header = f"{header} (fields matching '{record.field_search_term}')"
    chunks = record.field_chunks_filtered if record.expanded else record.essential_chunks
    return [header, *render_chunks(chunks)]


def render_chunks(chunks: Sequence[FieldChunk]) -> list[str]:
    """Render chunks as aligned side-by-side columns.

    Args:
        chunks: Column chunks in display order.

    Returns:
        One line per grid row, indented under the record header.
    """
    columns = [[_format_field(field) for field in chunk.fields] for chunk in chunks]
    widths = [max((len(cell) for cell in column), default=0) for column in columns]
    lines: list[str] = []
    for row in zip_longest(*columns, fillvalue=""):
        cells = [cell.ljust(width) for cell, width in zip(row, widths) if width]
        lines.append("  " + _COLUMN_SEPARATOR.join(cells).rstrip())
    return lines


def _format_field(field: Field) -> str:
    return f"{field.label}: {field.value}"
