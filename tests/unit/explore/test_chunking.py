"""Unit tests for column chunking."""

from __future__ import annotations

import pytest

from core.errors import ExplorerValueError
from explore.chunking import chunk_fields, column_count_for
from tests.record_builders import make_fields


@pytest.mark.parametrize(("length", "columns"), [(0, 2), (1, 3), (5, 2), (7, 3), (9, 3), (4, 5)])
def test_chunk_fields_partitions_input_in_order(length: int, columns: int) -> None:
    """Chunks should concatenate back to the input field order."""
    fields = make_fields(length)

    chunks = chunk_fields(fields, columns)

    flattened = [field for chunk in chunks for field in chunk.fields]
    assert len(chunks) == columns
    assert flattened == fields
    assert [chunk.key for chunk in chunks] == list(range(columns))


def test_chunk_fields_uses_ceiling_sized_groups() -> None:
    """Seven fields in three columns should split 3, 3, 1."""
    chunks = chunk_fields(make_fields(7), 3)

    assert [len(chunk.fields) for chunk in chunks] == [3, 3, 1]


def test_chunk_fields_leaves_trailing_chunks_empty() -> None:
    """Four fields in three columns should split 2, 2, 0."""
    chunks = chunk_fields(make_fields(4), 3)

    assert [len(chunk.fields) for chunk in chunks] == [2, 2, 0]


def test_chunk_fields_returns_empty_columns_for_empty_input() -> None:
    """Empty input should keep the grid shape with empty columns."""
    chunks = chunk_fields([], 3)

    assert [chunk.fields for chunk in chunks] == [(), (), ()]


def test_chunk_fields_rejects_non_positive_columns() -> None:
    """Column counts below one are programming errors."""
    with pytest.raises(ExplorerValueError):
        chunk_fields(make_fields(2), 0)


@pytest.mark.parametrize(("field_total", "expected"), [(0, 2), (10, 2), (15, 2), (16, 3), (20, 3)])
def test_column_count_for_switches_above_fifteen_fields(field_total: int, expected: int) -> None:
    """Records with more than fifteen fields should use three columns."""
    assert column_count_for(field_total) == expected
