"""File-backed record source.

This module serves record types stored as one file per type under a
data root. JSONL, JSON, and YAML files are supported.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence, cast

import yaml

from core.constants import SUPPORTED_SOURCE_EXTENSIONS
from core.errors import ExplorerSourceError
from sources.memory_source import collect_field_names
from sources.record_source import RawRow


@dataclass(frozen=True)
class ObjectPayload:
    """Parsed contents of one record type file.

    Attributes:
        rows: Raw rows in file order.
        fields: Explicit field identifiers, or None to derive from rows.
    """

    rows: tuple[RawRow, ...]
    fields: tuple[str, ...] | None


class FileRecordSource:
    """Record source reading ``<object>.<ext>`` files from a directory."""

    def __init__(self, data_root: Path) -> None:
        """Create a file-backed source.

        Args:
            data_root: Directory containing record type files.
        """
        self._data_root = data_root

    def list_objects(self) -> list[str]:
        """List record types available under the data root.

        Returns:
            Sorted record type names.

        Raises:
            ExplorerSourceError: If the data root does not exist.
        """
        if not self._data_root.is_dir():
            raise ExplorerSourceError(
                f"Data root not found at {self._data_root}. "
                "Set EXPLORER_DATA_ROOT or pass --data-root with an existing directory."
            )
        names: dict[str, None] = {}
        for file_path in sorted(self._data_root.iterdir()):
            if file_path.is_file() and file_path.suffix.lower() in SUPPORTED_SOURCE_EXTENSIONS:
                names.setdefault(file_path.stem, None)
        return list(names)

    def list_fields(self, object_name: str) -> list[str]:
        payload = self._load_payload(object_name)
        if payload.fields is not None:
            return list(payload.fields)
        return collect_field_names(payload.rows)

    def fetch_records(self, object_name: str) -> list[RawRow]:
        return list(self._load_payload(object_name).rows)

    def _load_payload(self, object_name: str) -> ObjectPayload:
        file_path = self._resolve_object_file(object_name)
        if file_path.suffix.lower() == ".jsonl":
            return ObjectPayload(rows=_read_jsonl_rows(file_path), fields=None)
        return _parse_document(file_path, _read_document(file_path))

    def _resolve_object_file(self, object_name: str) -> Path:
        for extension in SUPPORTED_SOURCE_EXTENSIONS:
            candidate = self._data_root / f"{object_name}{extension}"
            if candidate.is_file():
                return candidate
        raise ExplorerSourceError(
            f"No record file found for object '{object_name}' under {self._data_root}. "
            f"Supported extensions: {SUPPORTED_SOURCE_EXTENSIONS}."
        )


def _read_jsonl_rows(file_path: Path) -> tuple[RawRow, ...]:
    """Read one row per non-empty JSONL line.

    Args:
        file_path: Path to JSONL file.

    Returns:
        Parsed rows in line order.

    Raises:
        ExplorerSourceError: If a line is not a JSON object.
    """
    rows: list[RawRow] = []
    for line_number, line in enumerate(_read_text(file_path).splitlines(), 1):
        if not line.strip():
            continue
        try:
            payload = json.loads(line)
        except json.JSONDecodeError as error:
            raise ExplorerSourceError(
                f"Failed to parse JSONL row at {file_path}:{line_number}: "
                f"{error.msg}. Fix the JSON syntax and retry."
            ) from error
        rows.append(_expect_row(payload, f"{file_path}:{line_number}"))
    return tuple(rows)


def _read_document(file_path: Path) -> object:
    text = _read_text(file_path)
    try:
        if file_path.suffix.lower() == ".json":
            return cast(object, json.loads(text))
        return cast(object, yaml.safe_load(text))
    except json.JSONDecodeError as error:
        raise ExplorerSourceError(
            f"Failed to parse JSON records at {file_path}: {error.msg}. Fix the JSON syntax."
        ) from error
    except yaml.YAMLError as error:
        raise ExplorerSourceError(
            f"Failed to parse YAML records at {file_path}: {error}. Fix the YAML syntax."
        ) from error


def _parse_document(file_path: Path, document: object) -> ObjectPayload:
    """Interpret a JSON or YAML document as rows plus optional fields.

    Args:
        file_path: Source file for error context.
        document: Parsed document, either a row list or a mapping with
            ``records`` and optional ``fields`` keys.

    Returns:
        Parsed payload.

    Raises:
        ExplorerSourceError: If the document shape is unsupported.
    """
    if document is None:
        return ObjectPayload(rows=(), fields=None)
    if isinstance(document, list):
        return ObjectPayload(rows=_expect_rows(document, str(file_path)), fields=None)
    if isinstance(document, Mapping):
        raw_rows = document.get("records", [])
        if not isinstance(raw_rows, list):
            raise ExplorerSourceError(
                f"Invalid records in {file_path}: expected 'records' to be a list."
            )
        return ObjectPayload(
            rows=_expect_rows(raw_rows, str(file_path)),
            fields=_parse_field_list(file_path, document.get("fields")),
        )
    raise ExplorerSourceError(
        f"Invalid record file {file_path}: expected a list of rows or a mapping "
        f"with 'records', got {type(document).__name__}."
    )


def _parse_field_list(file_path: Path, raw_fields: object) -> tuple[str, ...] | None:
    if raw_fields is None:
        return None
    if not isinstance(raw_fields, list) or not all(isinstance(item, str) for item in raw_fields):
        raise ExplorerSourceError(
            f"Invalid fields in {file_path}: expected 'fields' to be a list of strings."
        )
    return tuple(raw_fields)


def _expect_rows(raw_rows: Sequence[object], context: str) -> tuple[RawRow, ...]:
    return tuple(
        _expect_row(raw_row, f"{context}[{index}]") for index, raw_row in enumerate(raw_rows)
    )


def _expect_row(payload: object, context: str) -> RawRow:
    if not isinstance(payload, Mapping):
        raise ExplorerSourceError(
            f"Invalid row at {context}: expected an object mapping, "
            f"got {type(payload).__name__}."
        )
    return {str(key): value for key, value in payload.items()}


def _read_text(file_path: Path) -> str:
    try:
        return file_path.read_text(encoding="utf-8")
    except OSError as error:
        raise ExplorerSourceError(
            f"Failed to read records at {file_path}: {error}. Check file permissions and retry."
        ) from error
