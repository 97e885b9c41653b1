"""Public SDK surface for the record explorer.

This module provides a stable import path for library users.
It re-exports the session, sources, engine functions, and typed models.
"""

from __future__ import annotations

from core.config import ExplorerConfig
from core.errors import (
    ExplorerConfigError,
    ExplorerError,
    ExplorerSourceError,
    ExplorerValueError,
    ExplorerViewSpecError,
)
from core.label_format import prettify_field_label
from core.types import (
    ExplorerSnapshot,
    Field,
    FieldChunk,
    FieldOption,
    Filter,
    Notification,
    Record,
)
from core.view_spec import ViewSpec, ViewSpecFilter, load_view_spec
from explore.chunking import chunk_fields
from explore.field_search import apply_record_field_search, search_fields, search_record_fields
from explore.record_filtering import apply_filters, normalize_operator
from explore.record_projection import build_field_options, project_record, project_records
from explore.record_search import apply_search, select_search_source
from session.debounce import Debouncer
from session.explorer_session import ExplorerSession
from session.view_replay import replay_view_spec
from sources.file_source import FileRecordSource
from sources.memory_source import InMemoryRecordSource
from sources.record_source import RecordSource

__all__ = [
    "Debouncer",
    "ExplorerConfig",
    "ExplorerConfigError",
    "ExplorerError",
    "ExplorerSession",
    "ExplorerSnapshot",
    "ExplorerSourceError",
    "ExplorerValueError",
    "ExplorerViewSpecError",
    "Field",
    "FieldChunk",
    "FieldOption",
    "FileRecordSource",
    "Filter",
    "InMemoryRecordSource",
    "Notification",
    "Record",
    "RecordSource",
    "ViewSpec",
    "ViewSpecFilter",
    "apply_filters",
    "apply_record_field_search",
    "apply_search",
    "build_field_options",
    "chunk_fields",
    "load_view_spec",
    "normalize_operator",
    "prettify_field_label",
    "project_record",
    "project_records",
    "replay_view_spec",
    "search_fields",
    "search_record_fields",
    "select_search_source",
]
