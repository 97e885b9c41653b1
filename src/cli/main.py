"""Record explorer CLI entry points.
This module exposes commands for listing record types and fields and
for exploring records with filters and search. It maps argparse
commands onto explorer session calls.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from cli.record_render import render_records
from core.config import ExplorerConfig
from core.constants import SUPPORTED_FILTER_OPERATORS, VIEW_SPEC_VERSION
from core.types import Notification
from core.view_spec import ViewSpec, ViewSpecFilter, load_view_spec
from session.explorer_session import ExplorerSession
from session.view_replay import replay_view_spec
from sources.file_source import FileRecordSource

NO_RECORDS_MESSAGE = "No records found."


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="record-explorer",
        description="Explore, filter, and search records by type",
    )
    parser.add_argument("--data-root", help="Override EXPLORER_DATA_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_objects_command(subparsers)
    _add_fields_command(subparsers)
    _add_explore_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the record explorer CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    session = _build_session(args.data_root)
    if args.command == "objects":
        return _run_objects_command(session)
    if args.command == "fields":
        return _run_fields_command(session, args)
    if args.command == "explore":
        view_spec = _build_view_spec(parser, args)
        return _run_explore_command(session, view_spec, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_session(data_root: str | None) -> ExplorerSession:
    """Build a file-backed session with optional data-root override.

    Args:
        data_root: Optional override path.

    Returns:
        Session whose debounced steps run inline.
    """
    config = ExplorerConfig.from_env().without_debounce()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    session = ExplorerSession(FileRecordSource(config.data_root), config)
    session.notifier.subscribe(_print_notification)
    return session


def _run_objects_command(session: ExplorerSession) -> int:
    """Handle objects command.

    Args:
        session: Explorer session.

    Returns:
        Exit code.
    """
    for object_name in session.load_objects():
        print(object_name)
    return _exit_code(session)


def _run_fields_command(session: ExplorerSession, args: argparse.Namespace) -> int:
    """Handle fields command.

    Args:
        session: Explorer session.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    session.select_object(args.object)
    session.flush_pending()
    for option in session.snapshot.field_options:
        print(f"{option.value}\t{option.label}")
    return _exit_code(session)


def _run_explore_command(
    session: ExplorerSession,
    view_spec: ViewSpec,
    args: argparse.Namespace,
) -> int:
    """Handle explore command.

    Args:
        session: Explorer session.
        view_spec: Merged view description from file and flags.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    replay_view_spec(session, view_spec)
    if args.expand:
        session.toggle_expand(args.expand)
        if args.field_search:
            session.search_record_fields(args.expand, args.field_search)
    snapshot = session.snapshot
    if snapshot.no_records:
        print(NO_RECORDS_MESSAGE)
    for line in render_records(snapshot.records):
        print(line)
    return _exit_code(session)


def _build_view_spec(parser: argparse.ArgumentParser, args: argparse.Namespace) -> ViewSpec:
    """Merge an optional view-spec file with command line flags.

    Flags win for object and search; flag filters are appended.

    Args:
        parser: Parser used to report usage errors.
        args: Parsed CLI args.

    Returns:
        View description to replay.
    """
    base_spec = load_view_spec(args.view_spec) if args.view_spec else None
    object_name = args.object or (base_spec.object_name if base_spec else "")
    if not object_name:
        parser.error("explore requires --object or a --view-spec naming an object")
    flag_filters = tuple(
        ViewSpecFilter(field=field, operator=operator, value=value)
        for field, operator, value in args.filter or ()
    )
    if base_spec is None:
        return ViewSpec(
            version=VIEW_SPEC_VERSION,
            object_name=object_name,
            filters=flag_filters,
            search=args.search or "",
        )
    return replace(
        base_spec,
        object_name=object_name,
        filters=base_spec.filters + flag_filters,
        search=base_spec.search if args.search is None else args.search,
    )


def _exit_code(session: ExplorerSession) -> int:
    return 1 if session.notifier.has_errors() else 0


def _print_notification(notification: Notification) -> None:
    print(
        f"[{notification.level}] {notification.title}: {notification.message}",
        file=sys.stderr,
    )


def _add_objects_command(subparsers: Any) -> None:
    """Register objects subcommand."""
    subparsers.add_parser("objects", help="List available record types")


def _add_fields_command(subparsers: Any) -> None:
    """Register fields subcommand."""
    parser = subparsers.add_parser("fields", help="List fields of a record type")
    parser.add_argument("--object", required=True, help="Record type name")


def _add_explore_command(subparsers: Any) -> None:
    """Register explore subcommand."""
    parser = subparsers.add_parser(
        "explore",
        help="Fetch records of a type and narrow them with filters and search",
    )
    parser.add_argument("--object", help="Record type name")
    parser.add_argument("--view-spec", help="Optional YAML view-spec file")
    parser.add_argument(
        "--filter",
        nargs=3,
        action="append",
        metavar=("FIELD", "OPERATOR", "VALUE"),
        help=f"Field filter, repeatable; operators: {', '.join(SUPPORTED_FILTER_OPERATORS)}",
    )
    parser.add_argument("--search", help="Free-text search over names and values")
    parser.add_argument("--expand", metavar="RECORD_ID", help="Show all fields of one record")
    parser.add_argument(
        "--field-search",
        help="Narrow the fields of the expanded record by name, label, or value",
    )
