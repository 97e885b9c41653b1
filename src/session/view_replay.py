"""View-spec replay through an explorer session.

This module maps a validated view spec onto session operations so the
CLI and SDK reach the same displayed set through one code path.
"""

from __future__ import annotations

from core.types import Record
from core.view_spec import ViewSpec
from session.explorer_session import ExplorerSession


def replay_view_spec(session: ExplorerSession, view_spec: ViewSpec) -> tuple[Record, ...]:
    """Drive a session through the selection, filters, and search of a view spec.

    Debounced steps are flushed so the returned records are final.

    Args:
        session: Session to drive.
        view_spec: Validated view description.

    Returns:
        Displayed records after replay.
    """
    session.select_object(view_spec.object_name)
    session.flush_pending()
    session.fetch_records()
    if not session.snapshot.full_records:
        return session.snapshot.records
    for view_filter in view_spec.filters:
        session.add_filter(
            field=view_filter.field,
            operator=view_filter.operator,
            value=view_filter.value,
        )
    if view_spec.filters:
        session.apply_filters()
    if view_spec.search:
        session.set_search_term(view_spec.search)
        session.flush_pending()
    return session.snapshot.records
