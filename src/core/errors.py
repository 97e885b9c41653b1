"""Record explorer exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class ExplorerError(Exception):
    """Base exception for all record explorer failures."""


class ExplorerConfigError(ExplorerError):
    """Raised for invalid runtime configuration."""


class ExplorerSourceError(ExplorerError):
    """Raised when a record source cannot list or fetch data."""


class ExplorerViewSpecError(ExplorerError):
    """Raised for invalid or unsupported view-spec files."""


class ExplorerValueError(ExplorerError):
    """Raised when a core helper receives an unusable argument."""
