"""Runtime configuration model for the record explorer.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DATA_ROOT,
    DEFAULT_FIELD_DEBOUNCE_MS,
    DEFAULT_SEARCH_DEBOUNCE_MS,
)
from core.errors import ExplorerConfigError


@dataclass(frozen=True)
class ExplorerConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local directory holding one record file per object type.
        search_debounce_seconds: Quiet period before a typed search runs.
        field_debounce_seconds: Quiet period before a field list loads.
    """

    data_root: Path
    search_debounce_seconds: float
    field_debounce_seconds: float

    @classmethod
    def from_env(cls) -> "ExplorerConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            ExplorerConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("EXPLORER_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        search_debounce_ms = _parse_delay_ms(
            "EXPLORER_SEARCH_DEBOUNCE_MS",
            os.getenv("EXPLORER_SEARCH_DEBOUNCE_MS", str(DEFAULT_SEARCH_DEBOUNCE_MS)),
        )
        field_debounce_ms = _parse_delay_ms(
            "EXPLORER_FIELD_DEBOUNCE_MS",
            os.getenv("EXPLORER_FIELD_DEBOUNCE_MS", str(DEFAULT_FIELD_DEBOUNCE_MS)),
        )
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            search_debounce_seconds=search_debounce_ms / 1000,
            field_debounce_seconds=field_debounce_ms / 1000,
        )

    def without_debounce(self) -> "ExplorerConfig":
        """Return a copy whose debounced entry points run inline."""
        return ExplorerConfig(
            data_root=self.data_root,
            search_debounce_seconds=0.0,
            field_debounce_seconds=0.0,
        )


def _parse_delay_ms(variable_name: str, raw_value: str) -> int:
    """Parse a millisecond delay environment value.

    Args:
        variable_name: Environment variable name for error messages.
        raw_value: Raw string from environment.

    Returns:
        Parsed non-negative delay in milliseconds.

    Raises:
        ExplorerConfigError: If value is not a non-negative integer.
    """
    try:
        delay_ms = int(raw_value)
    except ValueError as error:
        raise ExplorerConfigError(
            f"Invalid {variable_name} value: "
            f"expected integer milliseconds, got '{raw_value}'. "
            f"Set {variable_name} to a numeric value."
        ) from error
    if delay_ms < 0:
        raise ExplorerConfigError(
            f"Invalid {variable_name} value: expected a non-negative delay, "
            f"got {delay_ms}. Use 0 to disable debouncing."
        )
    return delay_ms
