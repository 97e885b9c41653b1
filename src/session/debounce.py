"""Trailing-edge debouncing for rapid user input.

This module delays a callable until input has been quiet for a fixed
window. Each new call replaces the pending one, so only the latest
arguments run.
"""

from __future__ import annotations

import threading
from typing import Any, Callable

from core.logging_config import get_logger

_LOGGER = get_logger(__name__)

PendingCall = tuple[tuple[Any, ...], dict[str, Any]]


class Debouncer:
    """Trailing-edge debounce wrapper around a callable.

    A non-positive delay runs calls inline on the calling thread.
    """

    def __init__(self, function: Callable[..., Any], delay_seconds: float) -> None:
        """Create a debouncer.

        Args:
            function: Callable to run after the quiet period.
            delay_seconds: Quiet period length in seconds.
        """
        self._function = function
        self._delay_seconds = delay_seconds
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._pending: PendingCall | None = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        """Return whether a call is waiting for its quiet period."""
        with self._lock:
            return self._pending is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        if self._delay_seconds <= 0:
            self.cancel()
            self._function(*args, **kwargs)
            return
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            self._pending = (args, kwargs)
            self._timer = threading.Timer(
                self._delay_seconds, self._fire, args=(self._generation,)
            )
            self._timer.daemon = True
            self._timer.start()

    def flush(self) -> None:
        """Run the pending call immediately, if any."""
        with self._lock:
            call = self._take_pending_locked()
        self._run(call)

    def cancel(self) -> None:
        """Drop the pending call without running it."""
        with self._lock:
            self._take_pending_locked()

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A newer call rescheduled the timer after this one expired.
            if generation != self._generation:
                return
            call = self._take_pending_locked()
        # Timer threads have no caller to propagate to.
        try:
            self._run(call)
        except Exception as error:
            _LOGGER.error(
                "debounced_call_failed",
                function=getattr(self._function, "__qualname__", repr(self._function)),
                error_type=type(error).__name__,
                error=str(error),
            )

    def _take_pending_locked(self) -> PendingCall | None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        call = self._pending
        self._pending = None
        return call

    def _run(self, call: PendingCall | None) -> None:
        if call is None:
            return
        args, kwargs = call
        self._function(*args, **kwargs)
