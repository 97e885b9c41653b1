"""User-facing notification channel.

This module records info and error notifications raised by session
operations and forwards them to registered listeners.
"""

from __future__ import annotations

from typing import Callable

from core.logging_config import get_logger
from core.types import Notification, NotificationLevel

_LOGGER = get_logger(__name__)

NotificationListener = Callable[[Notification], None]


class Notifier:
    """Collects notifications and fans them out to listeners."""

    def __init__(self) -> None:
        self._history: list[Notification] = []
        self._listeners: list[NotificationListener] = []

    @property
    def history(self) -> tuple[Notification, ...]:
        """Return notifications raised so far, oldest first."""
        return tuple(self._history)

    def subscribe(self, listener: NotificationListener) -> None:
        """Register a callback invoked for every new notification."""
        self._listeners.append(listener)

    def info(self, title: str, message: str) -> Notification:
        """Raise an informational notification."""
        return self._publish("info", title, message)

    def error(self, title: str, message: str) -> Notification:
        """Raise an error notification."""
        return self._publish("error", title, message)

    def has_errors(self) -> bool:
        """Return whether any error notification was raised."""
        return any(notification.level == "error" for notification in self._history)

    def _publish(self, level: NotificationLevel, title: str, message: str) -> Notification:
        notification = Notification(level=level, title=title, message=message)
        self._history.append(notification)
        _LOGGER.info("notification_raised", level=level, title=title, message=message)
        for listener in self._listeners:
            listener(notification)
        return notification
