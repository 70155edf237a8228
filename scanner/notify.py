from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Literal, Protocol, TextIO

logger = logging.getLogger(__name__)

NotificationLevel = Literal["success", "warning", "error"]


@dataclass(frozen=True)
class Notification:
    level: NotificationLevel
    title: str
    message: str


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None: ...


def plant_identified(scientific_name: str | None) -> Notification:
    return Notification("success", "Plant Identified!", f"Found: {scientific_name or 'unknown plant'}")


NO_MATCH_NOTIFICATION = Notification(
    "warning", "No Match Found", "Try a clearer image or different angle."
)
FAILURE_NOTIFICATION = Notification("error", "Error", "Unable to identify this plant.")

_LOG_LEVELS = {
    "success": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class LoggingNotifier:
    """Forward notifications to the application log."""

    def notify(self, notification: Notification) -> None:
        logger.log(
            _LOG_LEVELS.get(notification.level, logging.INFO),
            "%s: %s",
            notification.title,
            notification.message,
        )


class ConsoleNotifier:
    """Print notifications as one-line toasts."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def notify(self, notification: Notification) -> None:
        stream = self._stream or sys.stdout
        print(f"[{notification.level}] {notification.title} - {notification.message}", file=stream)


__all__ = [
    "ConsoleNotifier",
    "FAILURE_NOTIFICATION",
    "LoggingNotifier",
    "NO_MATCH_NOTIFICATION",
    "Notification",
    "Notifier",
    "plant_identified",
]
