"""Navigation and notification ports.

The portal never renders anything itself; it tells a navigator where to
go and a notifier what to show. Both are small protocols so a web
framework, a CLI or a test can plug in.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Protocol

_logger = logging.getLogger(__name__)


class NotificationLevel(StrEnum):
    SUCCESS = "success"
    ERROR = "error"


class Navigator(Protocol):
    def redirect_to(self, path: str) -> None:
        ...


class Notifier(Protocol):
    def notify(self, level: NotificationLevel, message: str) -> None:
        ...


class LoggingNotifier:
    """Notifier that writes user-facing messages to the log."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or _logger

    def notify(self, level: NotificationLevel, message: str) -> None:
        if level == NotificationLevel.ERROR:
            self._logger.warning("%s", message)
        else:
            self._logger.info("%s", message)


class PathNavigator:
    """Navigator that just remembers the last requested path."""

    def __init__(self) -> None:
        self.current_path: str | None = None

    def redirect_to(self, path: str) -> None:
        _logger.debug("Redirecting to %s", path)
        self.current_path = path
