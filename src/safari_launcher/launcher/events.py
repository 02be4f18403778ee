"""Forward WebDriver client notifications to a logger."""

from __future__ import annotations

import logging
from typing import Any

from safari_launcher.shared.enums import DriverEvent

logger = logging.getLogger(__name__)


class LoggingEventSink:
    """Write every client notification to ``log`` at debug level.

    Implements the ``EventSink`` protocol. Field contents are not interpreted.
    """

    def __init__(self, log: logging.Logger | logging.LoggerAdapter | None = None) -> None:
        self._log = log if log is not None else logger

    def emit(self, event: str, fields: dict[str, Any]) -> None:
        if event == DriverEvent.STATUS:
            self._log.debug("%s", fields.get("info", ""))
        elif event == DriverEvent.COMMAND:
            self._log.debug(
                "%s %s %s",
                fields.get("event_type", ""),
                fields.get("command", ""),
                fields.get("response") or "",
            )
        elif event == DriverEvent.HTTP:
            self._log.debug(
                "%s %s %s",
                fields.get("method", ""),
                fields.get("path", ""),
                fields.get("data") or "",
            )
        else:
            self._log.debug("%s %s", event, fields)


class NullEventSink:
    """Discard all notifications."""

    def emit(self, event: str, fields: dict[str, Any]) -> None:
        return None
