"""Domain enumerations used across all modules."""

from __future__ import annotations

from enum import Enum, unique


@unique
class AttachState(str, Enum):
    """States of one attach run started by ``start(url)``."""

    INIT = "init"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    RETRY_WAIT = "retry_wait"
    SPAWNED_RETRY = "spawned_retry"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (AttachState.CONNECTED, AttachState.FAILED)


@unique
class DriverEvent(str, Enum):
    """Notification channels emitted by the WebDriver client."""

    STATUS = "status"
    COMMAND = "command"
    HTTP = "http"
