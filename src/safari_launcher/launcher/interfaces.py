"""Protocol interfaces for launcher dependency injection."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from safari_launcher.launcher.session import SessionHandle


@runtime_checkable
class ProcessSpawner(Protocol):
    """Protocol for starting the driver executable."""

    async def spawn(self, command: str | None, args: Sequence[str]) -> None:
        """Start ``command`` with ``args`` and return without waiting for it.

        Args:
            command: Executable path; ``None`` when it could not be resolved
            args: Command-line arguments

        Raises:
            SpawnError: If the process could not be started
        """
        ...

    async def terminate_all(self) -> None:
        """Stop every driver process started through :meth:`spawn`."""
        ...


@runtime_checkable
class RemoteSessionClient(Protocol):
    """Protocol for the WebDriver remote-automation client."""

    async def init(self, capabilities: dict[str, Any] | None = None) -> SessionHandle:
        """Create a new remote session.

        Args:
            capabilities: Requested capabilities

        Returns:
            Handle for the new session

        Raises:
            WebDriverError: If the endpoint is unreachable or refuses the session
        """
        ...

    async def get(self, session: SessionHandle, url: str) -> None:
        """Navigate the session to ``url``.

        Raises:
            WebDriverError: If navigation fails
        """
        ...

    async def quit(self, session: SessionHandle) -> None:
        """End the session.

        Raises:
            WebDriverError: If the delete request fails
        """
        ...


@runtime_checkable
class EventSink(Protocol):
    """Receiver for out-of-band client notifications."""

    def emit(self, event: str, fields: dict[str, Any]) -> None: ...
