"""Fire-and-forget spawning of the WebDriver driver executable."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from safari_launcher.shared.exceptions import SpawnError

logger = logging.getLogger(__name__)


class AsyncioProcessSpawner:
    """Start the driver through an asyncio subprocess.

    Implements the ``ProcessSpawner`` protocol. The child is not awaited; its
    output is discarded and its exit is only noted at debug level.
    """

    def __init__(self) -> None:
        self._processes: list[asyncio.subprocess.Process] = []

    @property
    def processes(self) -> list[asyncio.subprocess.Process]:
        return list(self._processes)

    async def spawn(self, command: str | None, args: Sequence[str]) -> None:
        """Start ``command`` with ``args``.

        Raises:
            SpawnError: If the executable is unresolved or cannot be executed.
        """
        if not command:
            raise SpawnError("no driver executable configured for this platform")

        try:
            proc = await asyncio.create_subprocess_exec(
                command,
                *args,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except FileNotFoundError as exc:
            raise SpawnError(f"driver binary not found: {command}") from exc
        except OSError as exc:
            raise SpawnError(f"failed to start {command}: {exc}") from exc

        self._processes.append(proc)
        logger.info("spawned %s %s (pid=%s)", command, " ".join(args), proc.pid)

    async def terminate_all(self) -> None:
        """Terminate every process this spawner started and is still running."""
        for proc in self._processes:
            if proc.returncode is None:
                try:
                    proc.terminate()
                except ProcessLookupError:
                    continue
                await proc.wait()
                logger.debug("driver pid=%s exited with %s", proc.pid, proc.returncode)
        self._processes.clear()
