"""Retrying connect / spawn / attach loop for the WebDriver endpoint."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from safari_launcher.launcher.gate import SessionLifecycleGate
from safari_launcher.launcher.interfaces import ProcessSpawner, RemoteSessionClient
from safari_launcher.launcher.resolver import DriverCommand
from safari_launcher.launcher.session import SessionHandle
from safari_launcher.shared.enums import AttachState
from safari_launcher.shared.exceptions import SpawnError, WebDriverError

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3
BACKOFF_SECONDS = 4.0

Sleep = Callable[[float], Awaitable[Any]]


class AttachStateMachine:
    """Drive one ``start(url)`` from nothing listening to a navigated session.

    The first failed session-init is taken to mean the driver is not running:
    the driver is spawned once and init is retried straight away. Later
    failures mean the driver is still starting, so each one waits the backoff
    interval before the next init. Once the failure count exceeds
    ``max_attempts`` the run ends in ``FAILED`` with an error log record.
    A successful init is bound to the gate and navigated to the target URL.

    Attempts are strictly sequential; spawn happens at most once per run.
    """

    def __init__(
        self,
        client: RemoteSessionClient,
        spawner: ProcessSpawner,
        command: DriverCommand,
        gate: SessionLifecycleGate,
        *,
        max_attempts: int = MAX_ATTEMPTS,
        backoff_seconds: float = BACKOFF_SECONDS,
        capabilities: dict[str, Any] | None = None,
        sleep: Sleep | None = None,
        log: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self._client = client
        self._spawner = spawner
        self._command = command
        self._gate = gate
        self._max_attempts = max_attempts
        self._backoff_seconds = backoff_seconds
        self._capabilities = dict(capabilities or {})
        self._sleep: Sleep = sleep if sleep is not None else asyncio.sleep
        self._log = log if log is not None else logger

        self._state = AttachState.INIT
        self._attempts = 0
        self._history: list[AttachState] = [AttachState.INIT]

    @property
    def state(self) -> AttachState:
        return self._state

    @property
    def attempts(self) -> int:
        return self._attempts

    @property
    def history(self) -> list[AttachState]:
        """Every state entered during the latest run, in order."""
        return list(self._history)

    async def run(self, url: str) -> AttachState:
        """Attach and navigate to ``url``; return the terminal state."""
        self._attempts = 0
        self._history = []
        self._enter(AttachState.INIT)

        while True:
            if self._gate.killed:
                return self._stop_after_kill()
            self._enter(AttachState.CONNECTING)
            try:
                session = await self._client.init(self._capabilities)
            except WebDriverError as exc:
                self._attempts += 1
                if await self._on_failure(exc):
                    continue
                return self._state

            self._attempts += 1
            return await self._on_success(session, url)

    async def _on_failure(self, exc: WebDriverError) -> bool:
        """Apply the failure transition; return True when another attempt follows."""
        n = self._attempts
        self._log.debug("attach attempt %d of %d failed: %s", n, self._max_attempts, exc)
        if self._gate.killed:
            self._stop_after_kill()
            return False

        if n == 1:
            self._enter(AttachState.SPAWNED_RETRY)
            self._log.debug("%s is not running", self._command.executable)
            self._log.debug("attempting to start %s", self._command.display())
            await self._spawn()
            return True

        if n <= self._max_attempts:
            self._enter(AttachState.RETRY_WAIT)
            self._log.debug(
                "giving the driver time to start up; sleeping for %dms",
                int(self._backoff_seconds * 1000),
            )
            await self._sleep(self._backoff_seconds)
            return True

        self._enter(AttachState.FAILED)
        self._log.error("could not connect to Safari after %d attempts", n)
        return False

    async def _on_success(self, session: SessionHandle, url: str) -> AttachState:
        if not self._gate.bind(session):
            # kill arrived while this init was in flight
            self._log.debug("kill delivered during attach; ending late session %s", session.session_id)
            try:
                await self._client.quit(session)
            except WebDriverError as exc:
                self._log.debug("quit of late session %s failed: %s", session.session_id, exc)
            self._enter(AttachState.FAILED)
            return self._state

        self._log.debug("connected to Safari WebDriver")
        self._log.debug("connecting to %s", url)
        try:
            await self._client.get(session, url)
        except WebDriverError as exc:
            self._log.error("navigation to %s failed: %s", url, exc)
            self._enter(AttachState.FAILED)
            return self._state

        self._enter(AttachState.CONNECTED)
        return self._state

    async def _spawn(self) -> None:
        # spawn failure looks the same as a slow driver start
        try:
            await self._spawner.spawn(self._command.executable, list(self._command.args))
        except SpawnError as exc:
            self._log.debug("driver spawn failed: %s", exc)

    def _stop_after_kill(self) -> AttachState:
        self._log.debug("kill delivered during attach; giving up after %d attempts", self._attempts)
        self._enter(AttachState.FAILED)
        return self._state

    def _enter(self, state: AttachState) -> None:
        self._state = state
        self._history.append(state)
