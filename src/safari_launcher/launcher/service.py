"""Safari launcher: the object the test runner constructs, starts and kills."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import Any

from safari_launcher.config import Settings, get_settings
from safari_launcher.launcher.attach import AttachStateMachine, Sleep
from safari_launcher.launcher.events import LoggingEventSink
from safari_launcher.launcher.gate import SessionLifecycleGate
from safari_launcher.launcher.interfaces import EventSink, ProcessSpawner, RemoteSessionClient
from safari_launcher.launcher.resolver import (
    DEFAULT_CMD,
    ENV_CMD,
    DriverCommand,
    format_locator,
    resolve_driver_command,
    resolve_endpoint,
)
from safari_launcher.launcher.session import SessionHandle
from safari_launcher.launcher.spawner import AsyncioProcessSpawner
from safari_launcher.launcher.webdriver import WebDriverClient
from safari_launcher.shared.enums import AttachState
from safari_launcher.shared.models import EndpointConfig

logger = logging.getLogger(__name__)

NAME_PREFIX = "Safari via WebDriver at "


class SafariLauncher:
    """Attach a test runner to Safari through a local ``safaridriver``.

    On ``start(url)`` the launcher checks whether a WebDriver endpoint is
    reachable at the configured location. If it is, a new session is opened
    and pointed at ``url``; if not, the launcher starts its own driver and
    keeps trying for a bounded number of attempts. ``kill`` ends the session.
    """

    DEFAULT_CMD: Mapping[str, str] = DEFAULT_CMD
    ENV_CMD: str = ENV_CMD

    def __init__(
        self,
        config: Mapping[str, Any] | EndpointConfig | None = None,
        *,
        log: logging.Logger | logging.LoggerAdapter | None = None,
        spawner: ProcessSpawner | None = None,
        client: RemoteSessionClient | None = None,
        events: EventSink | None = None,
        settings: Settings | None = None,
        environ: Mapping[str, str] | None = None,
        platform: str | None = None,
        sleep: Sleep | None = None,
    ) -> None:
        settings = settings if settings is not None else get_settings()
        self.endpoint: EndpointConfig = resolve_endpoint(config)
        self.name: str = NAME_PREFIX + format_locator(self.endpoint)
        self._log = log if log is not None else logger

        self.command: DriverCommand = resolve_driver_command(
            self.endpoint,
            platform=platform,
            environ=environ,
            default_cmd=self.DEFAULT_CMD,
            env_cmd=self.ENV_CMD,
        )
        self.spawner: ProcessSpawner = spawner if spawner is not None else AsyncioProcessSpawner()
        self.client: RemoteSessionClient = (
            client
            if client is not None
            else WebDriverClient(
                self.endpoint.url,
                events=events if events is not None else LoggingEventSink(self._log),
                timeout=settings.request_timeout_seconds,
                default_capabilities={"browserName": settings.browser_name},
            )
        )
        self._gate = SessionLifecycleGate(self.client, log=self._log)
        self._machine = AttachStateMachine(
            self.client,
            self.spawner,
            self.command,
            self._gate,
            max_attempts=settings.max_attempts,
            backoff_seconds=settings.backoff_seconds,
            sleep=sleep,
            log=self._log,
        )
        self._task: asyncio.Task[AttachState] | None = None

    @property
    def state(self) -> AttachState:
        return self._machine.state

    @property
    def attempts(self) -> int:
        return self._machine.attempts

    @property
    def history(self) -> list[AttachState]:
        return self._machine.history

    @property
    def session(self) -> SessionHandle | None:
        return self._gate.session

    def start(self, url: str) -> None:
        """Schedule an attach run that ends with the session showing ``url``.

        Returns immediately; the outcome is visible through :attr:`state`,
        the log, and :meth:`wait`. Must be called from a running event loop.
        """
        if not url:
            raise ValueError("start() needs a non-empty target URL")
        if self._task is not None and not self._task.done():
            self._log.warning("attach already in progress for %s", self.name)
            return
        if self._gate.killed:
            self._log.warning("%s was killed; not starting again", self.name)
            return
        if self._gate.session is not None:
            self._log.warning("%s already holds session %s", self.name, self._gate.session.session_id)
            return

        self._log.debug("starting %s for %s", self.name, url)
        self._task = asyncio.get_running_loop().create_task(self._machine.run(url))
        self._task.add_done_callback(self._on_run_done)

    async def wait(self) -> AttachState:
        """Wait for the current attach run (if any) and return the state."""
        if self._task is not None:
            await self._task
        return self._machine.state

    async def kill(self, done: Callable[[], object] | None = None) -> None:
        """Handle the runner's kill signal; ``done`` is always called once.

        Quits the session, then stops any driver this launcher spawned.
        """
        await self._gate.kill()
        await self.spawner.terminate_all()
        if done is not None:
            done()

    def _on_run_done(self, task: asyncio.Task[AttachState]) -> None:
        if task.cancelled():
            self._log.debug("attach run for %s cancelled", self.name)
            return
        exc = task.exception()
        if exc is not None:
            self._log.error("attach run for %s crashed: %s", self.name, exc, exc_info=exc)
