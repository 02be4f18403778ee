"""Shared pytest fixtures for the launcher test suite."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest

from safari_launcher.config import Settings
from safari_launcher.launcher.resolver import DriverCommand
from safari_launcher.launcher.session import SessionHandle
from safari_launcher.shared.exceptions import WebDriverError


@pytest.fixture()
def settings() -> Settings:
    """Return a Settings instance with test defaults."""
    return Settings(max_attempts=3, backoff_ms=4000, request_timeout_seconds=5)


@pytest.fixture()
def session_handle() -> SessionHandle:
    return SessionHandle(session_id="sess-0001", capabilities={"browserName": "safari"})


@pytest.fixture()
def driver_command() -> DriverCommand:
    return DriverCommand(executable="/usr/bin/safaridriver", args=("-p", "9001"))


@pytest.fixture()
def mock_client(session_handle: SessionHandle) -> AsyncMock:
    """Mock remote-session client whose init succeeds on the first call."""
    client = AsyncMock()
    client.init = AsyncMock(return_value=session_handle)
    client.get = AsyncMock(return_value=None)
    client.quit = AsyncMock(return_value=None)
    return client


@pytest.fixture()
def mock_spawner() -> AsyncMock:
    spawner = AsyncMock()
    spawner.spawn = AsyncMock(return_value=None)
    return spawner


@pytest.fixture()
def mock_sleep() -> AsyncMock:
    return AsyncMock(return_value=None)


@pytest.fixture()
def init_effects() -> Callable[[SessionHandle | None, int], list[object]]:
    """Build ``client.init`` side effects: ``failures`` refusals, then ``session``."""

    def build(session: SessionHandle | None, failures: int) -> list[object]:
        effects: list[object] = [WebDriverError("connection refused") for _ in range(failures)]
        if session is not None:
            effects.append(session)
        return effects

    return build
