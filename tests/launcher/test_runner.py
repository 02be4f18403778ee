"""Tests for the command-line runner."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from safari_launcher.config import Settings
from safari_launcher.launcher import runner
from safari_launcher.shared.enums import AttachState


@pytest.fixture
def fake_launcher() -> MagicMock:
    launcher = MagicMock()
    launcher.name = "Safari via WebDriver at http://127.0.0.1:4444/"
    launcher.kill = AsyncMock()
    return launcher


class TestParseArgs:
    def test_endpoint_overrides(self) -> None:
        args = runner._parse_args(["http://localhost:9876/run", "--port", "9001"])

        assert args.url == "http://localhost:9876/run"
        assert runner.endpoint_overrides(args) == {"scheme": None, "host": None, "port": 9001, "path": None}


class TestRun:
    async def test_connected_then_stopped(self, fake_launcher: MagicMock, settings: Settings) -> None:
        fake_launcher.wait = AsyncMock(return_value=AttachState.CONNECTED)
        stop = asyncio.Event()
        stop.set()

        with patch.object(runner, "SafariLauncher", return_value=fake_launcher) as factory:
            code = await runner.run("http://localhost:9876/run", {"port": 9001}, settings, stop=stop)

        assert code == 0
        assert factory.call_args.args[0] == {"port": 9001}
        fake_launcher.start.assert_called_once_with("http://localhost:9876/run")
        fake_launcher.kill.assert_awaited_once()

    async def test_failed_attach_exits_nonzero(self, fake_launcher: MagicMock, settings: Settings) -> None:
        fake_launcher.wait = AsyncMock(return_value=AttachState.FAILED)

        with patch.object(runner, "SafariLauncher", return_value=fake_launcher):
            code = await runner.run("http://localhost:9876/run", {}, settings)

        assert code == 1
        fake_launcher.kill.assert_awaited_once()
