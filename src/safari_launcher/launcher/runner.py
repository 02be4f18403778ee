"""Command-line runner: attach Safari to a URL and hold the session until signalled."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import signal
from typing import Any

from safari_launcher.config import Settings, get_settings
from safari_launcher.launcher.service import SafariLauncher
from safari_launcher.shared.enums import AttachState

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Open a URL in Safari through safaridriver and keep it open.")
    parser.add_argument("url", help="Page the WebDriver session should load")
    parser.add_argument("--scheme", default=None, help="WebDriver endpoint scheme (default: http)")
    parser.add_argument("--host", default=None, help="WebDriver endpoint host (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=None, help="WebDriver endpoint port (default: 4444)")
    parser.add_argument("--path", default=None, help="WebDriver endpoint base path (default: /)")
    return parser.parse_args(argv)


def endpoint_overrides(args: argparse.Namespace) -> dict[str, Any]:
    return {"scheme": args.scheme, "host": args.host, "port": args.port, "path": args.path}


async def run(url: str, overrides: dict[str, Any], settings: Settings, *, stop: asyncio.Event | None = None) -> int:
    """Attach to ``url``, then wait for ``stop`` (or SIGINT/SIGTERM) and kill.

    Returns:
        Process exit code: 0 after a clean kill, 1 if the attach failed.
    """
    launcher = SafariLauncher(overrides, settings=settings)
    logger.info("launching %s", launcher.name)

    launcher.start(url)
    state = await launcher.wait()

    if state is AttachState.CONNECTED:
        if stop is None:
            stop = asyncio.Event()
            loop = asyncio.get_running_loop()
            for sig in (signal.SIGINT, signal.SIGTERM):
                with contextlib.suppress(NotImplementedError):
                    loop.add_signal_handler(sig, stop.set)
        logger.info("session %s open on %s; waiting for signal", launcher.session.session_id, url)
        await stop.wait()

    await launcher.kill(lambda: logger.info("%s killed", launcher.name))
    return 0 if state is AttachState.CONNECTED else 1


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``python -m safari_launcher.launcher.runner``."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = _parse_args(argv)
    return asyncio.run(run(args.url, endpoint_overrides(args), settings))


if __name__ == "__main__":
    raise SystemExit(main())
