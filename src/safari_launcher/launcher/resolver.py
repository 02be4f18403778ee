"""Endpoint and driver-command resolution for the Safari launcher."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from safari_launcher.shared.models import EndpointConfig

# Platform -> driver executable. Only macOS ships safaridriver.
DEFAULT_CMD: dict[str, str] = {
    "darwin": "/usr/bin/safaridriver",
}

# Environment variable that overrides the platform default.
ENV_CMD = "SAFARI_BIN"


@dataclass(frozen=True, slots=True)
class DriverCommand:
    """Executable and arguments used to spawn the WebDriver endpoint."""

    executable: str | None
    args: tuple[str, ...] = ()

    def display(self) -> str:
        return " ".join([self.executable or "<unresolved>", *self.args])


def resolve_endpoint(overrides: Mapping[str, Any] | EndpointConfig | None = None) -> EndpointConfig:
    """Overlay caller-supplied endpoint fields onto the defaults.

    ``None`` values count as missing, so a runner config of
    ``{"port": None}`` still resolves to port 4444.
    """
    if isinstance(overrides, EndpointConfig):
        return overrides
    supplied = {key: value for key, value in (overrides or {}).items() if value is not None}
    return EndpointConfig.model_validate(supplied)


def format_locator(endpoint: EndpointConfig) -> str:
    return endpoint.url


def driver_args(endpoint: EndpointConfig) -> tuple[str, ...]:
    """Arguments telling the driver which port to listen on."""
    return ("-p", str(endpoint.port))


def resolve_driver_command(
    endpoint: EndpointConfig,
    *,
    platform: str | None = None,
    environ: Mapping[str, str] | None = None,
    default_cmd: Mapping[str, str] | None = None,
    env_cmd: str = ENV_CMD,
) -> DriverCommand:
    """Pick the driver executable for this platform.

    The environment override wins over the platform table. The result is not
    validated: a bad path only shows up as failed attach attempts.

    Args:
        endpoint: Resolved endpoint; its port becomes the ``-p`` argument.
        platform: ``sys.platform``-style name (default: current platform).
        environ: Environment mapping (default: ``os.environ``).
        default_cmd: Platform table (default: :data:`DEFAULT_CMD`).
        env_cmd: Name of the override variable.

    Returns:
        Command with ``executable=None`` when nothing matches.
    """
    env = os.environ if environ is None else environ
    table = DEFAULT_CMD if default_cmd is None else default_cmd
    current = sys.platform if platform is None else platform

    executable = env.get(env_cmd) or table.get(current)
    return DriverCommand(executable=executable, args=driver_args(endpoint))
