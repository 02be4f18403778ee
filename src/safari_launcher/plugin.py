"""Launcher registry published to the test runner's plugin loader."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from safari_launcher.launcher.service import SafariLauncher
from safari_launcher.shared.exceptions import LauncherError

# Same shape as the runner's DI modules: name -> (provider kind, factory)
LAUNCHERS: dict[str, tuple[str, type[SafariLauncher]]] = {
    "launcher:Safari": ("type", SafariLauncher),
}


def create_launcher(name: str, args: Mapping[str, Any] | None = None, **kwargs: Any) -> SafariLauncher:
    """Instantiate the launcher registered as ``name``.

    Args:
        name: Registry key, either ``"launcher:Safari"`` or just ``"Safari"``.
        args: Runner-supplied launcher arguments; the endpoint overrides are
            read from its ``config`` key.
        **kwargs: Passed through to the launcher (logger, spawner, ...).

    Raises:
        LauncherError: If no launcher is registered under ``name``.
    """
    key = name if name.startswith("launcher:") else f"launcher:{name}"
    try:
        kind, factory = LAUNCHERS[key]
    except KeyError:
        raise LauncherError(f"unknown launcher: {name}") from None
    if kind != "type":
        raise LauncherError(f"unsupported provider kind {kind!r} for {key}")
    return factory((args or {}).get("config"), **kwargs)
