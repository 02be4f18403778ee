"""Hierarchical exception types for the Safari launcher."""

from __future__ import annotations


class LauncherError(Exception):
    """Base exception for all launcher errors."""


# ── WebDriver ───────────────────────────────────────────────────


class WebDriverError(LauncherError):
    """Session-init, navigation or quit request failed."""


# ── Driver process ──────────────────────────────────────────────


class SpawnError(LauncherError):
    """Driver executable could not be started."""
