"""Centralised configuration via Pydantic Settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Launcher configuration loaded from environment variables."""

    model_config = {"env_prefix": "SAFARI_LAUNCHER_", "frozen": True}

    # Attach retry policy
    max_attempts: int = 3
    backoff_ms: int = 4000

    # WebDriver client
    request_timeout_seconds: int = 30
    browser_name: str = "safari"

    # Runner CLI
    log_level: str = "INFO"

    @property
    def backoff_seconds(self) -> float:
        return self.backoff_ms / 1000


def get_settings() -> Settings:
    """Factory; allows overriding in tests."""
    return Settings()
