"""Frozen Pydantic domain models shared by all modules."""

from __future__ import annotations

from urllib.parse import urlunsplit

from pydantic import AliasChoices, BaseModel, Field, field_validator

DEFAULT_SCHEME = "http"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 4444
DEFAULT_PATH = "/"


class EndpointConfig(BaseModel):
    """Location of the WebDriver endpoint the launcher attaches to.

    Accepts the runner's legacy key names (``protocol``, ``hostname``,
    ``pathname``) next to the canonical ones. Unknown keys are kept as extras
    and otherwise ignored.
    """

    model_config = {"frozen": True, "extra": "allow"}

    scheme: str = Field(default=DEFAULT_SCHEME, validation_alias=AliasChoices("scheme", "protocol"))
    host: str = Field(default=DEFAULT_HOST, validation_alias=AliasChoices("host", "hostname"))
    port: int = DEFAULT_PORT
    path: str = Field(default=DEFAULT_PATH, validation_alias=AliasChoices("path", "pathname"))

    @field_validator("scheme")
    @classmethod
    def _normalize_scheme(cls, value: str) -> str:
        # url.format-style configs spell the scheme "http:"
        scheme = value.strip().rstrip(":").lower()
        return scheme or DEFAULT_SCHEME

    @field_validator("host")
    @classmethod
    def _normalize_host(cls, value: str) -> str:
        return value.strip() or DEFAULT_HOST

    @field_validator("path")
    @classmethod
    def _normalize_path(cls, value: str) -> str:
        path = value.strip()
        if not path.startswith("/"):
            path = f"/{path}"
        return path

    @property
    def netloc(self) -> str:
        host = self.host
        if ":" in host and not host.startswith("["):
            host = f"[{host}]"
        return f"{host}:{self.port}"

    @property
    def url(self) -> str:
        """Formatted locator, e.g. ``http://127.0.0.1:4444/``."""
        return urlunsplit((self.scheme, self.netloc, self.path, "", ""))
