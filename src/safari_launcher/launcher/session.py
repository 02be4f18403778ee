"""Runtime handle for one remote automation session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class SessionHandle:
    """Session returned by the WebDriver client on a successful init."""

    session_id: str
    capabilities: dict[str, Any] = field(default_factory=dict)
