"""Minimal WebDriver remote-session client over HTTP."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from safari_launcher.launcher.events import NullEventSink
from safari_launcher.launcher.interfaces import EventSink
from safari_launcher.launcher.session import SessionHandle
from safari_launcher.shared.enums import DriverEvent
from safari_launcher.shared.exceptions import WebDriverError

logger = logging.getLogger(__name__)

# W3C WebDriver: https://www.w3.org/TR/webdriver2/


class WebDriverClient:
    """Session-init, navigation and quit against one WebDriver endpoint.

    Implements the ``RemoteSessionClient`` protocol. Every request reports
    ``http`` and ``command`` notifications to the event sink, and session
    changes report ``status``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        events: EventSink | None = None,
        timeout: int = 30,
        default_capabilities: dict[str, Any] | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._events: EventSink = events if events is not None else NullEventSink()
        self._timeout = timeout
        self._default_capabilities = dict(default_capabilities or {})

    @property
    def base_url(self) -> str:
        return self._base_url

    async def init(self, capabilities: dict[str, Any] | None = None) -> SessionHandle:
        """Create a new session.

        Sends the capabilities in both the W3C ``capabilities.alwaysMatch``
        form and the legacy ``desiredCapabilities`` form.

        Raises:
            WebDriverError: If the endpoint is unreachable or refuses the session.
        """
        caps = {**self._default_capabilities, **(capabilities or {})}
        payload = {"capabilities": {"alwaysMatch": caps}, "desiredCapabilities": caps}

        self._emit_command("CALL", "init", caps)
        data = await self._request("POST", "/session", payload)

        value = data.get("value")
        if not isinstance(value, dict):
            value = {}
        session_id = value.get("sessionId") or data.get("sessionId")
        if not session_id:
            raise WebDriverError(f"session-init response has no sessionId: {str(data)[:200]}")

        returned_caps = value.get("capabilities")
        if not isinstance(returned_caps, dict):
            # legacy responses put capabilities directly in value
            returned_caps = {k: v for k, v in value.items() if k != "sessionId"}

        session = SessionHandle(session_id=str(session_id), capabilities=returned_caps)
        self._emit_command("RESPONSE", "init", session.session_id)
        self._events.emit(DriverEvent.STATUS, {"info": f"Driving the web on session: {session.session_id}"})
        logger.info("webdriver session %s created at %s", session.session_id, self._base_url)
        return session

    async def get(self, session: SessionHandle, url: str) -> None:
        """Navigate ``session`` to ``url``."""
        self._emit_command("CALL", "get", url)
        await self._request("POST", f"/session/{session.session_id}/url", {"url": url})
        self._emit_command("RESPONSE", "get", url)

    async def quit(self, session: SessionHandle) -> None:
        """Delete ``session`` on the endpoint."""
        self._emit_command("CALL", "quit", session.session_id)
        await self._request("DELETE", f"/session/{session.session_id}")
        self._emit_command("RESPONSE", "quit", session.session_id)
        self._events.emit(DriverEvent.STATUS, {"info": "Ending your web drivage.."})
        logger.info("webdriver session %s ended", session.session_id)

    async def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send one WebDriver command and return the decoded JSON body."""
        body = json.dumps(payload) if payload is not None else None
        self._events.emit(DriverEvent.HTTP, {"method": method, "path": path, "data": body})

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.request(
                    method,
                    f"{self._base_url}{path}",
                    content=body,
                    headers={"Content-Type": "application/json; charset=utf-8"} if body is not None else None,
                )
        except (httpx.HTTPError, httpx.InvalidURL, OSError, OverflowError) as exc:
            raise WebDriverError(f"{method} {path} failed: {exc!r}") from exc
        except ExceptionGroup as exc:
            # anyio reports some connect failures (e.g. out-of-range port) as a task-group error
            raise WebDriverError(f"{method} {path} failed: {exc.exceptions[0]!r}") from exc

        data = _decode(resp)
        if resp.is_error:
            raise WebDriverError(f"{method} {path} returned {resp.status_code}: {_error_message(data, resp)}")
        return data

    def _emit_command(self, event_type: str, command: str, response: Any = None) -> None:
        self._events.emit(
            DriverEvent.COMMAND,
            {"event_type": event_type, "command": command, "response": response},
        )


def _decode(resp: httpx.Response) -> dict[str, Any]:
    if not resp.content:
        return {}
    try:
        data = resp.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {"value": data}


def _error_message(data: dict[str, Any], resp: httpx.Response) -> str:
    value = data.get("value")
    if isinstance(value, dict) and (value.get("error") or value.get("message")):
        return f"{value.get('error', 'error')}: {value.get('message', '')}".strip()
    return resp.text[:200]
