"""One-shot binding between the attached session and the runner's kill signal."""

from __future__ import annotations

import logging
from collections.abc import Callable

from safari_launcher.launcher.interfaces import RemoteSessionClient
from safari_launcher.launcher.session import SessionHandle
from safari_launcher.shared.exceptions import WebDriverError

logger = logging.getLogger(__name__)


class SessionLifecycleGate:
    """Own the live session handle and quit it exactly once on kill."""

    def __init__(
        self,
        client: RemoteSessionClient,
        *,
        log: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self._client = client
        self._log = log if log is not None else logger
        self._session: SessionHandle | None = None
        self._killed = False

    @property
    def session(self) -> SessionHandle | None:
        return self._session

    @property
    def killed(self) -> bool:
        return self._killed

    def bind(self, session: SessionHandle) -> bool:
        """Hold ``session`` until kill. Returns False once kill has been delivered."""
        if self._killed:
            return False
        self._session = session
        return True

    async def kill(self, done: Callable[[], object] | None = None) -> None:
        """Quit the bound session (if any), then call ``done``.

        Quit failures are logged and otherwise treated like success. Only the
        first delivery touches the client; later ones just call ``done``.
        """
        if self._killed:
            self._log.debug("kill already delivered")
        else:
            self._killed = True
            session, self._session = self._session, None
            if session is None:
                self._log.debug("kill before attach; no session to quit")
            else:
                await self._quit(session)

        if done is not None:
            done()

    async def _quit(self, session: SessionHandle) -> None:
        try:
            await self._client.quit(session)
        except WebDriverError as exc:
            self._log.debug("quit of session %s failed: %s", session.session_id, exc)
