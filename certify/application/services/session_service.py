from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ...domain.errors import NotAuthenticated
from ...domain.models import Account
from ...domain.ports.persistence import AccountRepository, SessionRepository

logger = logging.getLogger(__name__)

SessionListener = Callable[[Optional[Account]], None]


class SessionManager:
    """Tracks the single account signed in to this process.

    The manager is either anonymous (``current is None``) or authenticated.
    Every transition is written through to the session repository and then
    announced to registered listeners.
    """

    def __init__(self, persistence: SessionRepository) -> None:
        self._persistence = persistence
        self._current: Optional[Account] = None
        self._listeners: List[SessionListener] = []

    # ------------------------------------------------------------------
    @property
    def current(self) -> Optional[Account]:
        return self._current

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None

    def require(self) -> Account:
        if self._current is None:
            raise NotAuthenticated("No user logged in.")
        return self._current

    # State transitions ----------------------------------------------------
    def establish(self, account: Account) -> Account:
        self._persistence.save_session(account)
        self._current = account
        logger.info("Session established for %s", account.email)
        self._notify_listeners()
        return account

    def refresh(self, account: Account) -> None:
        """Replace the cached snapshot when ``account`` is the signed-in one."""
        if self._current is None or self._current.id != account.id:
            return
        self._persistence.save_session(account)
        self._current = account
        self._notify_listeners()

    def sign_out(self) -> None:
        self._persistence.clear_session()
        previous = self._current
        self._current = None
        if previous is not None:
            logger.info("Session closed for %s", previous.email)
        self._notify_listeners()

    def restore(self, accounts: AccountRepository) -> Optional[Account]:
        """Load the persisted session at startup.

        A snapshot that cannot be decoded, or whose account is no longer in
        the directory, is discarded and the manager stays anonymous.
        """
        try:
            snapshot = self._persistence.load_session()
        except ValueError as exc:
            logger.warning("Discarding malformed persisted session: %s", exc)
            self._persistence.clear_session()
            return None
        if snapshot is None:
            return None

        account = next((item for item in accounts.load_accounts() if item.id == snapshot.id), None)
        if account is None:
            logger.warning("Discarding persisted session for unknown account %s", snapshot.id)
            self._persistence.clear_session()
            return None

        self._current = account
        if account != snapshot:
            self._persistence.save_session(account)
        logger.info("Session restored for %s", account.email)
        self._notify_listeners()
        return account

    # Observers --------------------------------------------------------------
    def add_listener(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify_listeners(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._current)
            except Exception:  # pragma: no cover - defensive
                logger.exception("Error notifying session listener")
