"""
Session providers supply bearer tokens to the API client.

The client never reaches for a global auth object; a SessionProvider is passed to
its constructor. A provider answers two questions:

- get_access_token(): the current token, or None when signed out (guest)
- refresh_session(): refresh the session and return the new token, or None

refresh_session() may raise; the client treats any failure as an auth error.
"""

import logging
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class SessionProvider(Protocol):
    def get_access_token(self) -> Optional[str]:
        ...

    def refresh_session(self) -> Optional[str]:
        ...


class StaticSessionProvider:
    """
    Fixed token (or None for a guest session).

    Refreshing returns whatever token is currently set (see set_token()),
    so a rejected token is retried at most once before the client gives up.
    """

    def __init__(self, token: Optional[str] = None):
        self._token = token or None

    def set_token(self, token: Optional[str]) -> None:
        self._token = token or None

    def get_access_token(self) -> Optional[str]:
        return self._token

    def refresh_session(self) -> Optional[str]:
        return self._token


class CallbackSessionProvider:
    """Delegates to callables, e.g. wrapping an identity provider SDK."""

    def __init__(
        self,
        get_token: Callable[[], Optional[str]],
        refresh: Optional[Callable[[], Optional[str]]] = None,
    ):
        self._get_token = get_token
        self._refresh = refresh

    def get_access_token(self) -> Optional[str]:
        return self._get_token() or None

    def refresh_session(self) -> Optional[str]:
        if self._refresh is None:
            logger.debug("No refresh callback configured")
            return None
        return self._refresh() or None
