"""
Client session/auth context.

A small state machine tracking who is logged in on this client:

    UNAUTHENTICATED --begin()--> AUTHENTICATING --succeed()--> AUTHENTICATED
          ^                           |                             |
          +---------fail()------------+      logout()/invalidate() -+

Protected views call `redirect_target()`; it names the login path while
nobody is logged in and no login is in flight. This is a navigation guard
only. The server checks the token on every request regardless.
"""

from dataclasses import dataclass
from enum import Enum

from cardvault.config import LOGIN_PATH


class SessionState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class InvalidTransition(RuntimeError):
    """A session event arrived in a state that does not accept it."""

    def __init__(self, state: SessionState, event: str):
        self.state = state
        self.event = event
        super().__init__(f"Cannot {event} while {state.value}")


@dataclass
class AuthSession:
    """Authentication state of one client."""

    state: SessionState = SessionState.UNAUTHENTICATED
    username: str | None = None
    token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED

    def _require(self, event: str, *allowed: SessionState) -> None:
        if self.state not in allowed:
            raise InvalidTransition(self.state, event)

    def _clear(self) -> None:
        self.state = SessionState.UNAUTHENTICATED
        self.username = None
        self.token = None

    def begin(self) -> None:
        """A login or registration was submitted."""
        self._require("begin authentication", SessionState.UNAUTHENTICATED)
        self.state = SessionState.AUTHENTICATING

    def succeed(self, username: str, token: str) -> None:
        self._require("complete authentication", SessionState.AUTHENTICATING)
        self.state = SessionState.AUTHENTICATED
        self.username = username
        self.token = token

    def fail(self) -> None:
        """Bad credentials, a taken username, or a transport failure."""
        self._require("fail authentication", SessionState.AUTHENTICATING)
        self._clear()

    def logout(self) -> None:
        self._require("log out", SessionState.AUTHENTICATED)
        self._clear()

    def invalidate(self) -> None:
        """The server rejected the token. No-op unless authenticated."""
        if self.state is SessionState.AUTHENTICATED:
            self._clear()

    def redirect_target(self) -> str | None:
        """Where a protected view should send the user, or None to stay."""
        if self.state is SessionState.UNAUTHENTICATED:
            return LOGIN_PATH
        return None

    def auth_headers(self) -> dict[str, str]:
        if self.token is None:
            return {}
        return {"Authorization": f"Bearer {self.token}"}
