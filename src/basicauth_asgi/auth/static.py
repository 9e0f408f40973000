"""In-memory username/password authenticator."""

from __future__ import annotations

import hmac
import logging
from collections.abc import Iterable, Mapping

from apcore import Identity

from basicauth_asgi.auth.credentials import CREDENTIAL_SEPARATOR
from basicauth_asgi.auth.protocol import Authenticator

logger = logging.getLogger(__name__)


class StaticAuthenticator:
    """Checks credentials against a fixed ``{username: password}`` map.

    Args:
        users: Mapping of usernames to plain-text passwords.
        roles: Roles copied into every returned ``Identity``.
    """

    def __init__(self, users: Mapping[str, str], *, roles: tuple[str, ...] = ()) -> None:
        if not users:
            raise ValueError("users must not be empty")
        for username in users:
            if not username or CREDENTIAL_SEPARATOR in username:
                raise ValueError(f"Invalid username: {username!r}")
        self._users = dict(users)
        self._roles = roles

    @classmethod
    def from_pairs(cls, pairs: Iterable[str], *, roles: tuple[str, ...] = ()) -> StaticAuthenticator:
        """Build from ``NAME:PASSWORD`` strings, splitting on the first colon."""
        users: dict[str, str] = {}
        for pair in pairs:
            username, sep, password = pair.partition(CREDENTIAL_SEPARATOR)
            username = username.strip()
            if not sep or not username:
                raise ValueError(f"Expected NAME:PASSWORD, got {pair!r}")
            users[username] = password
        return cls(users, roles=roles)

    @property
    def usernames(self) -> list[str]:
        return sorted(self._users)

    def authenticate(self, username: str, password: str) -> Identity | None:
        expected = self._users.get(username)
        if expected is None:
            logger.debug("Unknown user %r", username)
            return None
        if not hmac.compare_digest(expected.encode(), password.encode()):
            return None
        return Identity(id=username, type="user", roles=self._roles)


# Verify protocol compliance at import time
assert isinstance(StaticAuthenticator.__new__(StaticAuthenticator), Authenticator)
