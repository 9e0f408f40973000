"""Protocols for pluggable authentication and authorization backends."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Authenticator(Protocol):
    """Protocol for Basic authentication backends.

    Implementations verify a username/password pair and return an identity
    on success, or ``None`` on failure. ``authenticate`` may be a coroutine.
    Raising is allowed; the error is not turned into a 401.
    """

    def authenticate(self, username: str, password: str) -> Any | None:
        """Authenticate a username/password pair.

        Args:
            username: Decoded, trimmed username (never empty).
            password: Decoded, trimmed password (may be empty).

        Returns:
            An identity if authentication succeeds, ``None`` otherwise.
        """
        ...


@runtime_checkable
class ApiKeyAuthorizer(Protocol):
    """Protocol for API-key based authorization.

    No implementation ships with this package.
    """

    def is_authorized(self, api_key: str, roles: Sequence[str] | None = None) -> bool:
        """Return True if ``api_key`` is authorized, optionally for ``roles``."""
        ...
