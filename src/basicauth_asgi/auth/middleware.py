"""ASGI middleware implementing the HTTP Basic challenge/response exchange."""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable
from contextvars import ContextVar
from typing import Any

import anyio.to_thread
from starlette.responses import Response

from basicauth_asgi.auth.credentials import (
    AUTHORIZATION_HEADER,
    BASIC_SCHEME,
    CredentialDecodeError,
    Credentials,
    extract_credentials,
)

logger = logging.getLogger(__name__)

# Identity of the request being processed, visible to the wrapped app
auth_identity_var: ContextVar[Any | None] = ContextVar("auth_identity", default=None)


def extract_headers(scope: dict[str, Any]) -> dict[str, str]:
    """Extract headers from ASGI scope as a lowercase-key dict."""
    result: dict[str, str] = {}
    for key_bytes, value_bytes in scope.get("headers", []):
        result[key_bytes.decode("latin-1").lower()] = value_bytes.decode("latin-1")
    return result


def _is_async_callable(obj: Any) -> bool:
    while isinstance(obj, functools.partial):
        obj = obj.func
    return inspect.iscoroutinefunction(obj) or (callable(obj) and inspect.iscoroutinefunction(obj.__call__))


def _validate_realm(realm: str) -> None:
    """Reject realms that cannot be sent in a quoted latin-1 header value."""
    if '"' in realm:
        raise ValueError("realm must not contain double quotes")
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in realm):
        raise ValueError("realm must not contain control characters")
    try:
        realm.encode("latin-1")
    except UnicodeEncodeError as exc:
        raise ValueError(f"realm must be latin-1 encodable: {realm!r}") from exc


class BasicAuthMiddleware:
    """ASGI middleware that authenticates requests with HTTP Basic credentials.

    Authenticated requests are forwarded with the identity stored in
    ``auth_identity_var`` and ``scope["state"]["identity"]``. Every other
    request gets a bare 401 with a ``WWW-Authenticate: Basic`` challenge.

    Args:
        app: The ASGI application to wrap.
        authenticator: A plain callable taking ``(username, password)``, or
            an ``Authenticator`` object. Sync callables run in a worker thread.
        realm: Optional realm advertised in the challenge.
        exempt_paths: Exact paths that bypass authentication.
        exempt_prefixes: Path prefixes that bypass authentication.
        reject_malformed: If True, an undecodable credential payload is
            answered with 401 instead of raising ``CredentialDecodeError``.
    """

    def __init__(
        self,
        app: Any,
        authenticator: Any,
        *,
        realm: str | None = None,
        exempt_paths: set[str] | None = None,
        exempt_prefixes: set[str] | None = None,
        reject_malformed: bool = False,
    ) -> None:
        authenticate = getattr(authenticator, "authenticate", None)
        if authenticate is None and callable(authenticator):
            authenticate = authenticator
        if not callable(authenticate):
            raise TypeError(f"authenticator must be callable or define authenticate(), got {authenticator!r}")
        if realm is not None:
            _validate_realm(realm)

        self._app = app
        self._authenticate: Callable[[str, str], Any] = authenticate
        self._exempt_paths = exempt_paths or set()
        self._exempt_prefixes = exempt_prefixes or set()
        self._reject_malformed = reject_malformed
        self._challenge = BASIC_SCHEME if realm is None else f'{BASIC_SCHEME} realm="{realm}"'

    def _is_exempt(self, path: str) -> bool:
        """Check if a path is exempt from authentication."""
        if path in self._exempt_paths:
            return True
        return any(path.startswith(prefix) for prefix in self._exempt_prefixes)

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        if scope["type"] != "http":
            await self._app(scope, receive, send)
            return

        path = scope.get("path", "")
        if self._is_exempt(path):
            await self._app(scope, receive, send)
            return

        credentials = self._extract_credentials(scope)
        identity = None
        if credentials is not None:
            identity = await self._call_authenticator(credentials)

        if identity is None:
            logger.warning("Authentication failed for %s", path)
            await self._send_401(scope, receive, send)
            return

        scope.setdefault("state", {})["identity"] = identity
        token = auth_identity_var.set(identity)
        try:
            await self._app(scope, receive, send)
        finally:
            auth_identity_var.reset(token)

    def _extract_credentials(self, scope: dict[str, Any]) -> Credentials | None:
        header = extract_headers(scope).get(AUTHORIZATION_HEADER)
        try:
            return extract_credentials(header)
        except CredentialDecodeError:
            if not self._reject_malformed:
                raise
            logger.debug("Rejecting undecodable Basic credentials", exc_info=True)
            return None

    async def _call_authenticator(self, credentials: Credentials) -> Any | None:
        """Run the authenticator, awaiting it or offloading it to a thread."""
        if _is_async_callable(self._authenticate):
            result = await self._authenticate(credentials.username, credentials.password)
        else:
            result = await anyio.to_thread.run_sync(self._authenticate, credentials.username, credentials.password)
            if inspect.isawaitable(result):
                result = await result
        if result is None:
            logger.debug("Authenticator rejected user %r", credentials.username)
        return result

    async def _send_401(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        """Send a 401 Unauthorized response with an empty body."""
        response = Response(status_code=401, headers={"WWW-Authenticate": self._challenge})
        await response(scope, receive, send)
