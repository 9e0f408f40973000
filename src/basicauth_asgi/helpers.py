"""Helpers for code running behind ``BasicAuthMiddleware``."""

from __future__ import annotations

from typing import Any

from basicauth_asgi.auth.middleware import auth_identity_var


def get_identity(default: Any = None) -> Any:
    """Return the identity authenticated for the current request.

    Returns ``default`` when called outside an authenticated request, e.g.
    from an exempt path or a background task started after the response.
    """
    identity = auth_identity_var.get()
    return default if identity is None else identity
