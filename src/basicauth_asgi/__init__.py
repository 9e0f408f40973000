"""basicauth-asgi: HTTP Basic authentication middleware for ASGI applications."""

from __future__ import annotations

from basicauth_asgi.auth import (
    ApiKeyAuthorizer,
    Authenticator,
    BasicAuthMiddleware,
    CredentialDecodeError,
    Credentials,
    StaticAuthenticator,
    auth_identity_var,
    encode_credentials,
    extract_credentials,
    extract_headers,
)
from basicauth_asgi.helpers import get_identity
from basicauth_asgi.server import create_app, serve

__all__ = [
    # Middleware
    "BasicAuthMiddleware",
    "auth_identity_var",
    "get_identity",
    # Contracts
    "Authenticator",
    "ApiKeyAuthorizer",
    "StaticAuthenticator",
    # Credentials
    "Credentials",
    "CredentialDecodeError",
    "encode_credentials",
    "extract_credentials",
    "extract_headers",
    # Demo server
    "create_app",
    "serve",
]

__version__ = "0.1.0"
