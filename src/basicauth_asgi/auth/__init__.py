"""HTTP Basic authentication support for basicauth-asgi."""

from basicauth_asgi.auth.credentials import (
    CredentialDecodeError,
    Credentials,
    encode_credentials,
    extract_credentials,
)
from basicauth_asgi.auth.middleware import BasicAuthMiddleware, auth_identity_var, extract_headers
from basicauth_asgi.auth.protocol import ApiKeyAuthorizer, Authenticator
from basicauth_asgi.auth.static import StaticAuthenticator

__all__ = [
    "Authenticator",
    "ApiKeyAuthorizer",
    "StaticAuthenticator",
    "BasicAuthMiddleware",
    "Credentials",
    "CredentialDecodeError",
    "auth_identity_var",
    "encode_credentials",
    "extract_credentials",
    "extract_headers",
]
