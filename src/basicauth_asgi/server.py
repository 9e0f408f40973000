"""Demo Starlette application protected by ``BasicAuthMiddleware``."""

from __future__ import annotations

import logging
import time as _time
from typing import Any

import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from basicauth_asgi.auth.middleware import BasicAuthMiddleware
from basicauth_asgi.helpers import get_identity

logger = logging.getLogger(__name__)

DEFAULT_EXEMPT_PATHS = frozenset({"/health"})
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _describe_identity(identity: Any) -> dict[str, Any]:
    """Render an identity as JSON-safe data."""
    if hasattr(identity, "id"):
        return {
            "id": identity.id,
            "type": getattr(identity, "type", None),
            "roles": list(getattr(identity, "roles", ()) or ()),
        }
    return {"id": str(identity)}


def create_app(
    authenticator: Any,
    *,
    realm: str | None = None,
    exempt_paths: set[str] | None = None,
    reject_malformed: bool = False,
) -> Starlette:
    """Build a Starlette app with ``/health`` and ``/whoami`` routes.

    Args:
        authenticator: Passed through to ``BasicAuthMiddleware``.
        realm: Realm advertised in the 401 challenge.
        exempt_paths: Paths served without authentication (default: /health).
        reject_malformed: Answer undecodable credentials with 401.
    """
    start_time = _time.monotonic()

    async def _health(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok", "uptime_seconds": round(_time.monotonic() - start_time, 1)})

    async def _whoami(request: Request) -> JSONResponse:
        return JSONResponse(_describe_identity(get_identity()))

    return Starlette(
        routes=[
            Route("/health", endpoint=_health, methods=["GET"]),
            Route("/whoami", endpoint=_whoami, methods=["GET"]),
        ],
        middleware=[
            Middleware(
                BasicAuthMiddleware,
                authenticator=authenticator,
                realm=realm,
                exempt_paths=set(DEFAULT_EXEMPT_PATHS if exempt_paths is None else exempt_paths),
                reject_malformed=reject_malformed,
            )
        ],
    )


def _validate_host_port(host: str, port: int) -> None:
    """Validate host and port parameters."""
    if not host:
        raise ValueError("Host must not be empty")
    if not isinstance(port, int) or port < 1 or port > 65535:
        raise ValueError(f"Port must be between 1 and 65535, got {port}")


def serve(
    authenticator: Any,
    *,
    host: str = "127.0.0.1",
    port: int = 8000,
    realm: str | None = None,
    exempt_paths: set[str] | None = None,
    reject_malformed: bool = False,
    log_level: str | None = None,
) -> None:
    """Run the demo application with uvicorn. Blocks until shutdown."""
    _validate_host_port(host, port)
    if log_level is not None:
        if log_level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"Unknown log level: {log_level!r}. Valid: {sorted(VALID_LOG_LEVELS)}")
        logging.getLogger("basicauth_asgi").setLevel(getattr(logging, log_level.upper()))

    app = create_app(
        authenticator,
        realm=realm,
        exempt_paths=exempt_paths,
        reject_malformed=reject_malformed,
    )

    logger.info("Starting Basic auth demo server on %s:%d", host, port)
    config = uvicorn.Config(app, host=host, port=port, log_level=(log_level or "info").lower())
    uvicorn.Server(config).run()
