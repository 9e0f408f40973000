"""CLI entry point: python -m basicauth_asgi."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from basicauth_asgi.auth.static import StaticAuthenticator
from basicauth_asgi.server import serve

logger = logging.getLogger(__name__)

USERS_ENV_VAR = "BASIC_AUTH_USERS"


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the basicauth-asgi CLI."""
    parser = argparse.ArgumentParser(
        prog="python -m basicauth_asgi",
        description="Launch a demo HTTP server protected by Basic authentication.",
    )

    # Credentials
    parser.add_argument(
        "--user",
        action="append",
        default=None,
        metavar="NAME:PASSWORD",
        help=f"Accepted credentials, repeatable (default: ${USERS_ENV_VAR}, comma-separated).",
    )
    parser.add_argument(
        "--realm",
        default=None,
        help="Realm advertised in the WWW-Authenticate challenge.",
    )
    parser.add_argument(
        "--reject-malformed",
        action="store_true",
        default=False,
        help="Answer undecodable credentials with 401 instead of a server error.",
    )
    parser.add_argument(
        "--exempt-paths",
        default=None,
        help="Comma-separated paths exempt from auth (default: /health).",
    )

    # Network
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host address (default: 127.0.0.1).",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port (default: 8000, range: 1-65535).",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="INFO",
        help="Logging level (default: INFO).",
    )

    return parser


def _validate_port(port: int, parser: argparse.ArgumentParser) -> None:
    """Validate port is in range 1-65535."""
    if port < 1 or port > 65535:
        parser.error(f"--port must be in range 1-65535, got {port}")


def main() -> None:
    """CLI entry point for launching the demo server.

    Exit codes:
        0 - Normal shutdown
        1 - Invalid arguments (no users, malformed user entry)
        2 - Startup failure (argparse error, serve() exception)
    """
    parser = _build_parser()
    args = parser.parse_args()

    _validate_port(args.port, parser)

    # Resolve users: --user → BASIC_AUTH_USERS env var
    pairs: list[str] = args.user or []
    if not pairs:
        env_users = os.environ.get(USERS_ENV_VAR, "")
        pairs = [p.strip() for p in env_users.split(",") if p.strip()]
    if not pairs:
        print(f"Error: no users given. Use --user NAME:PASSWORD or set {USERS_ENV_VAR}.", file=sys.stderr)
        sys.exit(1)

    try:
        authenticator = StaticAuthenticator.from_pairs(pairs)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.info("Basic authentication enabled for %d user(s)", len(authenticator.usernames))

    exempt_paths_set = None
    if args.exempt_paths is not None:
        exempt_paths_set = set(p.strip() for p in args.exempt_paths.split(",") if p.strip())

    try:
        serve(
            authenticator,
            host=args.host,
            port=args.port,
            realm=args.realm,
            exempt_paths=exempt_paths_set,
            reject_malformed=args.reject_malformed,
            log_level=args.log_level,
        )
    except Exception:
        logger.exception("Server startup failed.")
        sys.exit(2)


if __name__ == "__main__":
    main()
