"""Shared test fixtures for basicauth-asgi tests."""

from __future__ import annotations

import base64
from typing import Any

import pytest
from apcore import Identity

# ---------------------------------------------------------------------------
# ASGI helpers
# ---------------------------------------------------------------------------


def basic_header(payload: str) -> str:
    """Build an Authorization value from an already-joined ``user:pass`` payload."""
    return "Basic " + base64.b64encode(payload.encode("utf-8")).decode("ascii")


def build_scope(
    path: str = "/protected",
    authorization: str | None = None,
    scope_type: str = "http",
) -> dict[str, Any]:
    headers: list[tuple[bytes, bytes]] = []
    if authorization is not None:
        headers.append((b"authorization", authorization.encode("latin-1")))
    return {
        "type": scope_type,
        "method": "GET",
        "path": path,
        "headers": headers,
    }


class SentMessages(list):
    """Collects ASGI messages passed to ``send``."""

    async def __call__(self, message: dict[str, Any]) -> None:
        self.append(message)

    @property
    def status(self) -> int | None:
        return self[0]["status"] if self else None

    @property
    def headers(self) -> dict[bytes, bytes]:
        return {bytes(k): bytes(v) for k, v in self[0]["headers"]} if self else {}

    @property
    def body(self) -> bytes:
        return b"".join(m.get("body", b"") for m in self if m["type"] == "http.response.body")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sent() -> SentMessages:
    return SentMessages()


@pytest.fixture
def alice() -> Identity:
    return Identity(id="alice", type="user", roles=("admin",))


@pytest.fixture
def accept_alice(alice: Identity):
    """Sync authenticator accepting only ("alice", "s3cret")."""

    def authenticate(username: str, password: str) -> Identity | None:
        if (username, password) == ("alice", "s3cret"):
            return alice
        return None

    return authenticate
