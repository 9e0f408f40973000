"""Tests for StaticAuthenticator and the protocol contracts."""

from __future__ import annotations

from collections.abc import Sequence

import pytest
from apcore import Identity

from basicauth_asgi.auth.protocol import ApiKeyAuthorizer, Authenticator
from basicauth_asgi.auth.static import StaticAuthenticator


class TestStaticAuthenticator:
    def test_accepts_known_user(self):
        auth = StaticAuthenticator({"alice": "s3cret"}, roles=("admin",))
        identity = auth.authenticate("alice", "s3cret")
        assert isinstance(identity, Identity)
        assert identity.id == "alice"
        assert identity.type == "user"
        assert identity.roles == ("admin",)

    def test_rejects_wrong_password(self):
        auth = StaticAuthenticator({"alice": "s3cret"})
        assert auth.authenticate("alice", "S3CRET") is None

    def test_rejects_unknown_user(self):
        auth = StaticAuthenticator({"alice": "s3cret"})
        assert auth.authenticate("mallory", "s3cret") is None

    def test_empty_password(self):
        auth = StaticAuthenticator({"guest": ""})
        assert auth.authenticate("guest", "") is not None
        assert auth.authenticate("guest", "x") is None

    def test_empty_users_rejected(self):
        with pytest.raises(ValueError, match="must not be empty"):
            StaticAuthenticator({})

    def test_username_with_separator_rejected(self):
        with pytest.raises(ValueError, match="Invalid username"):
            StaticAuthenticator({"a:b": "pw"})

    def test_from_pairs_splits_on_first_colon(self):
        auth = StaticAuthenticator.from_pairs(["alice:s3cret", "bob:pa:ss"])
        assert auth.usernames == ["alice", "bob"]
        assert auth.authenticate("bob", "pa:ss") is not None

    @pytest.mark.parametrize("pair", ["nocolon", ":pw", "  :pw"])
    def test_from_pairs_rejects_malformed(self, pair):
        with pytest.raises(ValueError, match="NAME:PASSWORD"):
            StaticAuthenticator.from_pairs([pair])

    def test_satisfies_protocol(self):
        assert isinstance(StaticAuthenticator({"a": "b"}), Authenticator)


class TestApiKeyAuthorizer:
    def test_structural_implementation(self):
        class KeyRing:
            def __init__(self, keys: dict[str, set[str]]) -> None:
                self._keys = keys

            def is_authorized(self, api_key: str, roles: Sequence[str] | None = None) -> bool:
                granted = self._keys.get(api_key)
                if granted is None:
                    return False
                return set(roles or ()).issubset(granted)

        ring = KeyRing({"k1": {"reader"}})
        assert isinstance(ring, ApiKeyAuthorizer)
        assert ring.is_authorized("k1")
        assert ring.is_authorized("k1", ["reader"])
        assert not ring.is_authorized("k1", ["writer"])

    def test_authenticator_is_not_api_key_authorizer(self):
        assert not isinstance(StaticAuthenticator({"a": "b"}), ApiKeyAuthorizer)
