"""Parsing and decoding of HTTP Basic ``Authorization`` credentials."""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "authorization"
BASIC_SCHEME = "Basic"
CREDENTIAL_SEPARATOR = ":"


class CredentialDecodeError(ValueError):
    """Raised when the Basic credential payload is not valid base64."""


@dataclass(frozen=True)
class Credentials:
    """A decoded username/password pair.

    Attributes:
        username: Never empty.
        password: May be empty.
    """

    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


def extract_parameter(header_value: str | None) -> str | None:
    """Return the base64 parameter of a ``Basic`` Authorization header.

    The scheme must be exactly ``Basic`` (case-sensitive, whole token).
    Returns None for a missing header, another scheme, or an empty parameter.
    """
    if not header_value:
        return None

    parts = header_value.strip().split(None, 1)
    if not parts or parts[0] != BASIC_SCHEME:
        return None

    if len(parts) == 1:
        return None
    return parts[1].strip() or None


def decode_parameter(parameter: str) -> str:
    """Base64-decode a credential parameter into text.

    Whitespace inside the payload is ignored. Bytes that are not valid UTF-8
    decode to U+FFFD rather than failing.

    Raises:
        CredentialDecodeError: If the payload is not valid base64.
    """
    compact = "".join(parameter.split())
    try:
        raw = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise CredentialDecodeError(f"Invalid base64 credential payload: {exc}") from exc

    return raw.decode("utf-8", errors="replace")


def parse_credentials(decoded: str) -> Credentials | None:
    """Split decoded text on the first separator into ``Credentials``.

    Returns None when there is no separator, or the username is empty.
    """
    position = decoded.find(CREDENTIAL_SEPARATOR)
    if position <= 0:
        return None

    username = decoded[:position].strip()
    password = decoded[position + 1 :].strip()
    if not username:
        return None

    return Credentials(username=username, password=password)


def extract_credentials(header_value: str | None) -> Credentials | None:
    """Extract ``Credentials`` from a raw Authorization header value.

    Returns None for any malformed header. An undecodable payload raises
    ``CredentialDecodeError`` instead.
    """
    parameter = extract_parameter(header_value)
    if parameter is None:
        logger.debug("Authorization header missing or not using the Basic scheme")
        return None

    credentials = parse_credentials(decode_parameter(parameter))
    if credentials is None:
        logger.debug("Basic credentials missing separator or username")
    return credentials


def encode_credentials(username: str, password: str) -> str:
    """Build a ``Basic`` Authorization header value for the given pair."""
    payload = f"{username}{CREDENTIAL_SEPARATOR}{password}".encode()
    return f"{BASIC_SCHEME} {base64.b64encode(payload).decode('ascii')}"
