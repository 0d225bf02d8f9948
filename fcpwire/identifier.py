"""Identifiers that tag client requests with a name and a random nonce."""

from __future__ import annotations

import base64
import secrets
from dataclasses import dataclass

from .errors import ParseError

PREFIX = "[Mycelink] "
NAME_NONCE_SEPARATOR = " - "

NONCE_LENGTH = 32
ENCODED_NONCE_LENGTH = -(-NONCE_LENGTH // 3) * 4


@dataclass(frozen=True)
class UniqueIdentifier:
    """A request identifier made of a readable name and a random nonce."""

    name: str
    nonce: str

    @classmethod
    def new(cls, name: str) -> "UniqueIdentifier":
        """Create an identifier for ``name`` with a fresh random nonce."""
        nonce = base64.b64encode(secrets.token_bytes(NONCE_LENGTH)).decode("ascii")
        return cls(name, nonce)

    @classmethod
    def parse(cls, value: str) -> "UniqueIdentifier":
        """Read an identifier from its wire form."""
        if not value.startswith(PREFIX):
            raise ParseError(f"{value} is not a Mycelink identifier")
        name, separator, nonce = value[len(PREFIX):].partition(NAME_NONCE_SEPARATOR)
        if not separator:
            raise ParseError(
                f"{value} doesn't contain the separator for nonce and name "
                f"('{NAME_NONCE_SEPARATOR}')"
            )
        nonce_length = len(nonce.encode("utf-8"))
        if nonce_length != ENCODED_NONCE_LENGTH:
            raise ParseError(
                f"Expected encoded nonce to be {ENCODED_NONCE_LENGTH} bytes long, "
                f"but is instead {nonce_length} bytes long. "
                f"Read '{nonce}' as nonce from identifier '{value}'"
            )
        return cls(name, nonce)

    def __str__(self) -> str:
        return f"{PREFIX}{self.name}{NAME_NONCE_SEPARATOR}{self.nonce}"