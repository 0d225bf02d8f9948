"""Small value types used in FCP messages."""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import MissingFieldError, ParseError

_TOKEN_CHARS = frozenset(string.ascii_letters + string.digits + "!#$%&'*+-.^_`|~")


def _is_token(text: str) -> bool:
    return bool(text) and all(char in _TOKEN_CHARS for char in text)


@dataclass(frozen=True)
class URI:
    """A Freenet key as it appears on the wire."""

    uri: str

    @classmethod
    def parse(cls, value: str) -> "URI":
        """Wrap ``value`` as a URI."""
        return cls(value)

    def __str__(self) -> str:
        return self.uri


@dataclass(frozen=True)
class ConnectionIdentifier:
    """Identifier the node gives a client connection."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ContentType:
    """A MIME type; comparison ignores the case of type, subtype and parameter names."""

    media_type: str
    subtype: str
    parameters: tuple[tuple[str, str], ...] = ()
    text: str = field(default="", compare=False)

    @classmethod
    def parse(cls, value: str) -> "ContentType":
        """Parse a MIME type such as ``text/plain;charset=utf8``."""
        try:
            return cls._parse(value)
        except ValueError as exc:
            raise ParseError(f"Failed to parse {value} to MIME ({exc})") from None

    @classmethod
    def _parse(cls, value: str) -> "ContentType":
        top, slash, rest = value.partition("/")
        if not slash:
            raise ValueError("missing '/'")
        if not _is_token(top):
            raise ValueError("invalid type")
        subtype_part, semicolon, params_part = rest.partition(";")
        subtype = subtype_part.rstrip()
        if not _is_token(subtype):
            raise ValueError("invalid subtype")

        parameters = []
        if semicolon:
            for segment in params_part.split(";"):
                segment = segment.strip()
                if not segment:
                    continue
                name, equals, param_value = segment.partition("=")
                if not equals or not _is_token(name):
                    raise ValueError("invalid parameter")
                if len(param_value) >= 2 and param_value[0] == param_value[-1] == '"':
                    param_value = param_value[1:-1]
                elif not _is_token(param_value):
                    raise ValueError("invalid parameter value")
                parameters.append((name.lower(), param_value))

        remainder = value[len(top) + 1 + len(subtype):]
        text = f"{top.lower()}/{subtype.lower()}{remainder}"
        return cls(top.lower(), subtype.lower(), tuple(parameters), text)

    def __str__(self) -> str:
        if self.text:
            return self.text
        params = "".join(f";{name}={value}" for name, value in self.parameters)
        return f"{self.media_type}/{self.subtype}{params}"


class FCPVersion(Enum):
    """Supported FCP protocol versions."""

    V2_0 = "2.0"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "FCPVersion":
        """Return the version named ``value``."""
        try:
            return cls(value)
        except ValueError:
            raise ParseError(f"Failed parsing {value} as a valid FCP version") from None

    @classmethod
    def from_field(cls, field: Any) -> "FCPVersion":
        """Read the version from a field that must be keyed ``FCPVersion``."""
        if field.key != "FCPVersion":
            raise MissingFieldError("FCPVersion")
        return cls.parse(field.value)