"""Errors raised while decoding FCP messages."""

from __future__ import annotations

from typing import Any


def _type_name(message_type: Any) -> str:
    """Return the wire name of a message type, or the value itself as text."""
    return str(getattr(message_type, "value", message_type))


class DecodeError(Exception):
    """Base class of every error raised while decoding FCP data."""


class ProtocolBreakError(DecodeError):
    """The peer sent something that breaks the protocol."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Protocol Break: {detail}")


class ExpectedDifferentMessageTypeError(DecodeError):
    """A message of one type was expected but another arrived."""

    def __init__(self, expected: Any, got: Any) -> None:
        self.expected = expected
        self.got = got
        super().__init__(
            f"Expected '{_type_name(expected)}' but got '{_type_name(got)}' "
            "as FCP message type while decoding."
        )


class UnknownMessageTypeError(DecodeError):
    """A line could not be read as any known message type."""

    def __init__(self, got: str) -> None:
        self.got = got
        super().__init__(f"Could not parse '{got}' as MessageType")


class ParseError(DecodeError):
    """A value could not be parsed."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Parse error: {detail}")


class Utf8DecodeError(DecodeError):
    """Received bytes are not valid UTF-8."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Utf8Error: {detail}")


class InvalidVersionError(DecodeError):
    """The protocol version is unknown."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"Version {version} is unknown.")


class MissingFieldError(DecodeError):
    """A required field is absent from a message."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Field {field} is missing in message.")


class MissingPayloadError(DecodeError):
    """A message expected to carry a payload has none."""

    def __init__(self) -> None:
        super().__init__("Message is missing Payload")


class UnexpectedEOFError(DecodeError):
    """The stream ended in the middle of a message."""

    def __init__(self) -> None:
        super().__init__("Unexpected EOF")