"""Key/value fields of an FCP message and their decoding."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional

from .errors import MissingFieldError, ParseError, ProtocolBreakError, UnexpectedEOFError
from .reader import Peeker

END_MESSAGE_LIT = "EndMessage"
DATA_LIT = "Data"

PAYLOAD_LENGTH_HINT_KEYS = ("DataLength",)


@dataclass(frozen=True)
class Field:
    """A single ``key=value`` line."""

    key: str
    value: str

    @classmethod
    def parse(cls, line: str) -> "Field":
        """Split ``line`` at its first ``=`` into key and value."""
        key, equals, value = line.partition("=")
        if not equals:
            raise ParseError(f"'{line}' cannot be parsed as field as it contains no '='")
        return cls(key, value)

    @staticmethod
    def is_field(line: str) -> bool:
        """Tell whether ``line`` looks like a field."""
        return "=" in line

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


@dataclass
class Fields:
    """The ordered fields of a message."""

    entries: list[Field] = field(default_factory=list)

    def __iter__(self) -> Iterator[Field]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, key: str) -> Optional[Field]:
        """Return the first field named ``key``, or ``None``."""
        return next((entry for entry in self.entries if entry.key == key), None)

    def require(self, key: str) -> Field:
        """Return the first field named ``key``; raise if it is absent."""
        found = self.get(key)
        if found is None:
            raise MissingFieldError(key)
        return found

    def payload_size_hint(self) -> Field:
        """Return the field that gives the length of the payload."""
        hints = [entry for entry in self.entries if entry.key in PAYLOAD_LENGTH_HINT_KEYS]
        if not hints:
            raise MissingFieldError("PAYLOAD LENGTH HINT")
        if len(hints) > 1:
            raise ProtocolBreakError("Message carries more than one payload length hint")
        return hints[0]

    @classmethod
    async def decode(cls, peeker: Peeker) -> "Fields":
        """Read fields up to and including an ``EndMessage`` or ``Data`` line."""
        entries: list[Field] = []
        line = await peeker.next_contentful_line()
        if line is None:
            raise UnexpectedEOFError()
        while Field.is_field(line):
            entries.append(Field.parse(line))
            line = await peeker.next_contentful_line()
            if line is None:
                raise UnexpectedEOFError()
        if line not in (END_MESSAGE_LIT, DATA_LIT):
            raise ParseError(
                f"'{line}' neither indicates the end of a Fields nor is a field itself."
            )
        return cls(entries)