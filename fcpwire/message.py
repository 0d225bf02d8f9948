"""A whole FCP message: type, fields and optional payload."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ParseError, ProtocolBreakError
from .fields import DATA_LIT, END_MESSAGE_LIT, Fields
from .message_type import MessageType, decode_message_type
from .reader import PeekableReader, Peeker


def _parse_size(value: str) -> int:
    digits = value[1:] if value.startswith("+") else value
    if not (digits and digits.isascii() and digits.isdigit()):
        raise ParseError(f"Failed to parse integer ({value!r})")
    return int(digits)


@dataclass(frozen=True)
class MessagePayload:
    """Raw data following a message, and the field that announces its length."""

    data: bytes
    data_len_identifier: str = "DataLength"


@dataclass
class Message:
    """An FCP message."""

    message_type: MessageType
    fields: Fields
    payload: Optional[MessagePayload] = None

    def __post_init__(self) -> None:
        if not isinstance(self.fields, Fields):
            self.fields = Fields(list(self.fields))

    def encode(self) -> bytes:
        """Return the wire form of the message."""
        lines = [str(self.message_type)]
        lines.extend(f"{entry.key}={entry.value}" for entry in self.fields)
        if self.payload is None:
            lines.append(END_MESSAGE_LIT)
            return ("\n".join(lines) + "\n").encode("utf-8")
        lines.append(f"{self.payload.data_len_identifier}={len(self.payload.data)}")
        lines.append(DATA_LIT)
        return ("\n".join(lines) + "\n").encode("utf-8") + bytes(self.payload.data)

    @classmethod
    async def decode(cls, reader: PeekableReader) -> "Message":
        """Read the next message from ``reader``."""
        peeker = Peeker(reader)
        message_type = await decode_message_type(peeker)
        fields = await Fields.decode(peeker)
        terminator = await peeker.current_line()

        if terminator == END_MESSAGE_LIT:
            reader.advance_to(peeker.stats())
            return cls(message_type, fields, None)

        if terminator == DATA_LIT:
            reader.advance_to(peeker.stats())
            hint = fields.payload_size_hint()
            size = _parse_size(hint.value)
            data = await reader.read_exact(size)
            return cls(message_type, fields, MessagePayload(data, hint.key))

        raise ProtocolBreakError(f"Message ended with unexpected line '{terminator}'")