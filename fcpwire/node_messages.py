"""Messages the node sends to a client, decoded from generic messages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import MissingPayloadError, ParseError
from .identifier import UniqueIdentifier
from .message import Message
from .message_type import NodeMessageType, expect_node_message
from .values import URI, ConnectionIdentifier, ContentType, FCPVersion

DATA_NOT_FOUND_CODE = 13

_U32_MAX = 2**32 - 1
_USIZE_MAX = 2**64 - 1


def _parse_uint(value: str, max_value: int) -> int:
    digits = value[1:] if value.startswith("+") else value
    if not (digits and digits.isascii() and digits.isdigit()):
        raise ParseError(f"Failed to parse integer ({value!r})")
    number = int(digits)
    if number > max_value:
        raise ParseError(f"Failed to parse integer ({value!r} is too large)")
    return number


def _parse_bool(value: str) -> bool:
    if value == "true":
        return True
    if value == "false":
        return False
    raise ParseError(f"Failed to parse bool ({value!r})")


@dataclass(frozen=True)
class AllDataMessage:
    """The data fetched for a request."""

    identifier: UniqueIdentifier
    content_type: ContentType
    data: bytes

    @classmethod
    def from_message(cls, message: Message) -> "AllDataMessage":
        expect_node_message(message.message_type, NodeMessageType.ALL_DATA)
        fields = message.fields
        identifier = UniqueIdentifier.parse(fields.require("Identifier").value)
        content_type = ContentType.parse(fields.require("Metadata.ContentType").value)
        if message.payload is None:
            raise MissingPayloadError()
        return cls(identifier, content_type, bytes(message.payload.data))


@dataclass(frozen=True)
class DataFoundMessage:
    """Announces that requested data was found."""

    identifier: UniqueIdentifier
    content_type: ContentType
    data_length: int

    @classmethod
    def from_message(cls, message: Message) -> "DataFoundMessage":
        expect_node_message(message.message_type, NodeMessageType.DATA_FOUND)
        fields = message.fields
        return cls(
            identifier=UniqueIdentifier.parse(fields.require("Identifier").value),
            content_type=ContentType.parse(fields.require("Metadata.ContentType").value),
            data_length=_parse_uint(fields.require("DataLength").value, _USIZE_MAX),
        )


@dataclass(frozen=True)
class GetFailedMessage:
    """Reports that a fetch failed."""

    code: int
    identifier: UniqueIdentifier
    code_description: str
    short_code_description: str
    extra_description: Optional[str]
    fatal: bool
    redirect_uri: Optional[URI]
    expected_data_length: Optional[int]
    expected_metadata_content_type: Optional[ContentType]
    finalized_expected: Optional[bool]

    @classmethod
    def from_message(cls, message: Message) -> "GetFailedMessage":
        expect_node_message(message.message_type, NodeMessageType.GET_FAILED)
        fields = message.fields

        code = _parse_uint(fields.require("Code").value, _U32_MAX)
        identifier = UniqueIdentifier.parse(fields.require("Identifier").value)
        code_description = fields.require("CodeDescription").value
        short_code_description = fields.require("ShortCodeDescription").value
        extra = fields.get("ExtraDescription")
        fatal = _parse_bool(fields.require("Fatal").value)

        redirect = fields.get("RedirectURI")
        length = fields.get("ExpectedDataLength")
        content_type = fields.get("ExpectedMetadata.ContentType")

        finalized_field = fields.get("FinalizedExpected")
        finalized: Optional[bool] = None
        if finalized_field is not None:
            try:
                finalized = _parse_bool(finalized_field.value)
            except ParseError:
                finalized = None

        return cls(
            code=code,
            identifier=identifier,
            code_description=code_description,
            short_code_description=short_code_description,
            extra_description=extra.value if extra is not None else None,
            fatal=fatal,
            redirect_uri=URI.parse(redirect.value) if redirect is not None else None,
            expected_data_length=(
                _parse_uint(length.value, _USIZE_MAX) if length is not None else None
            ),
            expected_metadata_content_type=(
                ContentType.parse(content_type.value) if content_type is not None else None
            ),
            finalized_expected=finalized,
        )


@dataclass(frozen=True)
class NodeHelloMessage:
    """The node's answer to a client hello."""

    fcp_version: FCPVersion
    node: str
    connection_identifier: ConnectionIdentifier

    @classmethod
    def from_message(cls, message: Message) -> "NodeHelloMessage":
        expect_node_message(message.message_type, NodeMessageType.NODE_HELLO)
        fields = message.fields
        return cls(
            fcp_version=FCPVersion.from_field(fields.require("FCPVersion")),
            node=fields.require("Node").value,
            connection_identifier=ConnectionIdentifier(
                fields.require("ConnectionIdentifier").value
            ),
        )


@dataclass(frozen=True)
class PutFailedMessage:
    """Reports that an insert failed."""

    code: int
    identifier: UniqueIdentifier
    expected_uri: URI
    code_description: str
    short_code_description: str
    extra_description: str
    fatal: bool

    @classmethod
    def from_message(cls, message: Message) -> "PutFailedMessage":
        expect_node_message(message.message_type, NodeMessageType.PUT_FAILED)
        fields = message.fields
        return cls(
            code=_parse_uint(fields.require("Code").value, _U32_MAX),
            identifier=UniqueIdentifier.parse(fields.require("Identifier").value),
            expected_uri=URI.parse(fields.require("ExpectedURI").value),
            code_description=fields.require("CodeDescription").value,
            short_code_description=fields.require("ShortCodeDescription").value,
            extra_description=fields.require("ExtraDescription").value,
            fatal=_parse_bool(fields.require("Fatal").value),
        )


@dataclass(frozen=True)
class PutSuccessfulMessage:
    """Reports that an insert succeeded."""

    identifier: UniqueIdentifier
    uri: URI

    @classmethod
    def from_message(cls, message: Message) -> "PutSuccessfulMessage":
        expect_node_message(message.message_type, NodeMessageType.PUT_SUCCESSFUL)
        fields = message.fields
        return cls(
            identifier=UniqueIdentifier.parse(fields.require("Identifier").value),
            uri=URI.parse(fields.require("URI").value),
        )


@dataclass(frozen=True)
class SSKKeypairMessage:
    """A freshly generated SSK key pair."""

    identifier: UniqueIdentifier
    request_uri: str
    insert_uri: str

    @classmethod
    def from_message(cls, message: Message) -> "SSKKeypairMessage":
        expect_node_message(message.message_type, NodeMessageType.SSK_KEYPAIR)
        fields = message.fields
        return cls(
            identifier=UniqueIdentifier.parse(fields.require("Identifier").value),
            request_uri=fields.require("RequestURI").value,
            insert_uri=fields.require("InsertURI").value,
        )