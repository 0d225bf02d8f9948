"""Names of the FCP message types sent by clients and by the node."""

from __future__ import annotations

from enum import Enum
from typing import Union

from .errors import (
    ExpectedDifferentMessageTypeError,
    UnexpectedEOFError,
    UnknownMessageTypeError,
)
from .reader import Peeker


class ClientMessageType(Enum):
    """Messages a client sends to the node."""

    CLIENT_HELLO = "ClientHello"
    CLIENT_GET = "ClientGet"
    CLIENT_PUT = "ClientPut"
    LIST_PEER = "ListPeer"
    GENERATE_SSK = "GenerateSSK"
    TEST_DDA_REQUEST = "TestDDARequest"
    TEST_DDA_RESPONSE = "TestDDAResponse"
    SUBSCRIBE_USK = "SubscribeUSK"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "ClientMessageType":
        """Return the client message type named ``value``."""
        try:
            return cls(value)
        except ValueError:
            raise UnknownMessageTypeError(value) from None


class NodeMessageType(Enum):
    """Messages the node sends to a client."""

    NODE_HELLO = "NodeHello"
    ALL_DATA = "AllData"
    PUT_SUCCESSFUL = "PutSuccessful"
    PUT_FAILED = "PutFailed"
    GET_FAILED = "GetFailed"
    URI_GENERATED = "URIGenerated"
    SSK_KEYPAIR = "SSKKeypair"
    TEST_DDA_REPLY = "TestDDAReply"
    TEST_DDA_COMPLETE = "TestDDAComplete"
    DATA_FOUND = "DataFound"
    PROTOCOL_ERROR = "ProtocolError"
    SUBSCRIBED_USK = "SubscribedUSK"
    SUBSCRIBED_USK_UPDATE = "SubscribedUSKUpdate"
    SUBSCRIBED_USK_SENDING_TO_NETWORK = "SubscribedUSKSendingToNetwork"
    SUBSCRIBED_USK_ROUND_FINISHED = "SubscribedUSKRoundFinished"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "NodeMessageType":
        """Return the node message type named ``value``."""
        try:
            return cls(value)
        except ValueError:
            raise UnknownMessageTypeError(value) from None


MessageType = Union[ClientMessageType, NodeMessageType]


def parse_message_type(value: str) -> MessageType:
    """Read a message type name, preferring node types over client types."""
    try:
        return NodeMessageType.parse(value)
    except UnknownMessageTypeError:
        return ClientMessageType.parse(value)


def is_node_message(message_type: MessageType, expected: NodeMessageType) -> bool:
    """Tell whether ``message_type`` is the node message ``expected``."""
    return isinstance(message_type, NodeMessageType) and message_type is expected


def expect_node_message(message_type: MessageType, expected: NodeMessageType) -> None:
    """Raise unless ``message_type`` is the node message ``expected``."""
    if not is_node_message(message_type, expected):
        raise ExpectedDifferentMessageTypeError(expected, message_type)


async def decode_message_type(peeker: Peeker) -> MessageType:
    """Read the message type from the next non-blank line of ``peeker``."""
    line = await peeker.next_contentful_line()
    if line is None:
        raise UnexpectedEOFError()
    return parse_message_type(line)