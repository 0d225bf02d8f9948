import asyncio

import pytest

from fcpwire.errors import (
    ExpectedDifferentMessageTypeError,
    UnexpectedEOFError,
    UnknownMessageTypeError,
)
from fcpwire.message_type import (
    ClientMessageType,
    NodeMessageType,
    decode_message_type,
    expect_node_message,
    is_node_message,
    parse_message_type,
)
from fcpwire.reader import PeekableReader, Peeker


def _peeker(data: bytes) -> Peeker:
    stream = asyncio.StreamReader()
    stream.feed_data(data)
    stream.feed_eof()
    return Peeker(PeekableReader(stream))


def test_client_hello_name():
    assert ClientMessageType.parse("ClientHello") is ClientMessageType.CLIENT_HELLO
    assert str(ClientMessageType.CLIENT_HELLO) == "ClientHello"


@pytest.mark.parametrize("member", list(ClientMessageType))
def test_client_round_trip(member):
    assert ClientMessageType.parse(member.value) is member


@pytest.mark.parametrize("member", list(NodeMessageType))
def test_node_round_trip(member):
    assert NodeMessageType.parse(member.value) is member
    assert parse_message_type(str(member)) is member


def test_parse_message_type_finds_client_types():
    assert parse_message_type("GenerateSSK") is ClientMessageType.GENERATE_SSK


def test_unknown_type_raises():
    with pytest.raises(UnknownMessageTypeError) as info:
        parse_message_type("NoSuchMessage")
    assert info.value.got == "NoSuchMessage"


def test_node_parse_rejects_client_name():
    with pytest.raises(UnknownMessageTypeError):
        NodeMessageType.parse("ClientHello")


def test_is_node_message():
    assert is_node_message(NodeMessageType.ALL_DATA, NodeMessageType.ALL_DATA)
    assert not is_node_message(NodeMessageType.DATA_FOUND, NodeMessageType.ALL_DATA)
    assert not is_node_message(ClientMessageType.CLIENT_GET, NodeMessageType.ALL_DATA)


def test_expect_node_message_raises_with_types():
    with pytest.raises(ExpectedDifferentMessageTypeError) as info:
        expect_node_message(ClientMessageType.CLIENT_HELLO, NodeMessageType.NODE_HELLO)
    assert info.value.expected is NodeMessageType.NODE_HELLO
    assert info.value.got is ClientMessageType.CLIENT_HELLO
    assert "'NodeHello'" in str(info.value)


def test_expect_node_message_accepts_match():
    expect_node_message(NodeMessageType.NODE_HELLO, NodeMessageType.NODE_HELLO)
    assert is_node_message(NodeMessageType.NODE_HELLO, NodeMessageType.NODE_HELLO)


@pytest.mark.asyncio
async def test_decode_skips_blank_lines():
    peeker = _peeker(b"\n\nNodeHello\nFCPVersion=2.0\n")
    assert await decode_message_type(peeker) is NodeMessageType.NODE_HELLO
    assert await peeker.next_line() == "FCPVersion=2.0"


@pytest.mark.asyncio
async def test_decode_at_end_raises():
    with pytest.raises(UnexpectedEOFError):
        await decode_message_type(_peeker(b""))


@pytest.mark.asyncio
async def test_decode_unknown_raises():
    with pytest.raises(UnknownMessageTypeError):
        await decode_message_type(_peeker(b"Bogus\n"))