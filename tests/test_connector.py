import asyncio

import pytest

from fcpwire.client_messages import GenerateSSKMessage
from fcpwire.connector import FCPConnector, Listener, identity_filter, type_filter
from fcpwire.errors import UnexpectedEOFError
from fcpwire.fields import Field, Fields
from fcpwire.identifier import UniqueIdentifier
from fcpwire.message import Message
from fcpwire.message_type import ClientMessageType, NodeMessageType


class _Writer:
    def __init__(self):
        self.data = bytearray()

    def write(self, data):
        self.data.extend(data)

    async def drain(self):
        return None


NODE_HELLO = b"NodeHello\nFCPVersion=2.0\nNode=Fred\nConnectionIdentifier=c1\nEndMessage\n"


async def _connector(feed=b"", eof=True):
    reader = asyncio.StreamReader()
    reader.feed_data(feed)
    if eof:
        reader.feed_eof()
    writer = _Writer()
    connector = await FCPConnector.create(reader, writer, "Test")
    return connector, writer


def _message(message_type, pairs):
    return Message(message_type, Fields([Field(k, v) for k, v in pairs]))


@pytest.mark.asyncio
async def test_create_sends_client_hello():
    _, writer = await _connector()
    assert bytes(writer.data) == b"ClientHello\nName=Test\nExpectedVersion=2.0\nEndMessage\n"


@pytest.mark.asyncio
async def test_send_writes_encoded_message():
    connector, writer = await _connector()
    writer.data.clear()
    message = GenerateSSKMessage(identifier=UniqueIdentifier.new("Gen"))
    await connector.send(message)
    assert bytes(writer.data) == message.to_message().encode()


@pytest.mark.asyncio
async def test_listen_routes_to_listener_then_fails_at_eof():
    connector, _ = await _connector(NODE_HELLO)
    listener = Listener([type_filter(NodeMessageType.NODE_HELLO)])
    await connector.add_listener(listener)

    with pytest.raises(UnexpectedEOFError):
        await connector.listen()

    received = await asyncio.wait_for(listener.receive(), 1)
    assert received.message_type is NodeMessageType.NODE_HELLO
    assert received.fields.require("Node").value == "Fred"


@pytest.mark.asyncio
async def test_lower_priority_value_is_served_first():
    connector, _ = await _connector(NODE_HELLO)
    late = Listener([], priority=5)
    early = Listener([], priority=1)
    await connector.add_listener(late)
    await connector.add_listener(early)

    with pytest.raises(UnexpectedEOFError):
        await connector.listen()

    received = await asyncio.wait_for(early.receive(), 1)
    assert received.message_type is NodeMessageType.NODE_HELLO
    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(late.receive(), 0.05)


@pytest.mark.asyncio
async def test_closed_listener_is_skipped():
    connector, _ = await _connector(NODE_HELLO)
    closed = Listener([])
    open_one = Listener([])
    await connector.add_listener(closed)
    await connector.add_listener(open_one)
    closed.close()

    with pytest.raises(UnexpectedEOFError):
        await connector.listen()

    received = await asyncio.wait_for(open_one.receive(), 1)
    assert received.message_type is NodeMessageType.NODE_HELLO
    assert closed.closed is True


@pytest.mark.asyncio
async def test_listen_only_once():
    connector, _ = await _connector(eof=False)
    task = asyncio.create_task(connector.listen())
    await asyncio.sleep(0)
    try:
        with pytest.raises(RuntimeError):
            await connector.listen()
    finally:
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task


def test_listener_matches_requires_all_filters():
    listener = Listener([lambda m: True, lambda m: False])
    message = _message(NodeMessageType.NODE_HELLO, [])
    assert listener.matches(message) is False
    assert Listener([lambda m: True]).matches(message) is True


def test_closed_listener_does_not_match():
    listener = Listener([])
    listener.close()
    assert listener.matches(_message(NodeMessageType.NODE_HELLO, [])) is False


@pytest.mark.asyncio
async def test_deliver_then_receive():
    listener = Listener([])
    message = _message(NodeMessageType.ALL_DATA, [])
    await listener.deliver(message)
    assert await listener.receive() == message


def test_identity_filter():
    identity = UniqueIdentifier.new("Get")
    check = identity_filter(identity)
    assert check(_message(NodeMessageType.ALL_DATA, [("Identifier", str(identity))])) is True
    other = UniqueIdentifier.new("Get")
    assert check(_message(NodeMessageType.ALL_DATA, [("Identifier", str(other))])) is False
    assert check(_message(NodeMessageType.ALL_DATA, [])) is False
    assert check(_message(NodeMessageType.ALL_DATA, [("Identifier", "junk")])) is False


def test_type_filter():
    check = type_filter(NodeMessageType.DATA_FOUND)
    assert check(_message(NodeMessageType.DATA_FOUND, [])) is True
    assert check(_message(NodeMessageType.ALL_DATA, [])) is False
    assert check(_message(ClientMessageType.CLIENT_GET, [])) is False