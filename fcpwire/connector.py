"""A client connection to an FCP node that routes incoming messages to listeners."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Iterable, Optional, Protocol, Union

from .client_messages import EXPECTED_VERSION, ClientHelloMessage
from .errors import DecodeError
from .identifier import UniqueIdentifier
from .message import Message
from .message_type import NodeMessageType
from .reader import AsyncByteStream, PeekableReader

logger = logging.getLogger(__name__)

MessageFilter = Callable[[Message], bool]


class AsyncByteWriter(Protocol):
    def write(self, data: bytes) -> Any: ...

    async def drain(self) -> None: ...


class Listener:
    """Receives the incoming messages that pass all of its filters."""

    DEFAULT_PRIORITY = 0

    def __init__(
        self, filters: Iterable[MessageFilter], priority: int = DEFAULT_PRIORITY
    ) -> None:
        self.filters = list(filters)
        self.priority = priority
        self._queue: asyncio.Queue[Message] = asyncio.Queue(maxsize=2)
        self._closed = False

    @property
    def closed(self) -> bool:
        """Whether the listener no longer wants messages."""
        return self._closed

    def matches(self, message: Message) -> bool:
        """Tell whether ``message`` passes every filter of an open listener."""
        return not self._closed and all(check(message) for check in self.filters)

    async def deliver(self, message: Message) -> None:
        """Hand ``message`` to the listener; dropped if it is closed."""
        if not self._closed:
            await self._queue.put(message)

    async def receive(self) -> Message:
        """Wait for the next delivered message."""
        return await self._queue.get()

    def close(self) -> None:
        """Stop receiving; the connector drops the listener."""
        self._closed = True


class FCPConnector:
    """A session with an FCP node."""

    def __init__(self, reader: AsyncByteStream, writer: AsyncByteWriter) -> None:
        self._reader = PeekableReader(reader)
        self._writer = writer
        self._write_lock = asyncio.Lock()
        self._listeners_lock = asyncio.Lock()
        self._listeners: list[Listener] = []
        self._listening = False

    @classmethod
    async def create(
        cls, reader: AsyncByteStream, writer: AsyncByteWriter, client_name: str
    ) -> "FCPConnector":
        """Wrap a stream pair and greet the node with a client hello."""
        connector = cls(reader, writer)
        logger.info("Connecting to Freenet over FCP")
        await connector.send(ClientHelloMessage(name=client_name, version=EXPECTED_VERSION))
        return connector

    async def listen(self) -> None:
        """Read messages forever and route them; may be called only once."""
        if self._listening:
            raise RuntimeError("FCPConnector.listen may only be called once per connector")
        self._listening = True
        while True:
            try:
                message = await Message.decode(self._reader)
            except DecodeError as err:
                logger.error("Error while decoding message %s", err)
                raise
            await self._handle_message(message)

    async def _handle_message(self, message: Message) -> None:
        logger.debug("Received message %r", message)
        async with self._listeners_lock:
            has_closed = any(listener.closed for listener in self._listeners)
            target: Optional[Listener] = next(
                (listener for listener in self._listeners if listener.matches(message)),
                None,
            )
            if target is not None:
                await target.deliver(message)
            else:
                logger.warning("Received Message with no listener for it %r", message)
            if has_closed:
                self._listeners = [e for e in self._listeners if not e.closed]

    async def add_listener(self, listener: Listener) -> None:
        """Register ``listener`` ahead of all listeners of equal or larger priority."""
        async with self._listeners_lock:
            position = next(
                (
                    index
                    for index, existing in enumerate(self._listeners)
                    if existing.priority >= listener.priority
                ),
                len(self._listeners),
            )
            self._listeners.insert(position, listener)

    async def send(self, message: Union[Message, Any]) -> None:
        """Encode and write ``message``, or anything with ``to_message()``."""
        if not isinstance(message, Message):
            message = message.to_message()
        logger.debug("Send Message %r", message)
        data = message.encode()
        async with self._write_lock:
            self._writer.write(data)
            await self._writer.drain()


def identity_filter(identity: UniqueIdentifier) -> MessageFilter:
    """Match messages whose ``Identifier`` field equals ``identity``."""

    def check(message: Message) -> bool:
        field = message.fields.get("Identifier")
        if field is None:
            return False
        try:
            return UniqueIdentifier.parse(field.value) == identity
        except DecodeError:
            return False

    return check


def type_filter(message_type: NodeMessageType) -> MessageFilter:
    """Match node messages of type ``message_type``."""

    def check(message: Message) -> bool:
        return (
            isinstance(message.message_type, NodeMessageType)
            and message.message_type is message_type
        )

    return check