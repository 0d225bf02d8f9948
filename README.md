# fcpwire

An asyncio client library for the Freenet Client Protocol (FCP 2.0). It
encodes and decodes FCP messages and manages a connection to a running node.
It has no dependencies outside the standard library.

## Installation

```
pip install fcpwire
```

## Modules

- `fcpwire.message`: `Message` holds a message type, its `Fields` and an
  optional `MessagePayload`. `Message.encode()` returns the wire bytes, ending
  in `EndMessage` or, with a payload, in a `DataLength=<n>` line, a `Data`
  line and the raw data. `Message.decode(reader)` reads one message from a
  `PeekableReader`, including any payload.
- `fcpwire.reader`: `PeekableReader` reads lines from any object with async
  `readline()` and `readexactly(n)` (such as `asyncio.StreamReader`) and can
  look ahead with a `Peeker` without consuming lines.
- `fcpwire.fields`: `Field` (one `key=value` line) and `Fields` with `get`,
  `require` and `payload_size_hint`.
- `fcpwire.message_type`: the `ClientMessageType` and `NodeMessageType`
  enums, `parse_message_type`, `is_node_message` and `expect_node_message`.
- `fcpwire.client_messages`: `ClientHelloMessage`, `ClientGetMessage`,
  `ClientPutMessage`, `GenerateSSKMessage`, `ListPeerMessage` and
  `SubscribeUSKMessage`, each with `to_message()`.
- `fcpwire.node_messages`: `NodeHelloMessage`, `AllDataMessage`,
  `DataFoundMessage`, `GetFailedMessage`, `PutSuccessfulMessage`,
  `PutFailedMessage` and `SSKKeypairMessage`, each with a `from_message()`
  class method that checks the message type and required fields.
  `DATA_NOT_FOUND_CODE` is the `GetFailed` code for missing data.
- `fcpwire.options`: `Persistence`, `PriorityClass` (ordered so that
  `MAXIMUM` is the greatest), the return modes `DirectReturn`, `DiskReturn`,
  `NoReturn`, the upload modes `DirectUpload`, `DiskUpload`,
  `RedirectUpload`, and `Verbosity` with `as_bitmask()`.
- `fcpwire.values`: `URI`, `ConnectionIdentifier`, `ContentType` (MIME type
  parsing) and `FCPVersion`.
- `fcpwire.identifier`: `UniqueIdentifier`, request identifiers of the form
  `[Mycelink] <name> - <base64 nonce>`; `UniqueIdentifier.new(name)` makes
  one with a random 32-byte nonce, `UniqueIdentifier.parse` reads one back.
- `fcpwire.connector`: `FCPConnector` sends messages and passes each
  incoming message to the first open `Listener`, in priority order, whose
  filters all match. `identity_filter` and `type_filter` build filters.
- `fcpwire.errors`: every decoding failure is raised as a subclass of
  `DecodeError`.

## Example

```python
import asyncio

from fcpwire.connector import FCPConnector, Listener, type_filter
from fcpwire.message_type import NodeMessageType
from fcpwire.node_messages import NodeHelloMessage


async def main():
    reader, writer = await asyncio.open_connection("localhost", 9481)
    connector = await FCPConnector.create(reader, writer, "example-client")

    listener = Listener([type_filter(NodeMessageType.NODE_HELLO)])
    await connector.add_listener(listener)

    listen_task = asyncio.create_task(connector.listen())
    hello = NodeHelloMessage.from_message(await listener.receive())
    print(hello.node, hello.fcp_version)

    listener.close()
    listen_task.cancel()


asyncio.run(main())
```

`FCPConnector.create` sends the `ClientHello` itself. `listen()` may be
called once per connector; it runs until a message cannot be decoded, and
then raises that `DecodeError`.

## What it does not do

- There is no command-line tool; it is a library only.
- There are no ready-made put or get operations: a caller builds a
  `ClientPutMessage` or `ClientGetMessage`, sends it, and matches the replies
  with listeners.
- Message types such as `URIGenerated`, `ProtocolError`, `TestDDAReply`,
  `TestDDAComplete` and the `SubscribedUSK` family are recognised by name but
  have no typed message class; they arrive as plain `Message` objects.

## Running the tests

```
pip install -e ".[test]"
pytest
```