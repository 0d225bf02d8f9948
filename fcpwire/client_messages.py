"""Messages a client sends to the node."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .fields import Field, Fields
from .identifier import UniqueIdentifier
from .message import Message, MessagePayload
from .message_type import ClientMessageType
from .options import (
    DirectUpload,
    DiskReturn,
    DiskUpload,
    Persistence,
    PriorityClass,
    RedirectUpload,
    ReturnType,
    UploadType,
    Verbosity,
)
from .values import URI, ContentType, FCPVersion

EXPECTED_VERSION = FCPVersion.V2_0


def _flag(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True, kw_only=True)
class ClientHelloMessage:
    """Opens a session with the node."""

    name: str
    version: FCPVersion = EXPECTED_VERSION

    def to_message(self) -> Message:
        return Message(
            ClientMessageType.CLIENT_HELLO,
            Fields([Field("Name", self.name), Field("ExpectedVersion", str(self.version))]),
        )


@dataclass(frozen=True, kw_only=True)
class ClientGetMessage:
    """Requests the data stored under a key."""

    identifier: UniqueIdentifier
    uri: URI
    verbosity: Verbosity
    return_type: ReturnType
    max_retries: int
    priority: PriorityClass
    persistence: Persistence
    ignore_data_store: bool
    """Always fetch from the network."""
    data_store_only: bool
    """Only look in the local data store."""
    real_time: bool
    max_size: Optional[int] = None
    max_temp_size: Optional[int] = None

    def to_message(self) -> Message:
        entries = [
            Field("Identifier", str(self.identifier)),
            Field("URI", str(self.uri)),
            Field("Verbosity", str(self.verbosity)),
            Field("ReturnType", str(self.return_type)),
            Field("MaxRetries", str(self.max_retries)),
            Field("Priority", str(self.priority)),
            Field("Persistence", str(self.persistence)),
            Field("IgnoreDS", _flag(self.ignore_data_store)),
            Field("DSonly", _flag(self.data_store_only)),
            Field("RealTimeFlag", _flag(self.real_time)),
        ]
        if isinstance(self.return_type, DiskReturn):
            entries.append(Field("Filename", str(self.return_type.path)))
        if self.max_size is not None:
            entries.append(Field("MaxSize", str(self.max_size)))
        if self.max_temp_size is not None:
            entries.append(Field("MaxTempSize", str(self.max_temp_size)))
        return Message(ClientMessageType.CLIENT_GET, Fields(entries))


@dataclass(frozen=True, kw_only=True)
class ClientPutMessage:
    """Inserts data under a key."""

    uri: URI
    identifier: UniqueIdentifier
    verbosity: Verbosity
    max_retries: int
    priority: PriorityClass
    get_only_chk: bool
    dont_compress: bool
    persistence: Persistence
    upload_from: UploadType
    is_binary_blob: bool
    real_time: bool
    content_type: Optional[ContentType] = None
    target_filename: Optional[str] = None

    def to_message(self) -> Message:
        entries = [
            Field("Identifier", str(self.identifier)),
            Field("URI", str(self.uri)),
            Field("Verbosity", str(self.verbosity)),
            Field("MaxRetries", str(self.max_retries)),
            Field("PriorityClass", str(self.priority)),
            Field("GetCHKOnly", _flag(self.get_only_chk)),
            Field("DontCompress", _flag(self.dont_compress)),
            Field("Persistence", str(self.persistence)),
            Field("UploadFrom", str(self.upload_from)),
            Field("BinaryBlob", _flag(self.is_binary_blob)),
            Field("RealTimeFlag", _flag(self.real_time)),
        ]
        if self.content_type is not None:
            entries.append(Field("Metadata.ContentType", str(self.content_type)))
        if self.target_filename is not None:
            entries.append(Field("TargetFilename", self.target_filename))
        if isinstance(self.upload_from, DiskUpload):
            entries.append(Field("Filename", str(self.upload_from.path)))
        if isinstance(self.upload_from, RedirectUpload):
            entries.append(Field("TargetURI", str(self.upload_from.target)))

        payload = None
        if isinstance(self.upload_from, DirectUpload):
            payload = MessagePayload(bytes(self.upload_from.data), "DataLength")
        return Message(ClientMessageType.CLIENT_PUT, Fields(entries), payload)


@dataclass(frozen=True, kw_only=True)
class GenerateSSKMessage:
    """Asks the node for a new SSK key pair."""

    identifier: UniqueIdentifier

    def to_message(self) -> Message:
        return Message(
            ClientMessageType.GENERATE_SSK,
            Fields([Field("Identifier", str(self.identifier))]),
        )


@dataclass(frozen=True, kw_only=True)
class ListPeerMessage:
    """Asks the node about one of its peers."""

    node_identifier: UniqueIdentifier
    with_metadata: bool
    with_volatile: bool

    def to_message(self) -> Message:
        return Message(
            ClientMessageType.LIST_PEER,
            Fields(
                [
                    Field("NodeIdentifier", str(self.node_identifier)),
                    Field("WithMetadata", _flag(self.with_metadata)),
                    Field("WithVolatile", _flag(self.with_volatile)),
                ]
            ),
        )


@dataclass(frozen=True, kw_only=True)
class SubscribeUSKMessage:
    """Subscribes to updates of a USK."""

    uri: URI
    dont_poll: bool
    identifier: UniqueIdentifier
    priority_class: PriorityClass
    real_time: bool
    sparse_poll: bool
    ignore_usk_datehints: bool

    def to_message(self) -> Message:
        return Message(
            ClientMessageType.SUBSCRIBE_USK,
            Fields(
                [
                    Field("Identifier", str(self.identifier)),
                    Field("URI", str(self.uri)),
                    Field("DontPoll", _flag(self.dont_poll)),
                    Field("SparsePoll", _flag(self.sparse_poll)),
                    Field("PriorityClass", str(self.priority_class)),
                    Field("RealTimeFlag", _flag(self.real_time)),
                    Field("IgnoreUSKDatehints", _flag(self.ignore_usk_datehints)),
                ]
            ),
        )