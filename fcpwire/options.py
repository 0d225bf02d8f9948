"""Request options: persistence, priority, return and upload modes, verbosity."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import ClassVar, Union

from .values import URI


class Persistence(Enum):
    """How long the node keeps a request."""

    CONNECTION = "connection"
    REBOOT = "reboot"
    FOREVER = "forever"

    def __str__(self) -> str:
        return self.value


class PriorityClass(Enum):
    """Request priority; a lower wire number is a higher priority."""

    MAXIMUM = 0
    VERY_HIGH = 1
    HIGH = 2
    MEDIUM = 3
    LOW = 4
    VERY_LOW = 5
    PAUSE = 6

    def __str__(self) -> str:
        return str(self.value)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PriorityClass):
            return NotImplemented
        return self.value > other.value

    def __le__(self, other: object) -> bool:
        if not isinstance(other, PriorityClass):
            return NotImplemented
        return self.value >= other.value

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, PriorityClass):
            return NotImplemented
        return self.value < other.value

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, PriorityClass):
            return NotImplemented
        return self.value <= other.value


@dataclass(frozen=True)
class DirectReturn:
    """Return fetched data inside the reply."""

    mode: ClassVar[str] = "direct"

    def __str__(self) -> str:
        return self.mode


@dataclass(frozen=True)
class DiskReturn:
    """Write fetched data to a file on the node's disk."""

    path: Path
    mode: ClassVar[str] = "disk"

    def __str__(self) -> str:
        return self.mode


@dataclass(frozen=True)
class NoReturn:
    """Do not return the fetched data."""

    mode: ClassVar[str] = "none"

    def __str__(self) -> str:
        return self.mode


ReturnType = Union[DirectReturn, DiskReturn, NoReturn]


@dataclass(frozen=True)
class DirectUpload:
    """Upload data carried in the message payload."""

    data: bytes
    mode: ClassVar[str] = "direct"

    def __str__(self) -> str:
        return self.mode


@dataclass(frozen=True)
class DiskUpload:
    """Upload a file from the node's disk."""

    path: Path
    mode: ClassVar[str] = "disk"

    def __str__(self) -> str:
        return self.mode


@dataclass(frozen=True)
class RedirectUpload:
    """Insert a redirect to another key."""

    target: URI
    mode: ClassVar[str] = "redirect"

    def __str__(self) -> str:
        return self.mode


UploadType = Union[DirectUpload, DiskUpload, RedirectUpload]

_SIMPLE_PROGRESS = 1
_SENDING_TO_NETWORK = 1 << 1
_COMPATIBILITY_MODE = 1 << 2
_EXPECTED_HASH = 1 << 3
_EXPECTED_MIME = 1 << 5
_EXPECTED_DATA_LENGTH = 1 << 6


@dataclass(frozen=True)
class Verbosity:
    """Which progress messages the node should send."""

    simple_progress: bool = False
    sending_to_network: bool = False
    compatibility_mode: bool = False
    expected_hashes: bool = False
    expected_mime: bool = False
    expected_data_length: bool = False

    def as_bitmask(self) -> int:
        """Return the flags as the integer bitmask used on the wire."""
        flags = (
            (self.simple_progress, _SIMPLE_PROGRESS),
            (self.sending_to_network, _SENDING_TO_NETWORK),
            (self.compatibility_mode, _COMPATIBILITY_MODE),
            (self.expected_hashes, _EXPECTED_HASH),
            (self.expected_mime, _EXPECTED_MIME),
            (self.expected_data_length, _EXPECTED_DATA_LENGTH),
        )
        mask = 0
        for enabled, bit in flags:
            if enabled:
                mask |= bit
        return mask

    def __str__(self) -> str:
        return str(self.as_bitmask())