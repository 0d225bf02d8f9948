"""Line reader over an asynchronous byte stream that allows looking ahead."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional, Protocol

from .errors import UnexpectedEOFError, Utf8DecodeError


class AsyncByteStream(Protocol):
    async def readline(self) -> bytes: ...

    async def readexactly(self, n: int) -> bytes: ...


@dataclass(frozen=True)
class PeekerStats:
    """How many lines a peeker has consumed."""

    current_line: int

    def __sub__(self, other: int) -> "PeekerStats":
        if not isinstance(other, int):
            return NotImplemented
        if other > self.current_line:
            raise ValueError("cannot subtract more lines than were consumed")
        return PeekerStats(self.current_line - other)


class PeekableReader:
    """Reads lines from a stream while caching lines that were peeked at."""

    def __init__(self, stream: AsyncByteStream) -> None:
        self._stream = stream
        self._lines: list[str] = []

    async def get_peeked_line(self, index: int) -> Optional[str]:
        """Return the cached line at ``index``, reading one more line if needed."""
        if index < len(self._lines):
            return self._lines[index]
        line = await self._read_raw_line()
        if line is not None:
            self._lines.append(line)
        return line

    async def read_line(self) -> Optional[str]:
        """Consume and return the next line, or ``None`` at end of stream."""
        if self._lines:
            return self._lines.pop(0)
        return await self._read_raw_line()

    async def read_exact(self, size: int) -> bytes:
        """Read exactly ``size`` raw bytes; no lines may be cached."""
        if self._lines:
            raise RuntimeError("Cannot read while lines are still cached")
        try:
            return await self._stream.readexactly(size)
        except asyncio.IncompleteReadError as exc:
            raise UnexpectedEOFError() from exc

    async def read_contentful_line(self) -> Optional[str]:
        """Consume lines until one that is not blank, or end of stream."""
        line = await self.read_line()
        while line is not None and line.rstrip() == "":
            line = await self.read_line()
        return line

    def advance_to(self, stats: PeekerStats) -> None:
        """Drop the cached lines that a peeker has consumed."""
        if stats.current_line > len(self._lines):
            raise ValueError("peeker stats point beyond the cached lines")
        del self._lines[: stats.current_line]

    async def _read_raw_line(self) -> Optional[str]:
        raw = await self._stream.readline()
        if not raw:
            return None
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise Utf8DecodeError(str(exc)) from exc
        return text[:-1]


class Peeker:
    """Walks over the lines of a reader without consuming them."""

    def __init__(self, reader: PeekableReader) -> None:
        self._reader = reader
        self._next = 0

    async def next_line(self) -> Optional[str]:
        """Return the next line, or ``None`` at end of stream."""
        self._next += 1
        return await self._reader.get_peeked_line(self._next - 1)

    async def next_contentful_line(self) -> Optional[str]:
        """Return the next line that is not blank, or ``None`` at end of stream."""
        line = await self.next_line()
        while line is not None and line.rstrip() == "":
            line = await self.next_line()
        return line

    async def has_next_line(self) -> bool:
        """Tell whether another line is available."""
        return await self._reader.get_peeked_line(self._next) is not None

    async def current_line(self) -> Optional[str]:
        """Return the line returned last."""
        if self._next == 0:
            raise RuntimeError(
                "Peeker hasn't been used yet and therefore has no current line"
            )
        return await self._reader.get_peeked_line(self._next - 1)

    def stats(self) -> PeekerStats:
        """Return how many lines this peeker has gone through."""
        return PeekerStats(self._next)