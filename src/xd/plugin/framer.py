"""Incremental newline framing over a byte channel."""

from __future__ import annotations

from typing import BinaryIO, Optional

DEFAULT_CHUNK_SIZE = 4096


class StreamFramer:
    """Splits bytes read from a channel into complete lines plus a fragment.

    Bytes before ``_start`` have already been handed out as lines; everything
    from ``_start`` on is pending. A single read may yield zero, one or many
    lines and leave an unterminated fragment behind for the next read.
    """

    def __init__(self, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.chunk_size = chunk_size
        self._buffer = bytearray()
        self._start = 0

    def feed(self, data: bytes) -> int:
        if self._start:
            del self._buffer[: self._start]
            self._start = 0
        self._buffer.extend(data)
        return len(data)

    def fill_from_channel(self, channel: BinaryIO) -> int:
        """Read once from ``channel``; return the byte count, 0 when closed."""

        data = channel.read(self.chunk_size)
        if not data:
            return 0
        return self.feed(data)

    def take_next_complete_line(self) -> Optional[bytes]:
        """Pop the earliest buffered newline-terminated line, without the newline."""

        newline = self._buffer.find(b"\n", self._start)
        if newline == -1:
            return None
        line = bytes(self._buffer[self._start : newline])
        self._start = newline + 1
        return line

    def peek_partial_fragment(self) -> Optional[bytes]:
        """Return the unterminated bytes after the last buffered newline."""

        last_newline = self._buffer.rfind(b"\n", self._start)
        tail_start = self._start if last_newline == -1 else last_newline + 1
        if tail_start >= len(self._buffer):
            return None
        return bytes(self._buffer[tail_start:])

    @property
    def pending(self) -> int:
        return len(self._buffer) - self._start


__all__ = ["StreamFramer", "DEFAULT_CHUNK_SIZE"]
