"""Buffered byte input and position-tracking source streams."""

from __future__ import annotations

import io
from typing import BinaryIO, Optional

from .types import ByteOrder, PcmError

BUFFER_SIZE = 16384


class ByteReader:
    """Reads bytes from a binary file object through a fixed-size buffer."""

    def __init__(self, fp: BinaryIO) -> None:
        self.fp = fp
        self._buf = b""
        self._pos = 0
        self.flush()

    def _fill(self, size: int) -> bytes:
        parts = []
        remaining = size
        while remaining > 0:
            chunk = self.fp.read(remaining)
            if not chunk:
                break
            parts.append(chunk)
            remaining -= len(chunk)
        return b"".join(parts)

    def flush(self) -> int:
        """Discard buffered data, refill from the file and return the new size."""
        self._buf = self._fill(BUFFER_SIZE)
        self._pos = 0
        return len(self._buf)

    def read(self, n: int) -> bytes:
        """Read up to ``n`` bytes; fewer are returned only at end of input."""
        if n <= 0:
            return b""
        parts = []
        needed = n
        while needed > 0:
            if self._pos >= len(self._buf) and not self.flush():
                break
            chunk = self._buf[self._pos:self._pos + needed]
            self._pos += len(chunk)
            needed -= len(chunk)
            parts.append(chunk)
        return b"".join(parts)

    def peek(self, n: int) -> bytes:
        """Return up to ``n`` upcoming bytes without consuming them."""
        available = len(self._buf) - self._pos
        if n > available:
            remaining = self._buf[self._pos:]
            self._buf = remaining + self._fill(BUFFER_SIZE - len(remaining))
            self._pos = 0
        return self._buf[self._pos:self._pos + max(n, 0)]


def _probe_size(fp: BinaryIO) -> Optional[int]:
    seekable = getattr(fp, "seekable", None)
    if seekable is not None and not seekable():
        return None
    try:
        end = fp.seek(0, io.SEEK_END)
        if end is None:
            end = fp.tell()
        fp.seek(0, io.SEEK_SET)
    except (AttributeError, OSError, ValueError):
        return None
    return end


class SourceStream:
    """A buffered input that tracks its byte position and seeks when it can."""

    def __init__(self, fp: BinaryIO) -> None:
        self.fp = fp
        size = _probe_size(fp)
        self.seekable = size is not None
        self.file_size = size if size is not None and size >= 0 else 0
        self.filepos = 0
        self.reader = ByteReader(fp)

    def read(self, n: int) -> bytes:
        """Read up to ``n`` bytes and advance the position by what was read."""
        data = self.reader.read(n)
        self.filepos += len(data)
        return data

    def peek(self, n: int) -> bytes:
        """Return up to ``n`` upcoming bytes without advancing."""
        return self.reader.peek(n)

    def read_int(self, size: int, order: ByteOrder) -> int:
        """Read an unsigned integer of ``size`` bytes in the given byte order."""
        data = self.read(size)
        if len(data) != size:
            raise PcmError("unexpected end of stream")
        byteorder = "big" if order == ByteOrder.BE else "little"
        return int.from_bytes(data, byteorder)

    def seek_set(self, dest: int) -> None:
        """Move to absolute byte offset ``dest``.

        Streams that cannot seek are advanced by reading and discarding data,
        so only forward moves are possible on them.
        """
        if self.seekable:
            try:
                self.fp.seek(dest, io.SEEK_SET)
            except (OSError, ValueError) as exc:
                raise PcmError(f"error seeking to byte {dest}") from exc
            self.reader.flush()
        else:
            if dest < self.filepos:
                raise PcmError("cannot seek backward in a non-seekable stream")
            remaining = dest - self.filepos
            while remaining > 0:
                skipped = self.reader.read(min(remaining, 1024))
                if not skipped:
                    break
                remaining -= len(skipped)
        self.filepos = dest