"""Byte-stream helpers for the SPLICE decoder.

Any object with a ``read(size) -> bytes`` method works as a stream.
Raw streams may return fewer bytes than asked for, so every fixed-size
field goes through :func:`read_exact`, which keeps reading until the
field is complete or the stream reports end of data (``b""``).
"""

from __future__ import annotations

from typing import BinaryIO

from .errors import StreamError, TruncatedStream


def read_some(stream: BinaryIO, size: int) -> bytes:
    """Read up to ``size`` bytes, stopping early only at end of stream."""
    chunks = []
    got = 0
    while got < size:
        try:
            chunk = stream.read(size - got)
        except OSError as err:
            raise StreamError(f"read failed after {got} of {size} bytes: {err}") from err
        if not chunk:
            break
        chunks.append(chunk)
        got += len(chunk)
    return b"".join(chunks)


def read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    """Read exactly ``size`` bytes for field ``what`` or raise TruncatedStream."""
    data = read_some(stream, size)
    if len(data) != size:
        raise TruncatedStream(
            f"unexpected end of data reading {what} ({len(data)} of {size} bytes)"
        )
    return data


class LimitedReader:
    """Stream adapter that stops after ``limit`` bytes.

    Once ``remaining`` reaches zero, ``read`` returns ``b""`` even if the
    wrapped stream holds more data.
    """

    def __init__(self, stream: BinaryIO, limit: int) -> None:
        if limit < 0:
            raise StreamError(f"negative payload length {limit}")
        self._stream = stream
        self.remaining = limit

    def read(self, size: int = -1) -> bytes:
        if size < 0 or size > self.remaining:
            size = self.remaining
        if size == 0:
            return b""
        data = self._stream.read(size)
        self.remaining -= len(data)
        return data
