from __future__ import annotations


class DecodeError(ValueError):
    """Base class for anything that stops a SPLICE decode."""


class InvalidHeader(DecodeError):
    """The 6-byte tag at offset 0 is not ``SPLICE``."""


class StreamError(DecodeError):
    """The byte stream failed or cannot hold the declared payload."""


class TruncatedStream(StreamError, EOFError):
    """The stream ended before a field was fully read."""
