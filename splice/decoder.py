"""Decode SPLICE drum pattern files.

Layout (offsets from the start of the stream):

  0   6   tag, literal ``SPLICE``
  6   8   total_size, int64 big-endian
  14  32  version, zero-padded text
  46  4   tempo, float32 little-endian
  50  ..  track records, ``total_size - 36`` bytes in all

Each track record is ``id`` (uint32 LE), ``name_len`` (1 byte), the
instrument name (``name_len`` bytes) and 16 step bytes. The record count
is not stored; records are read until the payload is used up.
"""

from __future__ import annotations

import io
import logging
import os
import struct
from typing import BinaryIO, List, Union

from .errors import InvalidHeader, TruncatedStream
from .pattern import STEP_COUNT, Pattern, Track
from .stream import LimitedReader, read_exact, read_some

logger = logging.getLogger(__name__)

MAGIC = b"SPLICE"
HEADER = struct.Struct(">6sq32s")
TEMPO = struct.Struct("<f")
TRACK_ID = struct.Struct("<I")
VERSION_SIZE = 32
# total_size counts the version slot and tempo, which are already consumed
PAYLOAD_ADJUST = VERSION_SIZE + TEMPO.size


def _read_track(reader: LimitedReader, index: int) -> Track | None:
    """Read one track record, or return None at a clean record boundary."""
    head = read_some(reader, TRACK_ID.size)
    if not head:
        return None
    if len(head) != TRACK_ID.size:
        raise TruncatedStream(
            f"unexpected end of data reading track {index} id "
            f"({len(head)} of {TRACK_ID.size} bytes)"
        )
    (track_id,) = TRACK_ID.unpack(head)

    name_len = read_exact(reader, 1, f"track {index} name length")[0]
    name = read_exact(reader, name_len, f"track {index} instrument name")
    steps = read_exact(reader, STEP_COUNT, f"track {index} steps")
    return Track(id=track_id, instrument_raw=name, steps=steps)


def decode(stream: BinaryIO) -> Pattern:
    """Decode a pattern from a binary stream.

    The stream is consumed and never rewound. Bytes past the declared
    payload are left unread.

    Raises
    ------
    TruncatedStream
        The header, tempo or a track record ends early.
    StreamError
        The stream raised ``OSError`` or the declared size is impossible.
    InvalidHeader
        The tag is not ``SPLICE``.
    """
    header = read_exact(stream, HEADER.size, "header")
    tempo_raw = read_exact(stream, TEMPO.size, "tempo")

    tag, total_size, version_slot = HEADER.unpack(header)
    if tag != MAGIC:
        raise InvalidHeader(f"bad tag: {tag!r}")
    (tempo,) = TEMPO.unpack(tempo_raw)
    version = version_slot.rstrip(b"\x00").decode("utf-8", errors="replace")

    payload_size = total_size - PAYLOAD_ADJUST
    logger.debug(
        f"header: version={version!r} tempo={tempo} total_size={total_size} "
        f"payload={payload_size}"
    )
    reader = LimitedReader(stream, payload_size)

    tracks: List[Track] = []
    while True:
        track = _read_track(reader, len(tracks))
        if track is None:
            break
        logger.debug(
            f"track {len(tracks)}: id={track.id} instrument={track.instrument!r} "
            f"({reader.remaining} payload bytes left)"
        )
        tracks.append(track)

    logger.info(f"decoded pattern {version!r} with {len(tracks)} tracks")
    return Pattern(version=version, tempo=tempo, tracks=tuple(tracks))


def decode_bytes(data: bytes) -> Pattern:
    return decode(io.BytesIO(data))


def decode_file(path: Union[str, os.PathLike]) -> Pattern:
    """Open ``path`` and decode it; open errors propagate as ``OSError``."""
    with open(path, "rb") as handle:
        return decode(handle)
