from __future__ import annotations

from dataclasses import dataclass
import math
import struct
from typing import Tuple


STEP_COUNT = 16
STEPS_PER_GROUP = 4


def format_steps(steps: bytes) -> str:
    """Render steps as ``|x---|x---|x---|x---|`` (nonzero byte = ``x``)."""
    out = []
    for idx, value in enumerate(steps):
        if idx % STEPS_PER_GROUP == 0:
            out.append("|")
        out.append("x" if value else "-")
    out.append("|")
    return "".join(out)


def _same_float32(text: str, packed: bytes) -> bool:
    try:
        return struct.pack("<f", float(text)) == packed
    except OverflowError:
        # rounded up past the float32 range
        return False


def format_tempo(value: float) -> str:
    """Shortest float32 rendering in ``%g`` layout (``120``, ``98.4``, ``1e+06``)."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    packed = struct.pack("<f", value)
    # float32 never needs more than 9 significant digits to round-trip
    digits = 9
    for candidate in range(1, 10):
        if _same_float32(f"{value:.{candidate - 1}e}", packed):
            digits = candidate
            break

    sci = f"{value:.{digits - 1}e}"
    exponent = int(sci.rsplit("e", 1)[1])
    if exponent < -4 or exponent >= 6:
        return sci
    return f"{value:.{max(digits - 1 - exponent, 0)}f}"


@dataclass(frozen=True)
class Track:
    """One instrument lane: id, raw instrument name and 16 step bytes."""

    id: int
    instrument_raw: bytes
    steps: bytes

    @property
    def instrument(self) -> str:
        """Instrument name as text; undecodable bytes become U+FFFD."""
        return self.instrument_raw.decode("utf-8", errors="replace")

    @property
    def active_steps(self) -> Tuple[int, ...]:
        """0-based indexes of the nonzero step bytes."""
        return tuple(idx for idx, value in enumerate(self.steps) if value)

    def __str__(self) -> str:
        return f"({self.id}) {self.instrument}\t{format_steps(self.steps)}"


@dataclass(frozen=True)
class Pattern:
    """Decoded contents of a .splice file.

    ``tracks`` keeps on-disk order. The track count is not stored in the
    file; it is however many records fit in the declared payload.
    """

    version: str
    tempo: float
    tracks: Tuple[Track, ...]

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "tempo": self.tempo,
            "tracks": [
                {
                    "id": track.id,
                    "instrument": track.instrument,
                    "steps": list(track.steps),
                }
                for track in self.tracks
            ],
        }

    def __str__(self) -> str:
        lines = [
            f"Saved with HW Version: {self.version}\n",
            f"Tempo: {format_tempo(self.tempo)}\n",
        ]
        for track in self.tracks:
            lines.append(f"{track}\n")
        return "".join(lines)
