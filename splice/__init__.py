"""Read-only decoder for SPLICE drum pattern files."""

from .decoder import (  # noqa: F401
    MAGIC,
    decode,
    decode_bytes,
    decode_file,
)
from .errors import (  # noqa: F401
    DecodeError,
    InvalidHeader,
    StreamError,
    TruncatedStream,
)
from .pattern import (  # noqa: F401
    STEP_COUNT,
    Pattern,
    Track,
    format_steps,
    format_tempo,
)
