"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ByteValue is an int in [0, 255] at the boundary; alphabet membership is decided
      by core/constraints.py, never here
    - All kernel states and error codes encoded as Enums, no raw string matching
    - INT64_MIN/INT64_MAX are the single source of truth for checked arithmetic bounds

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Value Types ─────────────────────────────────────────────────

ByteValue = NewType("ByteValue", int)       # 0–255
Position = NewType("Position", int)         # >= 0
HexString = NewType("HexString", str)       # even length, [0-9a-fA-F]


# ─── Bounds ──────────────────────────────────────────────────────

BYTE_MIN: int = 0
BYTE_MAX: int = 255
ASCII_MAX: int = 127
PRINTABLE_MIN: int = 32
PRINTABLE_MAX: int = 126

INT64_MIN: int = -(2 ** 63)
INT64_MAX: int = 2 ** 63 - 1


# ─── Enums ───────────────────────────────────────────────────────

class WriteState(str, Enum):
    """Write-path kernel states. SEALED and ABORTED are terminal."""
    CLOSED = "closed"
    OPEN = "open"
    SEALED = "sealed"
    ABORTED = "aborted"


class InvalidByteReason(str, Enum):
    """Classification of a byte outside the alphabet, in priority order."""
    FORBIDDEN_NBSP = "forbidden non-breaking-space"
    FORBIDDEN_CONTINUATION = "forbidden continuation marker"
    FORBIDDEN = "forbidden value"
    EXCEEDS_UPPER_BOUND = "exceeds upper bound"
    NEGATIVE = "negative value"


class CodecErrorCode(str, Enum):
    """Error tags carried by Err outcomes of the codecs and parsers."""
    INVALID_LENGTH = "INVALID_LENGTH"
    INVALID_CHARACTER = "INVALID_CHARACTER"
    LENGTH_MISMATCH = "LENGTH_MISMATCH"
    EXCEEDS_TARGET = "EXCEEDS_TARGET"
    CODE_POINT_OUT_OF_RANGE = "CODE_POINT_OUT_OF_RANGE"
    INVALID_INTEGER = "INVALID_INTEGER"
    INVALID_BYTE = "INVALID_BYTE"
    EMPTY_INPUT = "EMPTY_INPUT"


TERMINAL_STATES: frozenset[WriteState] = frozenset({
    WriteState.SEALED,
    WriteState.ABORTED,
})
