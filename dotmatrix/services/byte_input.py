"""Byte Input — first validation layer: turns raw user input into byte lists.

Invariants:
    - parse_* return Ok/Err outcomes; nothing here raises for bad input
    - Every parsed byte is checked against the alphabet before it is returned
    - string_to_bytes / bytes_to_string return empty values on invalid input; this
      lenient contract exists only at this convenience layer, never in the kernel
    - is_valid_byte here is the input layer's own check (range + exclusion
      arithmetic), independent of core/constraints.is_valid_byte used by the
      boundary and the kernel

Design Decisions:
    - Comma-separated input is parsed as decimal bytes, anything else as text
"""

from typing import Iterable

from dotmatrix.core import hex_codec, safe_math, safe_path
from dotmatrix.core.constraints import DEFAULT_ALPHABET, ByteAlphabet
from dotmatrix.core.domain_types import BYTE_MAX, BYTE_MIN, ByteValue, CodecErrorCode
from dotmatrix.core.outcome import Err, Ok, Outcome
from dotmatrix.core.string_codec import from_code_points, to_code_points


BYTE_SEPARATOR = ","


def is_valid_byte(value: int, alphabet: ByteAlphabet = DEFAULT_ALPHABET) -> bool:
    return safe_math.in_range_excluding(
        value, BYTE_MIN, alphabet.max_byte, alphabet.forbidden_values,
    )


def is_valid_path(path: str) -> bool:
    return safe_path.is_safe(path)


def string_to_bytes(text: str) -> list[int]:
    """Text -> byte list. Empty list when a character does not fit in one byte."""
    points = to_code_points(text)
    return list(points.value) if points.ok else []


def bytes_to_string(values: Iterable[int]) -> str:
    """Byte list -> text. Empty string when a value is outside [0, 255]."""
    text = from_code_points(values)
    return text.value if text.ok else ""


def bytes_to_hex(values: Iterable[int]) -> str:
    return hex_codec.encode_spaced(values)


def bytes_to_hex_compact(values: Iterable[int]) -> str:
    return hex_codec.encode(values)


def hex_to_bytes(text: str) -> Outcome[list[int]]:
    decoded = hex_codec.decode(text)
    if not decoded.ok:
        return decoded
    return Ok(list(decoded.value))


def _reject_invalid(values: list[int], alphabet: ByteAlphabet) -> Err | None:
    for position, value in enumerate(values):
        if not is_valid_byte(value, alphabet):
            return Err(
                CodecErrorCode.INVALID_BYTE,
                f"Byte at position {position} ({value}) is invalid",
                position,
            )
    return None


def parse_byte_string(
    text: str, alphabet: ByteAlphabet = DEFAULT_ALPHABET,
) -> Outcome[list[ByteValue]]:
    """Comma-separated decimal bytes, e.g. "72, 101, 108"."""
    if not text.strip():
        return Err(CodecErrorCode.EMPTY_INPUT, "No bytes to parse")
    values = []
    for position, piece in enumerate(text.split(BYTE_SEPARATOR)):
        value = safe_math.from_string_in_range(piece, BYTE_MIN, BYTE_MAX)
        if value is None:
            return Err(
                CodecErrorCode.INVALID_INTEGER,
                f"Invalid byte value {piece.strip()!r} at position {position}",
                position,
            )
        values.append(ByteValue(value))
    rejected = _reject_invalid(values, alphabet)
    if rejected is not None:
        return rejected
    return Ok(values)


def parse_input(
    text: str, alphabet: ByteAlphabet = DEFAULT_ALPHABET,
) -> Outcome[list[ByteValue]]:
    """Raw input -> validated bytes: decimal list if it has commas, else text."""
    trimmed = text.strip()
    if not trimmed:
        return Err(CodecErrorCode.EMPTY_INPUT, "No input to parse")
    if BYTE_SEPARATOR in trimmed:
        return parse_byte_string(trimmed, alphabet)
    points = to_code_points(trimmed)
    if not points.ok:
        return points
    values = list(points.value)
    rejected = _reject_invalid(values, alphabet)
    if rejected is not None:
        return rejected
    return Ok(values)
