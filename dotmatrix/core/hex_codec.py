"""Hex Codec — byte sequence <-> hex string conversion and hex utilities.

Invariants:
    - encode* emit two hex digits per byte, in input order; empty input -> ""
    - decode trims surrounding whitespace, then rejects odd length before characters
    - decode("") and decode("   ") are Ok(b""), never Err
    - constant_time_equal* running time does not depend on where the first mismatch is
    - pad_to_byte_length never truncates

Design Decisions:
    - Functions that can fail on input return Ok/Err outcomes (core/outcome.py)
    - hmac.compare_digest for the constant-time predicates instead of a hand loop
    - hexdump output matches `hexdump -C` so substrate reports read like the tool
"""

import hmac
import re
from typing import Iterable

from dotmatrix.core.domain_types import (
    CodecErrorCode, HexString, PRINTABLE_MAX, PRINTABLE_MIN,
)
from dotmatrix.core.outcome import Err, Ok, Outcome
from dotmatrix.core.string_codec import from_code_points, to_code_points


_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_HEX_RE = re.compile(r"[0-9a-fA-F]+")

HEXDUMP_WIDTH: int = 16


# ─── Encoding ────────────────────────────────────────────────────

def encode(data: Iterable[int]) -> HexString:
    """Lowercase hex, no separator. Values must already be in [0, 255]."""
    return HexString(bytes(data).hex())


def encode_uppercase(data: Iterable[int]) -> HexString:
    return HexString(bytes(data).hex().upper())


def encode_spaced(data: Iterable[int]) -> str:
    """Lowercase hex pairs separated by single spaces, no trailing space."""
    return bytes(data).hex(" ")


def encode_spaced_uppercase(data: Iterable[int]) -> str:
    return bytes(data).hex(" ").upper()


# ─── Decoding ────────────────────────────────────────────────────

def decode(text: str) -> Outcome[bytes]:
    """Hex string -> bytes. Mixed case accepted, whitespace trimmed."""
    trimmed = text.strip()
    if len(trimmed) % 2 != 0:
        return Err(
            CodecErrorCode.INVALID_LENGTH,
            f"Hex string has odd length {len(trimmed)}",
        )
    for position, char in enumerate(trimmed):
        if char not in _HEX_DIGITS:
            return Err(
                CodecErrorCode.INVALID_CHARACTER,
                f"Invalid hex character {char!r} at position {position}",
                position,
            )
    return Ok(bytes.fromhex(trimmed))


def is_valid_hex(text: str) -> bool:
    """Non-empty, even length, hex digits only (no whitespace anywhere)."""
    return bool(_HEX_RE.fullmatch(text)) and len(text) % 2 == 0


def byte_length(text: str) -> Outcome[int]:
    """Number of bytes the hex string encodes. Errs only on odd length."""
    trimmed = text.strip()
    if len(trimmed) % 2 != 0:
        return Err(
            CodecErrorCode.INVALID_LENGTH,
            f"Hex string has odd length {len(trimmed)}",
        )
    return Ok(len(trimmed) // 2)


# ─── Comparison ──────────────────────────────────────────────────

def constant_time_equal(a: str, b: str) -> bool:
    """Case-insensitive, whitespace-trimmed comparison in constant time."""
    left = a.strip().lower().encode("utf-8")
    right = b.strip().lower().encode("utf-8")
    return hmac.compare_digest(left, right)


def constant_time_equal_bytes(a: Iterable[int], b: Iterable[int]) -> bool:
    """Raw byte comparison in constant time. Unequal lengths are unequal."""
    return hmac.compare_digest(bytes(a), bytes(b))


# ─── Transforms ──────────────────────────────────────────────────

def pad_to_byte_length(text: str, target_bytes: int) -> Outcome[str]:
    """Left-pad with "00" groups to target_bytes. Errs if already longer."""
    decoded = decode(text)
    if not decoded.ok:
        return decoded
    current = len(decoded.value)
    if current > target_bytes:
        return Err(
            CodecErrorCode.EXCEEDS_TARGET,
            f"Hex string is {current} bytes, longer than target {target_bytes}",
        )
    return Ok("00" * (target_bytes - current) + text.strip())


def xor_hex(a: str, b: str) -> Outcome[str]:
    """Byte-wise XOR of two equal-length hex strings."""
    left = decode(a)
    if not left.ok:
        return left
    right = decode(b)
    if not right.ok:
        return right
    if len(left.value) != len(right.value):
        return Err(
            CodecErrorCode.LENGTH_MISMATCH,
            f"Cannot XOR {len(left.value)} bytes with {len(right.value)} bytes",
        )
    return Ok(encode(x ^ y for x, y in zip(left.value, right.value)))


def to_lowercase(text: str) -> Outcome[str]:
    decoded = decode(text)
    if not decoded.ok:
        return decoded
    return Ok(text.strip().lower())


def to_uppercase(text: str) -> Outcome[str]:
    decoded = decode(text)
    if not decoded.ok:
        return decoded
    return Ok(text.strip().upper())


# ─── String composition ──────────────────────────────────────────

def encode_string(text: str) -> str:
    """Single-byte string -> hex. Empty string when text has wider characters."""
    points = to_code_points(text)
    if not points.ok:
        return ""
    return encode(points.value)


def decode_to_string(text: str) -> Outcome[str]:
    decoded = decode(text)
    if not decoded.ok:
        return decoded
    return from_code_points(decoded.value)


# ─── Display ─────────────────────────────────────────────────────

def _ascii_gutter(chunk: bytes) -> str:
    return "".join(
        chr(b) if PRINTABLE_MIN <= b <= PRINTABLE_MAX else "." for b in chunk
    )


def hexdump(data: Iterable[int]) -> str:
    """`hexdump -C` style rendering: offset, 16 bytes, ASCII gutter."""
    raw = bytes(data)
    lines = []
    for offset in range(0, len(raw), HEXDUMP_WIDTH):
        chunk = raw[offset:offset + HEXDUMP_WIDTH]
        pairs = [f"{b:02x}" for b in chunk]
        hex_part = " ".join(pairs[:8])
        if len(pairs) > 8:
            hex_part += "  " + " ".join(pairs[8:])
        lines.append(f"{offset:08x}  {hex_part:<48}  |{_ascii_gutter(chunk)}|")
    return "\n".join(lines)
