"""Arithmetic Safety — checked integer operations and strict integer parsing.

Invariants:
    - No function raises for bad input: None signals failure
    - Checked results outside signed 64-bit [INT64_MIN, INT64_MAX] are None (fail policy)
    - div truncates toward zero; safe_mod takes the sign of the dividend
    - in_range is inclusive at both ends; in_range_excluding additionally rejects
      members of `excluded`
    - from_string accepts only an optional '-' or '+' followed by ASCII digits,
      surrounding whitespace trimmed
"""

import re
from typing import Collection

from dotmatrix.core.domain_types import INT64_MAX, INT64_MIN


_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def _checked(value: int) -> int | None:
    if INT64_MIN <= value <= INT64_MAX:
        return value
    return None


# ─── Division ────────────────────────────────────────────────────

def div(a: int, b: int) -> int | None:
    if b == 0:
        return None
    quotient = abs(a) // abs(b)
    return _checked(quotient if (a < 0) == (b < 0) else -quotient)


def div_or(default: int, a: int, b: int) -> int:
    result = div(a, b)
    return default if result is None else result


def safe_mod(a: int, b: int) -> int | None:
    if b == 0:
        return None
    remainder = abs(a) % abs(b)
    return -remainder if a < 0 else remainder


# ─── Checked arithmetic ──────────────────────────────────────────

def add_checked(a: int, b: int) -> int | None:
    return _checked(a + b)


def sub_checked(a: int, b: int) -> int | None:
    return _checked(a - b)


def mul_checked(a: int, b: int) -> int | None:
    return _checked(a * b)


def abs_safe(a: int) -> int | None:
    return _checked(abs(a))


def pow_checked(base: int, exponent: int) -> int | None:
    """base ** exponent. None for a negative exponent or on overflow."""
    if exponent < 0:
        return None
    # |base| >= 2 overflows 64 bits from exponent 64 on
    if abs(base) > 1 and exponent > 63:
        return None
    return _checked(base ** exponent)


# ─── Ranges ──────────────────────────────────────────────────────

def clamp(lo: int, hi: int, value: int) -> int:
    return max(lo, min(hi, value))


def in_range(value: int, lo: int, hi: int) -> bool:
    return lo <= value <= hi


def in_range_excluding(value: int, lo: int, hi: int, excluded: Collection[int]) -> bool:
    return in_range(value, lo, hi) and value not in excluded


# ─── Percentages ─────────────────────────────────────────────────

def percent_of(percent: int, total: int) -> int | None:
    """percent% of total, truncated."""
    product = mul_checked(total, percent)
    if product is None:
        return None
    return div(product, 100)


def as_percent(part: int, whole: int) -> int | None:
    """part as a percentage of whole, truncated. None when whole is 0."""
    product = mul_checked(part, 100)
    if product is None:
        return None
    return div(product, whole)


# ─── Parsing ─────────────────────────────────────────────────────

def from_string(text: str) -> int | None:
    """Strict decimal integer parse. Rejects decimals and trailing garbage."""
    trimmed = text.strip()
    if not _INTEGER_RE.fullmatch(trimmed):
        return None
    return _checked(int(trimmed))


def from_string_in_range(text: str, lo: int, hi: int) -> int | None:
    value = from_string(text)
    if value is None or not in_range(value, lo, hi):
        return None
    return value
