"""String Codec — text <-> byte conversion restricted to one byte per character.

Invariants:
    - to_code_points succeeds only if every code point is <= 255 (no partial result)
    - from_code_points succeeds only if every point is in [0, 255]
    - is_printable_ascii("") is True; tab, newline, NUL and DEL are not printable
    - escape_* are embedding transforms, not validators; they never replace
      alphabet validation

Design Decisions:
    - Latin-1 is exactly the single-byte code point domain, so encode/decode go
      through it once the range has been checked
"""

from typing import Iterable

from dotmatrix.core.domain_types import (
    ASCII_MAX, BYTE_MAX, CodecErrorCode, PRINTABLE_MAX, PRINTABLE_MIN,
)
from dotmatrix.core.outcome import Err, Ok, Outcome


def to_code_points(text: str) -> Outcome[bytes]:
    """Text -> bytes, one byte per character."""
    for position, char in enumerate(text):
        if ord(char) > BYTE_MAX:
            return Err(
                CodecErrorCode.CODE_POINT_OUT_OF_RANGE,
                f"Character {char!r} (U+{ord(char):04X}) at position {position} "
                f"does not fit in a single byte",
                position,
            )
    return Ok(text.encode("latin-1"))


def from_code_points(points: Iterable[int]) -> Outcome[str]:
    """Code points -> text. Any point outside [0, 255] fails the whole call."""
    values = list(points)
    for position, value in enumerate(values):
        if not 0 <= value <= BYTE_MAX:
            return Err(
                CodecErrorCode.CODE_POINT_OUT_OF_RANGE,
                f"Code point {value} at position {position} is outside [0, 255]",
                position,
            )
    return Ok(bytes(values).decode("latin-1"))


def is_ascii(text: str) -> bool:
    return all(ord(c) <= ASCII_MAX for c in text)


def is_printable_ascii(text: str) -> bool:
    return all(PRINTABLE_MIN <= ord(c) <= PRINTABLE_MAX for c in text)


# ─── Escaping ────────────────────────────────────────────────────

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
}

_JS_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def escape_sql(text: str) -> str:
    """Double single quotes for a SQL string literal."""
    return text.replace("'", "''")


def escape_html(text: str) -> str:
    return "".join(_HTML_ESCAPES.get(c, c) for c in text)


def escape_js(text: str) -> str:
    return "".join(_JS_ESCAPES.get(c, c) for c in text)
