"""Outcome — tagged success/failure values returned by core codecs and parsers.

Invariants:
    - Ok.ok is always True, Err.ok is always False
    - Err carries a CodecErrorCode, a human-readable message, and the offending
      position when one exists
    - Core functions return Err for expected bad input; they never raise for it

Design Decisions:
    - Frozen dataclasses over exceptions: the error path has the same shape as the
      success path, so callers branch on .ok instead of wrapping calls in try/except
"""

from dataclasses import dataclass
from typing import ClassVar, Generic, TypeVar

from dotmatrix.core.domain_types import CodecErrorCode

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome wrapping a value."""
    value: T
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class Err:
    """Failed outcome: code + message, optional position of the offending item."""
    code: CodecErrorCode
    message: str
    position: int | None = None
    ok: ClassVar[bool] = False

    def to_dict(self) -> dict:
        return {
            "status": "error",
            "error_code": self.code.value,
            "message": self.message,
            "position": self.position,
        }


Outcome = Ok[T] | Err
