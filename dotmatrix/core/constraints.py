"""Constraint Model — the byte alphabet every layer validates against.

Invariants:
    - A byte is valid iff 0 <= b <= max_byte AND b is not forbidden
    - Forbidden membership is checked before the range, and in addition to it
    - Forbidden values and max_byte are always within [0, 255]
    - find_contaminants reports one record per offending byte, ascending by position
    - All functions are PURE: no IO, no side effects

Design Decisions:
    - ByteAlphabet is a frozen configuration value passed in by callers, not a set of
      module constants, so a different alphabet needs no kernel change
    - Forbidden values carry their own label: describe_invalid never assumes a
      forbidden value is also above max_byte
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from dotmatrix.core.domain_types import BYTE_MAX, BYTE_MIN, InvalidByteReason, Position


NBSP: int = 0xA0
UTF8_CONTINUATION: int = 0xC2

DEFAULT_FORBIDDEN: Mapping[int, str] = MappingProxyType({
    NBSP: InvalidByteReason.FORBIDDEN_NBSP.value,
    UTF8_CONTINUATION: InvalidByteReason.FORBIDDEN_CONTINUATION.value,
})


@dataclass(frozen=True)
class ByteAlphabet:
    """Immutable alphabet configuration: an upper bound plus labelled exclusions."""

    max_byte: int = 127
    forbidden: Mapping[int, str] = field(default_factory=lambda: DEFAULT_FORBIDDEN)

    def __post_init__(self) -> None:
        if not BYTE_MIN <= self.max_byte <= BYTE_MAX:
            raise ValueError(f"max_byte must be within [0, 255], got {self.max_byte}")
        out_of_range = sorted(v for v in self.forbidden if not BYTE_MIN <= v <= BYTE_MAX)
        if out_of_range:
            raise ValueError(f"forbidden values must be within [0, 255], got {out_of_range}")
        object.__setattr__(
            self, "forbidden", MappingProxyType(dict(self.forbidden)),
        )

    @property
    def forbidden_values(self) -> frozenset[int]:
        return frozenset(self.forbidden)

    def __hash__(self) -> int:
        return hash((self.max_byte, tuple(sorted(self.forbidden.items()))))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ByteAlphabet):
            return NotImplemented
        return (
            self.max_byte == other.max_byte
            and dict(self.forbidden) == dict(other.forbidden)
        )


DEFAULT_ALPHABET = ByteAlphabet()


@dataclass(frozen=True)
class Contaminant:
    """One byte outside the alphabet: where it is, what it is, why it fails."""
    position: Position
    value: int
    description: str

    def to_dict(self) -> dict:
        return {
            "position": self.position,
            "value": self.value,
            "description": self.description,
        }


def is_valid_byte(value: int, alphabet: ByteAlphabet = DEFAULT_ALPHABET) -> bool:
    """Alphabet membership: in [0, max_byte] and not forbidden."""
    return 0 <= value <= alphabet.max_byte and value not in alphabet.forbidden


def describe_invalid(value: int, alphabet: ByteAlphabet = DEFAULT_ALPHABET) -> str | None:
    """Classify why a byte is rejected. None when the byte is valid.

    Priority: forbidden label, exceeds upper bound, negative value.
    """
    if value in alphabet.forbidden:
        return alphabet.forbidden[value] or InvalidByteReason.FORBIDDEN.value
    if value > alphabet.max_byte:
        return InvalidByteReason.EXCEEDS_UPPER_BOUND.value
    if value < 0:
        return InvalidByteReason.NEGATIVE.value
    return None


def check_byte(
    value: int, position: int, alphabet: ByteAlphabet = DEFAULT_ALPHABET,
) -> Contaminant | None:
    """Validate a single byte. Contaminant on rejection, None on success."""
    description = describe_invalid(value, alphabet)
    if description is None:
        return None
    return Contaminant(position=Position(position), value=value, description=description)


def find_contaminants(
    values: Iterable[int], alphabet: ByteAlphabet = DEFAULT_ALPHABET,
) -> list[Contaminant]:
    """Scan a whole sequence without stopping. Empty list means clean."""
    found = []
    for position, value in enumerate(values):
        contaminant = check_byte(value, position, alphabet)
        if contaminant is not None:
            found.append(contaminant)
    return found
