"""Strike State — pure state and transition rules of the write-path kernel.

Invariants:
    - CLOSED -> OPEN (open), OPEN -> OPEN (accepted byte), OPEN -> ABORTED (rejected
      byte or I/O failure), OPEN -> SEALED (seal), CLOSED -> ABORTED (abort)
    - SEALED and ABORTED are terminal: every further transition is refused
    - head_position == strike_count while the session is OPEN (append-only, one byte
      per strike)
    - error_flag is set once a byte has been rejected and never cleared
    - check_* functions are PURE: return error dict on violation, None on success

Design Decisions:
    - Dataclass with mutation methods, no IO: the file handle lives in
      infrastructure/write_kernel.py, which applies these transitions around each write
    - Return dicts (not exceptions) from checks: the shell decides how to surface them
"""

from dataclasses import dataclass

from dotmatrix.core.constraints import Contaminant
from dotmatrix.core.domain_types import TERMINAL_STATES, WriteState


@dataclass(frozen=True)
class SealReport:
    """Final counters of a write session."""
    state: WriteState
    head_position: int
    strike_count: int
    error_flag: bool

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "head_position": self.head_position,
            "strike_count": self.strike_count,
            "error_flag": self.error_flag,
        }


@dataclass
class StrikeState:
    """Per-session kernel state. Pure dataclass, no IO."""

    state: WriteState = WriteState.CLOSED
    head_position: int = 0
    strike_count: int = 0
    error_flag: bool = False
    contaminant: Contaminant | None = None

    # --- Computed properties ---------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self.state == WriteState.OPEN

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    # --- Mutation methods --------------------------------------------------------

    def mark_open(self) -> None:
        """Start a session. Resets head position, counters and error flag."""
        self.state = WriteState.OPEN
        self.head_position = 0
        self.strike_count = 0
        self.error_flag = False
        self.contaminant = None

    def record_strike(self) -> None:
        """One byte committed to the substrate."""
        self.head_position += 1
        self.strike_count += 1

    def record_rejection(self, contaminant: Contaminant) -> None:
        """Invalid byte refused. The session cannot continue."""
        self.contaminant = contaminant
        self.error_flag = True
        self.state = WriteState.ABORTED

    def mark_sealed(self) -> None:
        self.state = WriteState.SEALED

    def mark_aborted(self) -> None:
        self.state = WriteState.ABORTED

    def to_report(self) -> SealReport:
        return SealReport(
            state=self.state,
            head_position=self.head_position,
            strike_count=self.strike_count,
            error_flag=self.error_flag,
        )


# ─── Transition checks ───────────────────────────────────────────

def _illegal(operation: str, state: StrikeState) -> dict:
    return {
        "status": "error",
        "error_code": "ILLEGAL_TRANSITION",
        "operation": operation,
        "state": state.state.value,
        "message": f"Cannot {operation}: write session is {state.state.value}",
    }


def check_can_open(state: StrikeState) -> dict | None:
    """Only a CLOSED session may open."""
    if state.state != WriteState.CLOSED:
        return _illegal("open", state)
    return None


def check_can_strike(state: StrikeState) -> dict | None:
    """Bytes are accepted only while OPEN."""
    if not state.is_open:
        return _illegal("strike", state)
    return None


def check_can_seal(state: StrikeState) -> dict | None:
    """Only an OPEN session may be sealed."""
    if not state.is_open:
        return _illegal("seal", state)
    return None
