"""StrikeState tests — pure tests for the kernel's state and transition rules."""

from dotmatrix.core.constraints import Contaminant
from dotmatrix.core.domain_types import WriteState
from dotmatrix.core.strike_state import (
    StrikeState, check_can_open, check_can_seal, check_can_strike,
)


# --- Initial state defaults ---------------------------------------------------

def test_initial_state_is_closed_and_zeroed():
    state = StrikeState()
    assert state.state == WriteState.CLOSED
    assert state.head_position == 0
    assert state.strike_count == 0
    assert not state.error_flag
    assert state.contaminant is None


# --- Transitions ----------------------------------------------------------------

def test_closed_can_open_only():
    state = StrikeState()
    assert check_can_open(state) is None
    assert check_can_strike(state)["error_code"] == "ILLEGAL_TRANSITION"
    assert check_can_seal(state)["error_code"] == "ILLEGAL_TRANSITION"


def test_mark_open_resets_counters():
    state = StrikeState(head_position=4, strike_count=4, error_flag=True)
    state.mark_open()
    assert state.is_open
    assert (state.head_position, state.strike_count, state.error_flag) == (0, 0, False)


def test_record_strike_advances_head_and_count():
    state = StrikeState()
    state.mark_open()
    state.record_strike()
    state.record_strike()
    assert state.head_position == 2
    assert state.strike_count == 2
    assert check_can_strike(state) is None


def test_rejection_aborts_and_sets_error_flag():
    state = StrikeState()
    state.mark_open()
    contaminant = Contaminant(0, 160, "forbidden non-breaking-space")
    state.record_rejection(contaminant)
    assert state.state == WriteState.ABORTED
    assert state.error_flag
    assert state.contaminant == contaminant
    assert state.is_terminal


def test_terminal_states_refuse_everything():
    for terminal in (WriteState.SEALED, WriteState.ABORTED):
        state = StrikeState(state=terminal)
        assert check_can_open(state) is not None
        assert check_can_strike(state) is not None
        assert check_can_seal(state) is not None


def test_open_cannot_reopen():
    state = StrikeState()
    state.mark_open()
    error = check_can_open(state)
    assert error["operation"] == "open"
    assert error["state"] == "open"


def test_report_reflects_counters():
    state = StrikeState()
    state.mark_open()
    state.record_strike()
    state.mark_sealed()
    report = state.to_report()
    assert report.state == WriteState.SEALED
    assert report.to_dict() == {
        "state": "sealed", "head_position": 1, "strike_count": 1, "error_flag": False,
    }
