"""Write-Path Kernel — the only code that commits bytes to a substrate.

Invariants:
    - Every byte is re-validated here against the session's own alphabet, whatever
      upstream layers already checked
    - An invalid byte is never written: the session records the contaminant, closes
      its handle and moves to ABORTED
    - Bytes are written one at a time, unbuffered, in strict input order
    - strike_sequence stops at the first rejection; accepted bytes stay on disk
    - Any OSError moves the session to ABORTED and surfaces as SubstrateIOError
    - One WriteSession owns its file handle exclusively; sessions share nothing

Design Decisions:
    - Exclusive create ("xb"): a session never appends to or truncates an existing
      artifact; replacing one is the caller's explicit decision
    - State transitions delegated to core/strike_state.py; this class only applies
      them around the file operations
"""

import logging
from typing import BinaryIO, Iterable

from dotmatrix.core.constraints import (
    DEFAULT_ALPHABET, ByteAlphabet, Contaminant, check_byte,
)
from dotmatrix.core.domain_types import WriteState
from dotmatrix.core.errors import KernelStateError, SubstrateIOError
from dotmatrix.core.strike_state import (
    SealReport, StrikeState, check_can_open, check_can_seal, check_can_strike,
)

logger = logging.getLogger(__name__)


class WriteSession:
    """One strike session against one target path."""

    def __init__(self, path: str, alphabet: ByteAlphabet = DEFAULT_ALPHABET):
        self.path = path
        self.alphabet = alphabet
        self._state = StrikeState()
        self._handle: BinaryIO | None = None

    # --- Read-only views ---------------------------------------------------------

    @property
    def state(self) -> WriteState:
        return self._state.state

    @property
    def head_position(self) -> int:
        return self._state.head_position

    @property
    def strike_count(self) -> int:
        return self._state.strike_count

    @property
    def error_flag(self) -> bool:
        return self._state.error_flag

    @property
    def contaminant(self) -> Contaminant | None:
        return self._state.contaminant

    # --- Transitions ---------------------------------------------------------------

    def open(self) -> None:
        """CLOSED -> OPEN. Creates the target exclusively."""
        self._require(check_can_open(self._state))
        try:
            self._handle = open(self.path, "xb", buffering=0)
        except OSError as e:
            self._state.mark_aborted()
            logger.error(
                f"Failed to create substrate: {e}",
                extra={"path": self.path, "error_code": "SUBSTRATE_IO_ERROR"},
            )
            raise SubstrateIOError(str(e), "create", self.path) from e
        self._state.mark_open()
        logger.info("Write session opened", extra={"path": self.path})

    def strike(self, value: int) -> Contaminant | None:
        """Validate and append one byte. Contaminant (and ABORTED) on rejection."""
        self._require(check_can_strike(self._state))
        contaminant = check_byte(value, self._state.head_position, self.alphabet)
        if contaminant is not None:
            self._state.record_rejection(contaminant)
            self._close_handle()
            logger.warning(
                f"Strike rejected: {contaminant.description}",
                extra={
                    "path": self.path,
                    "position": contaminant.position,
                    "value": contaminant.value,
                    "strike_count": self._state.strike_count,
                    "error_code": "BYTE_REJECTED",
                },
            )
            return contaminant
        try:
            self._handle.write(bytes((value,)))
        except OSError as e:
            self._fail("write", e)
        self._state.record_strike()
        return None

    def strike_sequence(self, values: Iterable[int]) -> Contaminant | None:
        """Strike each byte in order; stop at the first rejection."""
        for value in values:
            contaminant = self.strike(value)
            if contaminant is not None:
                return contaminant
        return None

    def seal(self) -> SealReport:
        """OPEN -> SEALED. Flushes and closes the substrate."""
        self._require(check_can_seal(self._state))
        try:
            self._handle.flush()
            self._handle.close()
        except OSError as e:
            self._fail("close", e)
        self._handle = None
        self._state.mark_sealed()
        logger.info(
            "Write session sealed",
            extra={
                "path": self.path,
                "strike_count": self._state.strike_count,
                "head_position": self._state.head_position,
            },
        )
        return self._state.to_report()

    def abort(self) -> SealReport:
        """Move a non-terminal session to ABORTED. No-op when already terminal."""
        if not self._state.is_terminal:
            self._close_handle()
            self._state.mark_aborted()
            logger.warning(
                "Write session aborted",
                extra={"path": self.path, "strike_count": self._state.strike_count},
            )
        return self._state.to_report()

    def report(self) -> SealReport:
        return self._state.to_report()

    # --- Context manager ---------------------------------------------------------

    def __enter__(self) -> "WriteSession":
        if self._state.state == WriteState.CLOSED:
            self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self._state.is_open:
            return
        if exc_type is None:
            self.seal()
        else:
            self.abort()

    # --- Internals ---------------------------------------------------------------

    def _require(self, error: dict | None) -> None:
        if error is not None:
            raise KernelStateError(error["operation"], error["state"])

    def _close_handle(self) -> None:
        if self._handle is None:
            return
        handle, self._handle = self._handle, None
        try:
            handle.close()
        except OSError as e:
            logger.error(
                f"Failed to close substrate after abort: {e}",
                extra={"path": self.path, "error_code": "SUBSTRATE_IO_ERROR"},
            )

    def _fail(self, operation: str, error: OSError) -> None:
        self._close_handle()
        self._state.mark_aborted()
        logger.error(
            f"Substrate {operation} failed: {error}",
            extra={"path": self.path, "error_code": "SUBSTRATE_IO_ERROR"},
        )
        raise SubstrateIOError(str(error), operation, self.path) from error
