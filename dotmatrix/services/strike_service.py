"""Strike Service — boundary contract between callers and the write-path kernel.

Invariants:
    - preview_strike never touches the filesystem
    - execute_strike rejects an unsafe path before any I/O, then rejects contaminated
      bytes before any I/O, then hands the bytes to the kernel, which checks them again
    - verify_substrate re-reads the artifact and re-validates every byte; it is the
      source of truth for "was the artifact clean", whatever the writer believed
    - check_available has no side effect on any artifact

Design Decisions:
    - Follows impureim sandwich: pure validate → kernel I/O → pure report
    - Errors raised as DotMatrixError subclasses; routes and CLI map them to
      responses and exit codes
    - Relative paths resolve against settings.substrate_root when configured
    - An empty path means "no override": settings.default_target is used
"""

import logging
import os

from dotmatrix.config import Settings, get_settings
from dotmatrix.core import hex_codec, safe_path
from dotmatrix.core.constraints import ByteAlphabet, find_contaminants
from dotmatrix.core.errors import (
    ByteValidationError,
    ExecutorUnavailableError,
    PathTraversalError,
    SubstrateIOError,
    SubstrateNotFoundError,
)
from dotmatrix.infrastructure.write_kernel import WriteSession
from dotmatrix.schemas.strike import (
    ContaminantOut, PreviewResult, StrikeReport, VerifyResult,
)

logger = logging.getLogger(__name__)

BOUNDARY_LAYER = "boundary check"
KERNEL_LAYER = "write kernel"


def _substrate_root(settings: Settings) -> str:
    return settings.substrate_root or os.getcwd()


def resolve_path(path: str, settings: Settings) -> str:
    """Absolute paths pass through; relative ones land under the substrate root."""
    if os.path.isabs(path):
        return path
    return os.path.join(_substrate_root(settings), path)


def _require_safe(path: str) -> None:
    if not safe_path.is_safe(path):
        logger.warning(
            "Path rejected",
            extra={"path": path, "error_code": "PATH_TRAVERSAL"},
        )
        raise PathTraversalError(path)


def _nearest_existing(path: str) -> str:
    current = os.path.abspath(path)
    while not os.path.exists(current):
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
    return current


def check_available(settings: Settings | None = None) -> bool:
    """The executor can run when the substrate root is (or can become) writable."""
    settings = settings or get_settings()
    target = _nearest_existing(_substrate_root(settings))
    return os.path.isdir(target) and os.access(target, os.W_OK | os.X_OK)


def preview_strike(
    values: list[int], alphabet: ByteAlphabet | None = None,
) -> PreviewResult:
    """Dry run: hexdump + contamination report of an in-memory sequence."""
    alphabet = alphabet or get_settings().alphabet()
    contaminants = find_contaminants(values, alphabet)
    return PreviewResult(
        hex_preview=hex_codec.hexdump(values),
        would_contaminate=bool(contaminants),
        contaminants=[ContaminantOut.model_validate(c) for c in contaminants],
        byte_count=len(values),
    )


def execute_strike(
    values: list[int],
    path: str,
    *,
    overwrite: bool = False,
    settings: Settings | None = None,
) -> StrikeReport:
    """Validate path and bytes, then commit the bytes through the kernel."""
    settings = settings or get_settings()
    alphabet = settings.alphabet()

    _require_safe(path)
    path = path or settings.default_target

    contaminants = find_contaminants(values, alphabet)
    if contaminants:
        logger.warning(
            f"Strike refused: {len(contaminants)} contaminant(s)",
            extra={"path": path, "byte_count": len(values), "layer": BOUNDARY_LAYER},
        )
        raise ByteValidationError(contaminants, BOUNDARY_LAYER)

    if not check_available(settings):
        raise ExecutorUnavailableError(_substrate_root(settings))

    target = resolve_path(path, settings)
    _prepare_target(target, overwrite)

    session = WriteSession(target, alphabet)
    with session:
        rejected = session.strike_sequence(values)
    if rejected is not None:
        raise ByteValidationError([rejected], KERNEL_LAYER)

    report = session.report()
    logger.info(
        "Strike complete",
        extra={"path": target, "strike_count": report.strike_count},
    )
    return StrikeReport(
        path=target,
        byte_count=len(values),
        strike_count=report.strike_count,
        head_position=report.head_position,
        hex=hex_codec.encode_spaced(values),
    )


def _prepare_target(target: str, overwrite: bool) -> None:
    parent = os.path.dirname(target)
    try:
        if parent:
            os.makedirs(parent, exist_ok=True)
        if overwrite and os.path.isfile(target):
            os.remove(target)
    except OSError as e:
        raise SubstrateIOError(str(e), "prepare", target) from e


def verify_substrate(
    path: str, alphabet: ByteAlphabet | None = None, settings: Settings | None = None,
) -> VerifyResult:
    """Re-read the artifact from disk and re-validate every byte."""
    settings = settings or get_settings()
    alphabet = alphabet or settings.alphabet()
    _require_safe(path)
    path = path or settings.default_target
    target = resolve_path(path, settings)
    try:
        with open(target, "rb") as f:
            data = f.read()
    except FileNotFoundError as e:
        raise SubstrateNotFoundError(path) from e
    except OSError as e:
        raise SubstrateIOError(str(e), "read", target) from e

    contaminants = find_contaminants(data, alphabet)
    if contaminants:
        logger.warning(
            f"Substrate contaminated: {len(contaminants)} byte(s)",
            extra={"path": target, "byte_count": len(data)},
        )
    return VerifyResult(
        clean=not contaminants,
        contaminants=[ContaminantOut.model_validate(c) for c in contaminants],
        hexdump=hex_codec.hexdump(data),
        size=len(data),
    )


def read_substrate_hex(
    path: str, alphabet: ByteAlphabet | None = None, settings: Settings | None = None,
) -> VerifyResult:
    """Substrate read for display; same report as verify_substrate."""
    return verify_substrate(path, alphabet, settings)
