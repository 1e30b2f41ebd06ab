"""Error Hierarchy — typed, categorized exceptions for all DotMatrix failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Input errors (400-level) are recoverable; storage errors (500-level) are critical
    - to_response() produces the REST envelope used by the API and the CLI
    - Core codecs never raise these; they return Err outcomes; the shell raises

Design Decisions:
    - Single hierarchy with DotMatrixError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - SubstrateIOError keeps the OS error text verbatim in its message
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    FORMAT = "format"
    PATH = "path"
    RESOURCE_NOT_FOUND = "resource_not_found"
    IO = "io"
    STATE = "state"
    UNAVAILABLE = "unavailable"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    path: str | None = None
    position: int | None = None
    user_message: str | None = None


class DotMatrixError(Exception):
    """Base exception for all DotMatrix errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "path": self.context.path,
                    "position": self.context.position,
                },
                "details": self.details(),
            }
        }

    def details(self) -> list[dict]:
        """Per-item details for the response envelope. Empty by default."""
        return []


# ─── Input Errors (400-level) ───────────────────────────────────

class ByteValidationError(DotMatrixError):
    """One or more bytes fall outside the alphabet."""
    def __init__(
        self, contaminants: list, layer: str, context: ErrorContext | None = None,
    ):
        first = contaminants[0]
        ctx = context or ErrorContext()
        ctx.position = first.position
        super().__init__(
            f"Byte {first.value} at position {first.position} rejected by "
            f"{layer}: {first.description}",
            "BYTE_VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.contaminants = list(contaminants)
        self.layer = layer

    def details(self) -> list[dict]:
        return [c.to_dict() for c in self.contaminants]


class FormatError(DotMatrixError):
    """Raw input could not be decoded (hex, integer list, text)."""
    def __init__(
        self,
        message: str,
        format_code: str,
        position: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.position = position
        super().__init__(
            message, "FORMAT_ERROR", ErrorCategory.FORMAT,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.format_code = format_code


class PathTraversalError(DotMatrixError):
    """Destination path contains a parent-directory or home-expansion reference."""
    def __init__(self, path: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.path = path
        super().__init__(
            f"Invalid path '{path}': contains traversal sequences (.. or ~)",
            "PATH_TRAVERSAL", ErrorCategory.PATH,
            ErrorSeverity.ERROR, ctx, 400,
        )


class SubstrateNotFoundError(DotMatrixError):
    """Requested substrate does not exist."""
    def __init__(self, path: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.path = path
        super().__init__(
            f"Substrate '{path}' not found",
            "SUBSTRATE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class KernelStateError(DotMatrixError):
    """Operation not permitted in the write session's current state."""
    def __init__(self, operation: str, state: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cannot {operation}: write session is {state}",
            "KERNEL_STATE_ERROR", ErrorCategory.STATE,
            ErrorSeverity.ERROR, context, 409,
        )
        self.operation = operation
        self.state = state


# ─── Infrastructure Errors (500-level) ──────────────────────────

class SubstrateIOError(DotMatrixError):
    """Create/write/read/close on the substrate failed."""
    def __init__(self, message: str, operation: str, path: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.path = path
        super().__init__(
            f"Substrate {operation} failed: {message}",
            "SUBSTRATE_IO_ERROR", ErrorCategory.IO,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class ExecutorUnavailableError(DotMatrixError):
    """Write-path executor cannot run (substrate root not writable)."""
    def __init__(self, root: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.path = root
        super().__init__(
            f"Write-path executor unavailable: '{root}' is not a writable directory",
            "EXECUTOR_UNAVAILABLE", ErrorCategory.UNAVAILABLE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
