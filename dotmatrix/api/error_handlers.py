"""Error Handlers — map every failure to the DotMatrix error envelope.

Invariants:
    - Every error body has the shape {"error": {code, message, category, severity, ...}}
    - DotMatrixError keeps its own http_status and to_response() body
    - Pydantic request errors are 400; a rejected byte-list item reports its position
    - Unhandled exceptions are 500 and never leak internal details

Design Decisions:
    - Input-side errors log at WARNING, CRITICAL ones (I/O, unavailable executor)
      at ERROR, so a contaminated request does not page anyone
    - Registered from main.py through register_error_handlers(app)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from dotmatrix.core.errors import (
    ByteValidationError, DotMatrixError, ErrorCategory, ErrorSeverity,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DotMatrixError, _domain_error)
    app.add_exception_handler(RequestValidationError, _request_error)
    app.add_exception_handler(Exception, _unhandled_error)


def _envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity,
    details: list[dict] | None = None,
) -> dict:
    error = {
        "code": code,
        "message": message,
        "category": category.value,
        "severity": severity.value,
    }
    if details is not None:
        error["details"] = details
    return {"error": error}


async def _domain_error(request: Request, exc: DotMatrixError) -> JSONResponse:
    extra = {"error_code": exc.code, "path": exc.context.path or request.url.path}
    if isinstance(exc, ByteValidationError):
        extra["layer"] = exc.layer
        extra["position"] = exc.context.position
    level = logging.ERROR if exc.severity == ErrorSeverity.CRITICAL else logging.WARNING
    logger.log(level, f"{request.method} {request.url.path}: {exc.message}", extra=extra)
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def _byte_position(loc: tuple) -> int | None:
    # ("body", "bytes", 3) -> 3
    if len(loc) == 3 and loc[1] == "bytes" and isinstance(loc[2], int):
        return loc[2]
    return None


def _field_detail(error: dict) -> dict:
    loc = tuple(error["loc"])
    detail = {
        "field": ".".join(str(part) for part in loc),
        "message": error["msg"],
        "type": error["type"],
    }
    position = _byte_position(loc)
    if position is not None:
        detail["position"] = position
    return detail


async def _request_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [_field_detail(e) for e in exc.errors()]
    logger.warning(
        f"Rejected request body on {request.url.path}: {len(details)} field error(s)",
        extra={"error_code": "VALIDATION_ERROR"},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, details,
        ),
    )


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR"},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )
