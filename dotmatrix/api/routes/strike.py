"""Strike Routes — parse, preview, execute, and availability of the write path.

Invariants:
    - Request bodies are validated by Pydantic before reaching the handler
    - Handlers delegate to services/byte_input.py and services/strike_service.py
    - Parse failures surface as FormatError (400), never as partial results
    - Handlers are plain def: the services block on file I/O, so FastAPI runs
      them in its threadpool instead of on the event loop
"""

import logging

from fastapi import APIRouter, status

from dotmatrix.config import get_settings
from dotmatrix.core.errors import FormatError
from dotmatrix.schemas.strike import (
    AvailabilityResult, ParseRequest, ParseResult, PreviewRequest,
    PreviewResult, StrikeReport, StrikeRequest,
)
from dotmatrix.services import byte_input, strike_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/strike", tags=["strike"])


@router.get("/available", response_model=AvailabilityResult)
def available():
    """Whether the write-path executor can run."""
    settings = get_settings()
    return AvailabilityResult(
        available=strike_service.check_available(settings),
        substrate_root=settings.substrate_root or ".",
    )


@router.post("/parse", response_model=ParseResult)
def parse(body: ParseRequest):
    """Raw input -> validated bytes + spaced hex."""
    parsed = byte_input.parse_input(body.input, get_settings().alphabet())
    if not parsed.ok:
        raise FormatError(parsed.message, parsed.code.value, parsed.position)
    return ParseResult(
        bytes=parsed.value,
        hex=byte_input.bytes_to_hex(parsed.value),
        byte_count=len(parsed.value),
    )


@router.post("/preview", response_model=PreviewResult)
def preview(body: PreviewRequest):
    """Dry run: contamination report without touching the filesystem."""
    return strike_service.preview_strike(body.bytes)


@router.post(
    "", response_model=StrikeReport, status_code=status.HTTP_201_CREATED,
)
def strike(body: StrikeRequest):
    """Commit bytes to the substrate through the write kernel."""
    return strike_service.execute_strike(
        body.bytes, body.path, overwrite=body.overwrite,
    )
