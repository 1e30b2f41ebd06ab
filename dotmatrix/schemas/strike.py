"""Strike Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - Request byte lists carry integers in [0, 255]; alphabet membership is NOT
      checked here (that is the services' and the kernel's job, so contaminated
      input still reaches preview and gets reported)
    - Paths are stripped and non-empty
    - Result models mirror the service return values one to one

Design Decisions:
    - Annotated[int, Field(ge, le)] for list items: pydantic rejects non-bytes natively
    - ContaminantOut built from core Contaminant via from_attributes
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator


BoundaryByte = Annotated[int, Field(ge=0, le=255)]


def _strip_path(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("path cannot be empty or whitespace")
    return v


# --- Requests -----------------------------------------------------------------

class ParseRequest(BaseModel):
    """Raw user input: comma-separated decimals or plain text."""
    input: str = Field(min_length=1, max_length=65_536)


class PreviewRequest(BaseModel):
    bytes: list[BoundaryByte] = Field(max_length=65_536)


class StrikeRequest(BaseModel):
    """Bytes to commit and where to commit them."""
    bytes: list[BoundaryByte] = Field(max_length=65_536)
    path: str = Field(min_length=1, max_length=4096)
    overwrite: bool = False

    @field_validator("path")
    @classmethod
    def strip_path(cls, v: str) -> str:
        return _strip_path(v)


class SubstrateRequest(BaseModel):
    path: str = Field(min_length=1, max_length=4096)

    @field_validator("path")
    @classmethod
    def strip_path(cls, v: str) -> str:
        return _strip_path(v)


# --- Results ------------------------------------------------------------------

class ContaminantOut(BaseModel):
    """One byte outside the alphabet."""
    model_config = ConfigDict(from_attributes=True)

    position: int
    value: int
    description: str


class ParseResult(BaseModel):
    bytes: list[int]
    hex: str
    byte_count: int


class PreviewResult(BaseModel):
    """Dry-run outcome: nothing touched the filesystem."""
    hex_preview: str
    would_contaminate: bool
    contaminants: list[ContaminantOut]
    byte_count: int


class StrikeReport(BaseModel):
    """Sealed session counters after a successful strike."""
    path: str
    byte_count: int
    strike_count: int
    head_position: int
    hex: str


class VerifyResult(BaseModel):
    """Substrate as read back from disk."""
    clean: bool
    contaminants: list[ContaminantOut]
    hexdump: str
    size: int


class AvailabilityResult(BaseModel):
    available: bool
    substrate_root: str
