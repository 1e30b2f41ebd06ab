"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - max_byte and every forbidden value lie within [0, 255]
    - get_settings() is cached (lru_cache), single instance per process
    - Settings.alphabet() is the only place the configured ByteAlphabet is built

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - DOTMATRIX_ prefix: forbidden bytes are set as JSON, e.g.
      DOTMATRIX_FORBIDDEN_BYTES='{"160": "forbidden non-breaking-space"}'
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dotmatrix.core.constraints import DEFAULT_FORBIDDEN, ByteAlphabet


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DOTMATRIX_", env_file=".env", case_sensitive=False,
    )

    # Alphabet
    max_byte: int = Field(127, ge=0, le=255)
    forbidden_bytes: dict[int, str] = Field(
        default_factory=lambda: dict(DEFAULT_FORBIDDEN),
    )

    # Substrate
    default_target: str = "dist/substrate.bin"
    substrate_root: str | None = None

    # API
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    cors_origins: list[str] = ["http://localhost:1420", "http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("forbidden_bytes")
    @classmethod
    def check_forbidden_range(cls, v: dict[int, str]) -> dict[int, str]:
        out_of_range = sorted(b for b in v if not 0 <= b <= 255)
        if out_of_range:
            raise ValueError(f"forbidden bytes must be within [0, 255], got {out_of_range}")
        return v

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    def alphabet(self) -> ByteAlphabet:
        return ByteAlphabet(max_byte=self.max_byte, forbidden=self.forbidden_bytes)


@lru_cache
def get_settings() -> Settings:
    return Settings()
