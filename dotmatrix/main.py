"""DotMatrix API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly: health, strike, substrate
    - Every failure leaves through api/error_handlers.py as the error envelope
    - CORS origins come from settings
    - Logging is configured once, in the lifespan, before the first request

Design Decisions:
    - Startup does not create the substrate root; an unavailable executor is
      logged and reported by /health/ready, the process still starts
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dotmatrix.api.error_handlers import register_error_handlers
from dotmatrix.api.routes import health, strike, substrate
from dotmatrix.config import get_settings
from dotmatrix.infrastructure.observability import setup_logging
from dotmatrix.services.strike_service import check_available

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    alphabet = settings.alphabet()
    root = settings.substrate_root or "."
    logger.info(
        f"DotMatrix API started: max_byte={alphabet.max_byte}, "
        f"forbidden={sorted(alphabet.forbidden_values)}",
        extra={"path": root},
    )
    if not check_available(settings):
        logger.warning(
            "Write-path executor unavailable at startup",
            extra={"path": root, "error_code": "EXECUTOR_UNAVAILABLE"},
        )
    yield
    logger.info("DotMatrix API shutting down")


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="DotMatrix API", version="1.0.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.include_router(health.router)
    app.include_router(strike.router)
    app.include_router(substrate.router)
    register_error_handlers(app)
    return app


app = create_app()
