"""Health & Readiness Probes — liveness plus write-path readiness.

Invariants:
    - GET /health/ returns 200 whenever the process is up, with the active alphabet
    - GET /health/ready returns 503 while the write-path executor is unavailable
    - Neither probe creates, reads or modifies a substrate
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from dotmatrix.config import get_settings
from dotmatrix.services.strike_service import check_available

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Liveness, plus the alphabet this process enforces."""
    alphabet = get_settings().alphabet()
    return {
        "status": "healthy",
        "service": "dotmatrix",
        "alphabet": {
            "max_byte": alphabet.max_byte,
            "forbidden": sorted(alphabet.forbidden_values),
        },
    }


@router.get("/ready")
def readiness_check():
    settings = get_settings()
    root = settings.substrate_root or "."
    if not check_available(settings):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "executor_unavailable",
                "substrate_root": root,
            },
        )
    return {"status": "ready", "checks": {"executor": "available"}, "substrate_root": root}
