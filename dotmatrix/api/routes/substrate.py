"""Substrate Routes — read back and re-verify artifacts on disk.

Invariants:
    - Verification always re-reads the file; nothing is cached between requests
    - Unsafe paths are rejected before the file is opened
    - Handlers are plain def so whole-file reads run in the threadpool
"""

from fastapi import APIRouter

from dotmatrix.schemas.strike import SubstrateRequest, VerifyResult
from dotmatrix.services import strike_service

router = APIRouter(prefix="/api/v1/substrate", tags=["substrate"])


@router.post("/verify", response_model=VerifyResult)
def verify(body: SubstrateRequest):
    return strike_service.verify_substrate(body.path)


@router.post("/hex", response_model=VerifyResult)
def read_hex(body: SubstrateRequest):
    return strike_service.read_substrate_hex(body.path)
