"""
HealthRisk Health Check
=======================
Liveness plus version and record-store backend information.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..config import API_VERSION, RULESET_VERSION
from ..shared.disclaimer import DISCLAIMER_VERSION
from ..submission import IdempotencyGuard, get_guard

router = APIRouter(prefix="/api/v1/health", tags=["Health"])


class HealthCheckResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: str
    api_version: str
    ruleset_version: str
    disclaimer_version: str
    record_store: str
    narrative_service: bool


@router.get("", response_model=HealthCheckResponse)
def check_health(guard: IdempotencyGuard = Depends(get_guard)):
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "api_version": API_VERSION,
        "ruleset_version": RULESET_VERSION,
        "disclaimer_version": DISCLAIMER_VERSION,
        "record_store": guard.store.backend,
        "narrative_service": guard.narrative_service is not None,
    }
