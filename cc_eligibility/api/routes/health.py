"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the configured policy cannot be built (readiness)
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from cc_eligibility.config import Settings, get_settings
from cc_eligibility.core.errors import EligibilityError
from cc_eligibility.services.payment_eligibility import build_policy

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "cc-payment-eligibility"
SERVICE_VERSION = "1.0.0"


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


@router.get("/ready")
async def readiness_check(settings: Settings = Depends(get_settings)):
    """Readiness probe — the configured policy must build."""
    try:
        policy = build_policy(settings)
    except EligibilityError as exc:
        logger.warning(
            f"Policy not ready: {exc.message}", extra={"error_code": exc.code},
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "policy_misconfigured",
            },
        )
    return {"status": "ready", "checks": {"policy_mode": policy.mode.value}}
