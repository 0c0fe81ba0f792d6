"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /api/health always returns 200 if the process is up (liveness)
    - GET /api/health/ready returns 503 if the database is unreachable (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes
      the instance from the load balancer
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status

from donation_tracker.api.dependencies import get_store
from donation_tracker.api.envelope import envelope_response
from donation_tracker.config import get_settings
from donation_tracker.core.repository_protocols import DonationRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return envelope_response(
        status.HTTP_200_OK,
        True,
        data={
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": get_settings().api_version,
        },
        message="Donation Management API is running",
    )


@router.get("/ready")
async def readiness_check(store: DonationRepository = Depends(get_store)):
    """Readiness probe — includes database connectivity."""
    if not await store.health_check():
        logger.warning("Readiness check failed: database unavailable")
        return envelope_response(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            False,
            data={"status": "not_ready", "reason": "database_unavailable"},
            message="Database unavailable",
        )
    return envelope_response(
        status.HTTP_200_OK,
        True,
        data={"status": "ready", "checks": {"database": "healthy"}},
    )
