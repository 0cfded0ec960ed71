"""Health & Readiness Probes.

Invariants:
    - GET /health/ answers 200 whenever the process is serving (liveness)
    - GET /health/ready probes the student source; 503 while it is unreachable
      or answering non-2xx, 200 once it answers
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from seatfinder.infrastructure.student_source import (
    StudentSource, get_student_source,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "seatfinder-api"
SERVICE_VERSION = "1.0.0"


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {"status": "healthy", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@router.get("/ready")
async def readiness(source: StudentSource = Depends(get_student_source)):
    """Ready only when the student source answers."""
    source_url = source.url
    if await source.health_check():
        return {
            "status": "ready",
            "checks": {"source": {"status": "healthy", "url": source_url}},
        }

    logger.warning("Readiness check failed", extra={"source_url": source_url})
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "not_ready",
            "reason": "source_unavailable",
            "checks": {"source": {"status": "unreachable", "url": source_url}},
        },
    )
