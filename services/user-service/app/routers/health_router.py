"""
Health check router.

Liveness endpoint used by load balancers and orchestrators.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, status

from ..config import settings
from ..models import HealthResponse

router = APIRouter(prefix="/api/v1", tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Basic health check endpoint - returns 200 if service is running",
)
async def health_check():
    """Always returns 200 OK if the service is running."""
    return HealthResponse(
        status="healthy",
        service=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
