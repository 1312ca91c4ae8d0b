"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from api.models.responses import HealthResponse
from core.config import API_VERSION, ENVIRONMENT, LOCATION_NAME, SERVICE_NAME

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint for monitoring. Always returns 200."""
    return HealthResponse(
        status="ok",
        environment=ENVIRONMENT,
        location=LOCATION_NAME,
        service=SERVICE_NAME,
        version=API_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
