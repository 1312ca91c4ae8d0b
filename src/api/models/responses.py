"""Pydantic response models for API endpoints."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # always "ok"
    environment: str
    location: str
    service: str
    version: str
    timestamp: str  # ISO 8601 UTC
