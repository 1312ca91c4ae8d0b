"""API Pydantic models."""

from models.late_marking import MarkLateRequest, MarkLateResult

from .responses import HealthResponse

__all__ = ["HealthResponse", "MarkLateRequest", "MarkLateResult"]
