"""API route modules."""

from .health import router as health_router
from .mark_late import router as mark_late_router

__all__ = ["health_router", "mark_late_router"]
