"""Application logging setup and per-request log records."""

import json
import logging
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

from core.config import ENVIRONMENT, LOG_LEVEL

request_logger = logging.getLogger("api.requests")


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure root logging for the service."""
    logging.basicConfig(
        level=level,
        format=f"%(asctime)s %(levelname)s [{ENVIRONMENT}] %(name)s: %(message)s",
    )
    # httpx logs every request URL at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


@dataclass
class RequestLog:
    """Captured request/outcome data for one mark-late call."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    endpoint: str = ""
    method: str = ""
    client_ip: str | None = None
    lookup_by: str | None = None  # "appointment_id", "phone" or "email"
    location_id: str | None = None
    appointment_service_id: str | None = None
    success: bool = False
    error_type: str | None = None
    error_message: str | None = None
    processing_time_ms: int = 0


def log_request(log: RequestLog) -> None:
    """Emit the request log as a single JSON line."""
    level = logging.INFO if log.success else logging.WARNING
    request_logger.log(level, json.dumps(asdict(log)))
