"""Running-late action endpoint."""

import logging
import time

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_meevo_client
from api.logging import RequestLog, log_request
from core.config import GENERIC_FAILURE_MESSAGE
from core.errors import RelayError
from core.meevo_client import MeevoClient
from models.late_marking import MarkLateRequest, MarkLateResult
from services.running_late import mark_late

logger = logging.getLogger(__name__)

router = APIRouter()


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def describe_lookup(body: MarkLateRequest) -> str | None:
    """Name the identifier the appointment will be found by."""
    if body.appointment_service_id:
        return "appointment_id"
    if body.client_phone:
        return "phone"
    if body.client_email:
        return "email"
    return None


@router.post(
    "/mark-late",
    response_model=MarkLateResult,
    response_model_exclude_none=True,
)
async def mark_late_endpoint(
    request: Request,
    body: MarkLateRequest | None = None,
    meevo: MeevoClient = Depends(get_meevo_client),
):
    """
    Mark the caller's appointment as running late.

    Always answers 200; failures come back as `success: false` with an
    `error` message suitable for the voice agent to relay.
    """
    # No body at all means nothing was supplied
    if body is None:
        body = MarkLateRequest()
    start_time = time.time()
    logger.info("Mark running late request received")

    request_log = RequestLog(
        endpoint="/mark-late",
        method="POST",
        client_ip=get_client_ip(request),
        lookup_by=describe_lookup(body),
        location_id=body.location_id,
    )

    try:
        result = await mark_late(meevo, body)
        request_log.success = True
        request_log.appointment_service_id = result.appointment_service_id
        return result

    except RelayError as e:
        request_log.error_type = type(e).__name__
        request_log.error_message = e.message
        return MarkLateResult(success=False, error=e.message)

    except Exception as e:
        logger.exception("Mark late error")
        request_log.error_type = type(e).__name__
        request_log.error_message = str(e)
        return MarkLateResult(success=False, error=GENERIC_FAILURE_MESSAGE)

    finally:
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        log_request(request_log)
