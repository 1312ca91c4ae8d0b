"""
Mark an appointment as running late in Meevo.
"""

import logging
from datetime import datetime

from core.config import MEEVO_LOCATION_ID, SUCCESS_MESSAGE
from core.errors import MalformedRequest, UpstreamDataMissing
from core.meevo_client import MeevoClient
from models.appointments import AppointmentDetails
from models.late_marking import MarkLateRequest, MarkLateResult
from services.identity import resolve_upcoming_appointment

logger = logging.getLogger(__name__)

MISSING_IDENTIFIER_MESSAGE = "Missing appointment_service_id or client_phone/client_email to lookup"
MISSING_DETAILS_MESSAGE = "Could not get appointment details"


async def mark_appointment_late(
    meevo: MeevoClient, appointment_service_id: str, location_id: str
) -> AppointmentDetails:
    """
    Flag one appointment as running late.

    The concurrency token is always read fresh right before the update,
    because Meevo rejects stale ones. Meevo's PUT response does not echo the
    flag back, so a non-error response is taken as success.

    Returns:
        The details the update was built from

    Raises:
        UpstreamDataMissing: if Meevo returns no details for the appointment
        UpstreamRejected: if Meevo rejects either call
    """
    logger.info("Getting appointment details for %s", appointment_service_id)
    details = await meevo.get_running_late_details(appointment_service_id, location_id)
    if details is None:
        raise UpstreamDataMissing(MISSING_DETAILS_MESSAGE)

    logger.info("Marking appointment %s as running late", appointment_service_id)
    await meevo.put_running_late(appointment_service_id, location_id, details)
    logger.info("Marked appointment %s as running late", appointment_service_id)
    return details


async def mark_late(
    meevo: MeevoClient,
    request: MarkLateRequest,
    now: datetime | None = None,
) -> MarkLateResult:
    """
    Handle a running-late action end to end.

    Resolves the client's next appointment from phone/email unless an
    appointment id was supplied, then marks it late. Each upstream call is
    made at most once.

    Raises:
        RelayError: any failure, with the message to report to the caller
    """
    location_id = request.location_id or MEEVO_LOCATION_ID
    appointment_service_id = request.appointment_service_id

    if not appointment_service_id:
        if not (request.client_phone or request.client_email):
            raise MalformedRequest(MISSING_IDENTIFIER_MESSAGE)
        logger.info("Looking up appointment by phone/email")
        upcoming = await resolve_upcoming_appointment(
            meevo,
            location_id,
            phone=request.client_phone,
            email=request.client_email,
            now=now,
        )
        appointment_service_id = upcoming.appointment_service_id

    if request.estimated_minutes is not None:
        logger.info("Client estimates %s minutes late", request.estimated_minutes)

    details = await mark_appointment_late(meevo, appointment_service_id, location_id)
    return MarkLateResult(
        success=True,
        marked_late=True,
        appointment_service_id=appointment_service_id,
        appointment_time=details.start_time,
        message=SUCCESS_MESSAGE,
    )
