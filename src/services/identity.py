"""
Resolve a caller's phone/email to their next upcoming appointment.
"""

import logging
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo

from core.config import LOCATION_TIMEZONE
from core.errors import NotFound
from core.meevo_client import MeevoClient
from core.validation import normalize_email, normalize_phone, parse_start_time
from models.appointments import AppointmentSummary, ClientIdentity

logger = logging.getLogger(__name__)

NO_CLIENT_MESSAGE = "No client found with that phone number or email"
NO_APPOINTMENTS_MESSAGE = "No appointments found for this client"
NO_UPCOMING_MESSAGE = "No upcoming appointments found to mark as running late"


async def find_client(
    meevo: MeevoClient,
    location_id: str,
    phone: str | None = None,
    email: str | None = None,
) -> ClientIdentity:
    """
    Look up a client by phone (preferred) or email.

    The first client returned is taken as the match; Meevo's lookup is
    expected to return a single relevant record.

    Raises:
        NotFound: if no identifier is usable or no client matches
    """
    normalized_phone = normalize_phone(phone)
    normalized_email = normalize_email(email)
    if not normalized_phone and not normalized_email:
        raise NotFound(NO_CLIENT_MESSAGE)

    if normalized_phone:
        clients = await meevo.lookup_clients(location_id, phone=normalized_phone)
    else:
        clients = await meevo.lookup_clients(location_id, email=normalized_email)

    if not clients:
        raise NotFound(NO_CLIENT_MESSAGE)
    if len(clients) > 1:
        logger.warning(
            "Client lookup returned %d matches, using the first (%s)",
            len(clients),
            clients[0].client_id,
        )
    return clients[0]


def select_upcoming_appointment(
    appointments: list[AppointmentSummary],
    now: datetime,
    default_tz: tzinfo,
) -> AppointmentSummary | None:
    """
    Pick the earliest appointment that is not cancelled and starts at or after `now`.

    Ties keep upstream order. Appointments with missing or unparseable start
    times are ignored.
    """
    upcoming: list[tuple[datetime, AppointmentSummary]] = []
    for appointment in appointments:
        if appointment.is_cancelled:
            continue
        try:
            if not appointment.start_time:
                raise ValueError("missing start time")
            starts_at = parse_start_time(appointment.start_time, default_tz)
        except ValueError:
            logger.warning(
                "Ignoring appointment %s with bad start time %r",
                appointment.appointment_service_id,
                appointment.start_time,
            )
            continue
        if starts_at >= now:
            upcoming.append((starts_at, appointment))

    if not upcoming:
        return None
    # min() returns the first minimal element, so ties stay in upstream order
    return min(upcoming, key=lambda pair: pair[0])[1]


async def resolve_upcoming_appointment(
    meevo: MeevoClient,
    location_id: str,
    phone: str | None = None,
    email: str | None = None,
    now: datetime | None = None,
    default_tz: tzinfo | None = None,
) -> AppointmentSummary:
    """
    Find the client's next appointment that can be marked as running late.

    Raises:
        NotFound: no client, no appointments, or nothing upcoming
    """
    client = await find_client(meevo, location_id, phone=phone, email=email)
    logger.info("Resolved client %s", client.client_id)

    appointments = await meevo.get_client_appointments(client.client_id, location_id)
    if not appointments:
        raise NotFound(NO_APPOINTMENTS_MESSAGE)

    upcoming = select_upcoming_appointment(
        appointments,
        now=now or datetime.now(timezone.utc),
        default_tz=default_tz or ZoneInfo(LOCATION_TIMEZONE),
    )
    if upcoming is None:
        raise NotFound(NO_UPCOMING_MESSAGE)

    logger.info("Found upcoming appointment: %s", upcoming.appointment_service_id)
    return upcoming
