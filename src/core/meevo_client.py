"""
Meevo public API client.

All upstream calls go through MeevoClient.request(), which attaches the bearer
token and tenant/location scoping and turns HTTP failures into relay errors.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from core.config import (
    GENERIC_FAILURE_MESSAGE,
    HTTP_TIMEOUT_SECONDS,
    MEEVO_API_URL,
    MEEVO_AUTH_URL,
    MEEVO_CLIENT_ID,
    MEEVO_CLIENT_SECRET,
    MEEVO_TENANT_ID,
)
from core.errors import UpstreamRejected
from core.token_manager import TokenManager
from models.appointments import AppointmentDetails, AppointmentSummary, ClientIdentity

logger = logging.getLogger(__name__)

CLIENT_LOOKUP_PATH = "/clients/lookup"
CLIENT_APPOINTMENTS_PATH = "/book/client/{client_id}/services"
RUNNING_LATE_PATH = "/book/service/runninglate"


def extract_error_message(response: httpx.Response) -> str | None:
    """Pull Meevo's `{"error": {"message": ...}}` text out of an error response."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return None


class MeevoClient:
    """Thin async wrapper over the Meevo endpoints the relay needs."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        token_manager: TokenManager,
        api_url: str,
        tenant_id: str,
    ):
        self._http = http_client
        self._tokens = token_manager
        self._api_url = api_url.rstrip("/")
        self.tenant_id = tenant_id

    async def request(
        self,
        method: str,
        path: str,
        location_id: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Call a Meevo endpoint and return the decoded JSON body.

        Returns an empty dict when the response has no JSON body.

        Raises:
            AuthFailure: if no access token could be obtained
            UpstreamRejected: on a non-2xx status or a transport error
        """
        token = await self._tokens.get_token()
        query = {"TenantId": self.tenant_id, "LocationId": location_id, **(params or {})}

        try:
            response = await self._http.request(
                method,
                f"{self._api_url}{path}",
                params=query,
                json=json,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            logger.error("Meevo %s %s failed: %s", method, path, e)
            raise UpstreamRejected() from e

        if response.is_error:
            message = extract_error_message(response)
            logger.error(
                "Meevo %s %s returned %s: %s",
                method,
                path,
                response.status_code,
                message or response.text,
            )
            raise UpstreamRejected(message or GENERIC_FAILURE_MESSAGE, response.status_code)

        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError:
            logger.warning("Meevo %s %s returned a non-JSON body", method, path)
            return {}
        return body if isinstance(body, dict) else {}

    async def lookup_clients(
        self,
        location_id: str,
        phone: str | None = None,
        email: str | None = None,
    ) -> list[ClientIdentity]:
        """Find clients by phone number (preferred) or email address."""
        if phone:
            criteria = {"phoneNumber": phone}
        elif email:
            criteria = {"emailAddress": email}
        else:
            raise ValueError("lookup_clients needs a phone or an email")

        body = await self.request("POST", CLIENT_LOOKUP_PATH, location_id, json=criteria)
        return _parse_records(body.get("data"), ClientIdentity)

    async def get_client_appointments(
        self, client_id: str, location_id: str
    ) -> list[AppointmentSummary]:
        """List the booked services for a client, in upstream order."""
        path = CLIENT_APPOINTMENTS_PATH.format(client_id=client_id)
        body = await self.request("GET", path, location_id)
        return _parse_records(body.get("data"), AppointmentSummary)

    async def get_running_late_details(
        self, appointment_service_id: str, location_id: str
    ) -> AppointmentDetails | None:
        """Read the appointment's running-late view. None when Meevo returns no data."""
        body = await self.request(
            "GET",
            RUNNING_LATE_PATH,
            location_id,
            params={"AppointmentServiceId": appointment_service_id},
        )
        data = body.get("data")
        if not data or not isinstance(data, dict):
            return None
        try:
            return AppointmentDetails.model_validate(data)
        except ValidationError as e:
            logger.warning("Unusable running-late details for %s: %s", appointment_service_id, e)
            return None

    async def put_running_late(
        self,
        appointment_service_id: str,
        location_id: str,
        details: AppointmentDetails,
    ) -> dict[str, Any]:
        """Flag the appointment as running late using the details' concurrency token."""
        return await self.request(
            "PUT",
            RUNNING_LATE_PATH,
            location_id,
            params={"AppointmentServiceId": appointment_service_id},
            json=details.to_running_late_payload(),
        )


def _parse_records(data: Any, model: type) -> list:
    """Validate a list of upstream records, skipping ones that don't fit the model."""
    if not isinstance(data, list):
        return []
    records = []
    for item in data:
        try:
            records.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning("Skipping malformed %s record: %s", model.__name__, e)
    return records


def create_http_client() -> httpx.AsyncClient:
    """Create the shared HTTP client with a bounded timeout."""
    return httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS)


def create_meevo_client(http_client: httpx.AsyncClient) -> MeevoClient:
    """Wire a MeevoClient and its TokenManager from configuration."""
    token_manager = TokenManager(
        http_client,
        auth_url=MEEVO_AUTH_URL,
        client_id=MEEVO_CLIENT_ID,
        client_secret=MEEVO_CLIENT_SECRET,
    )
    return MeevoClient(
        http_client,
        token_manager,
        api_url=MEEVO_API_URL,
        tenant_id=MEEVO_TENANT_ID,
    )
