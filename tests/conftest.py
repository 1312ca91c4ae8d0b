"""
Pytest configuration and shared fixtures.
"""

import sys
from collections.abc import AsyncIterator
from pathlib import Path

import httpx
import pytest
from respx import MockRouter

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.meevo_client import MeevoClient  # noqa: E402
from core.token_manager import TokenManager  # noqa: E402

AUTH_URL = "https://auth.meevo.test/oauth2/token"
API_URL = "https://api.meevo.test/publicapi/v1"
TENANT_ID = "200507"
LOCATION_ID = "201664"

CLIENT_LOOKUP_URL = f"{API_URL}/clients/lookup"
RUNNING_LATE_URL = f"{API_URL}/book/service/runninglate"


def client_appointments_url(client_id: str) -> str:
    return f"{API_URL}/book/client/{client_id}/services"


@pytest.fixture
def token_route(respx_mock: MockRouter):
    """Token endpoint handing out a one-hour token."""
    return respx_mock.post(AUTH_URL).mock(
        return_value=httpx.Response(200, json={"access_token": "test-token", "expires_in": 3600})
    )


@pytest.fixture
async def http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Real httpx client so respx can intercept upstream calls."""
    async with httpx.AsyncClient(timeout=5) as client:
        yield client


@pytest.fixture
def meevo(http_client: httpx.AsyncClient, token_route) -> MeevoClient:
    """Meevo client wired to the test URLs."""
    token_manager = TokenManager(
        http_client,
        auth_url=AUTH_URL,
        client_id="test-client-id",
        client_secret="test-client-secret",
    )
    return MeevoClient(http_client, token_manager, api_url=API_URL, tenant_id=TENANT_ID)


@pytest.fixture
def sample_client():
    """Client record as returned by the Meevo lookup endpoint."""
    return {
        "clientId": "C-100",
        "firstName": "Jamie",
        "lastName": "Rivera",
        "primaryPhoneNumber": "5551234567",
        "emailAddress": "jamie@example.com",
    }


@pytest.fixture
def sample_details():
    """Running-late details for an appointment."""
    return {
        "serviceId": "S-1",
        "clientId": "C-100",
        "employeeId": "E-7",
        "concurrencyCheckDigits": 4821,
        "startTime": "2030-05-01T15:00:00",
    }
