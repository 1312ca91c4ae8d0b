"""Tests for the HTTP endpoints."""

from collections.abc import AsyncIterator

import httpx
import pytest
from respx import MockRouter

from api.dependencies import get_meevo_client
from api.main import app
from conftest import CLIENT_LOOKUP_URL, RUNNING_LATE_URL, client_appointments_url


@pytest.fixture
async def api_client(meevo) -> AsyncIterator[httpx.AsyncClient]:
    """ASGI client for the app, using the test Meevo client."""
    app.dependency_overrides[get_meevo_client] = lambda: meevo
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://relay") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_health(api_client):
    response = await api_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["service"] == "mark-running-late"
    assert "timestamp" in body


@pytest.mark.asyncio
async def test_mark_late_by_appointment_id(api_client, respx_mock: MockRouter, sample_details):
    respx_mock.get(RUNNING_LATE_URL).mock(
        return_value=httpx.Response(200, json={"data": sample_details})
    )
    respx_mock.put(RUNNING_LATE_URL).mock(return_value=httpx.Response(200, json={}))

    response = await api_client.post("/mark-late", json={"appointment_service_id": "APT-42"})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "marked_late": True,
        "appointment_service_id": "APT-42",
        "appointment_time": "2030-05-01T15:00:00",
        "message": "Your barber has been notified that you're running late.",
    }


@pytest.mark.asyncio
async def test_empty_body_reports_missing_identifier(api_client, respx_mock: MockRouter):
    response = await api_client.post("/mark-late", json={})

    assert response.status_code == 200
    assert response.json() == {
        "success": False,
        "error": "Missing appointment_service_id or client_phone/client_email to lookup",
    }
    assert len(respx_mock.calls) == 0


@pytest.mark.asyncio
async def test_unknown_client_reports_not_found(api_client, respx_mock: MockRouter):
    respx_mock.post(CLIENT_LOOKUP_URL).mock(return_value=httpx.Response(200, json={"data": []}))

    response = await api_client.post("/mark-late", json={"client_phone": "5550000000"})

    assert response.status_code == 200
    assert response.json() == {
        "success": False,
        "error": "No client found with that phone number or email",
    }


@pytest.mark.asyncio
async def test_upstream_rejection_message_returned(
    api_client, respx_mock: MockRouter, sample_details
):
    respx_mock.get(RUNNING_LATE_URL).mock(
        return_value=httpx.Response(200, json={"data": sample_details})
    )
    respx_mock.put(RUNNING_LATE_URL).mock(
        return_value=httpx.Response(400, json={"error": {"message": "Concurrency conflict"}})
    )

    response = await api_client.post("/mark-late", json={"appointment_service_id": "APT-42"})

    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "Concurrency conflict"}


@pytest.mark.asyncio
async def test_unexpected_error_is_generic_failure(api_client, meevo, monkeypatch):
    async def boom(*args, **kwargs):
        raise RuntimeError("kaboom")

    monkeypatch.setattr(meevo, "get_running_late_details", boom)

    response = await api_client.post("/mark-late", json={"appointment_service_id": "APT-42"})

    assert response.status_code == 200
    assert response.json() == {
        "success": False,
        "error": "Failed to mark appointment as running late",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kwargs",
    [
        {"content": b"not json", "headers": {"Content-Type": "application/json"}},
        {"json": {"appointment_service_id": ["APT-42", "APT-43"]}},
    ],
)
async def test_unreadable_body_still_returns_200(api_client, respx_mock: MockRouter, kwargs):
    response = await api_client.post("/mark-late", **kwargs)

    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "Invalid request body"}
    assert len(respx_mock.calls) == 0


@pytest.mark.asyncio
async def test_missing_body_reports_missing_identifier(api_client, respx_mock: MockRouter):
    response = await api_client.post("/mark-late")

    assert response.status_code == 200
    assert response.json() == {
        "success": False,
        "error": "Missing appointment_service_id or client_phone/client_email to lookup",
    }
    assert len(respx_mock.calls) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("estimate", [7.5, "10-15", "soon", 10])
async def test_free_form_estimate_does_not_block_update(
    api_client, respx_mock: MockRouter, sample_details, estimate
):
    respx_mock.get(RUNNING_LATE_URL).mock(
        return_value=httpx.Response(200, json={"data": sample_details})
    )
    update_route = respx_mock.put(RUNNING_LATE_URL).mock(return_value=httpx.Response(200))

    response = await api_client.post(
        "/mark-late",
        json={"appointment_service_id": "APT-42", "estimated_minutes": estimate},
    )

    assert response.json()["success"] is True
    assert update_route.call_count == 1


@pytest.mark.asyncio
async def test_mark_late_by_phone(api_client, respx_mock: MockRouter, sample_client, sample_details):
    respx_mock.post(CLIENT_LOOKUP_URL).mock(
        return_value=httpx.Response(200, json={"data": [sample_client]})
    )
    respx_mock.get(client_appointments_url("C-100")).mock(
        return_value=httpx.Response(
            200,
            json={
                "data": [
                    {"appointmentServiceId": "APT-LATER", "startTime": "2099-01-01T18:00:00+00:00"},
                    {"appointmentServiceId": "APT-SOON", "startTime": "2099-01-01T16:00:00+00:00"},
                ]
            },
        )
    )
    respx_mock.get(RUNNING_LATE_URL, params={"AppointmentServiceId": "APT-SOON"}).mock(
        return_value=httpx.Response(
            200, json={"data": {**sample_details, "startTime": "2099-01-01T16:00:00+00:00"}}
        )
    )
    update_route = respx_mock.put(
        RUNNING_LATE_URL, params={"AppointmentServiceId": "APT-SOON"}
    ).mock(return_value=httpx.Response(200))

    response = await api_client.post("/mark-late", json={"client_phone": "+1 (555) 123-4567"})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "marked_late": True,
        "appointment_service_id": "APT-SOON",
        "appointment_time": "2099-01-01T16:00:00+00:00",
        "message": "Your barber has been notified that you're running late.",
    }
    assert update_route.call_count == 1
