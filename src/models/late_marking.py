"""
Inbound request and outbound result of a running-late action.
"""

from pydantic import BaseModel, ConfigDict


class MarkLateRequest(BaseModel):
    """
    Body of POST /mark-late.

    Either `appointment_service_id` or one of `client_phone`/`client_email`
    must be given; that rule is checked by the relay, not the schema, so a
    missing identifier still gets the standard failure response.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    appointment_service_id: str | None = None
    client_phone: str | None = None
    client_email: str | None = None
    location_id: str | None = None
    estimated_minutes: int | float | str | None = None  # free-form, only logged


class MarkLateResult(BaseModel):
    """Response body of POST /mark-late. Unset fields are left out of the JSON."""

    success: bool
    marked_late: bool | None = None
    appointment_service_id: str | None = None
    appointment_time: str | None = None
    message: str | None = None
    error: str | None = None
