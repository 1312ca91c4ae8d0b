"""
Data models for Meevo clients and appointments.

Field aliases follow the camelCase keys of the Meevo public API so records can
be validated straight from response payloads.
"""

from pydantic import BaseModel, ConfigDict, Field


class MeevoRecord(BaseModel):
    """Base for upstream records: accepts aliases, ignores unknown keys."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )


class ClientIdentity(MeevoRecord):
    """Client returned by the lookup endpoint."""

    client_id: str = Field(alias="clientId")
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    phone: str | None = Field(default=None, alias="primaryPhoneNumber")
    email: str | None = Field(default=None, alias="emailAddress")


class AppointmentSummary(MeevoRecord):
    """One booked service from the client's appointment list."""

    appointment_service_id: str = Field(alias="appointmentServiceId")
    start_time: str | None = Field(default=None, alias="startTime")  # as returned by Meevo
    is_cancelled: bool | None = Field(default=False, alias="isCancelled")


class AppointmentDetails(MeevoRecord):
    """Running-late view of an appointment, including its concurrency token."""

    # Values are echoed back unchanged, nulls included
    service_id: int | str | None = Field(default=None, alias="serviceId")
    client_id: int | str | None = Field(default=None, alias="clientId")
    employee_id: int | str | None = Field(default=None, alias="employeeId")
    concurrency_check_digits: int | str | None = Field(default=None, alias="concurrencyCheckDigits")
    start_time: str | None = Field(default=None, alias="startTime")

    def to_running_late_payload(self) -> dict:
        """Build the PUT body that flags this appointment as running late."""
        return {
            "ServiceId": self.service_id,
            "ClientId": self.client_id,
            "EmployeeId": self.employee_id,
            "ConcurrencyCheckDigits": self.concurrency_check_digits,
            "StartTime": self.start_time,
            "IsRunningLate": True,
        }
