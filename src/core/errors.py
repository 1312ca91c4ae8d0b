"""
Relay error taxonomy.

Every failure the relay reports to a caller is a RelayError. The route layer
turns these into `{"success": false, "error": message}` responses.
"""

from core.config import GENERIC_FAILURE_MESSAGE


class RelayError(Exception):
    """Base class for failures reported back to the caller."""

    def __init__(self, message: str = GENERIC_FAILURE_MESSAGE):
        super().__init__(message)
        self.message = message


class AuthFailure(RelayError):
    """Token endpoint rejected the credentials or was unreachable."""


class NotFound(RelayError):
    """No client, no appointments, or no qualifying upcoming appointment."""


class UpstreamDataMissing(RelayError):
    """A read succeeded but returned no usable payload."""


class UpstreamRejected(RelayError):
    """Upstream answered with an error status or could not be reached."""

    def __init__(self, message: str = GENERIC_FAILURE_MESSAGE, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedRequest(RelayError):
    """Neither an appointment id nor a phone/email was supplied."""
