"""
Input normalization and upstream timestamp parsing.
"""

import re
from datetime import datetime, tzinfo

_NON_DIGITS = re.compile(r"\D")


def normalize_phone(phone: str | None) -> str:
    """
    Reduce a phone number to its last 10 digits.

    Formatting characters and a leading country code are dropped, so
    "+1 (555) 123-4567" and "5551234567" normalize to the same value.
    Returns "" when the input has no digits.
    """
    if not phone:
        return ""
    return _NON_DIGITS.sub("", phone)[-10:]


def normalize_email(email: str | None) -> str:
    """Lower-case an email address and trim surrounding whitespace."""
    if not email:
        return ""
    return email.strip().lower()


def parse_start_time(value: str, default_tz: tzinfo) -> datetime:
    """
    Parse an ISO 8601 timestamp from Meevo into an aware datetime.

    Timestamps without an offset are local to the salon, so they get
    `default_tz` attached.
    """
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=default_tz)
    return parsed
