#!/usr/bin/env python3
"""
Mark a client's appointment as running late from the command line.

Uses the same Meevo configuration as the API (MEEVO_* environment variables).

Usage:
    uv run python src/scripts/mark_late.py --phone "+1 (555) 123-4567"
    uv run python src/scripts/mark_late.py --appointment-id APT-42 --location-id 201664
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from api.logging import configure_logging
from core.errors import RelayError
from core.meevo_client import create_http_client, create_meevo_client
from models.late_marking import MarkLateRequest, MarkLateResult
from services.running_late import mark_late


async def run(request: MarkLateRequest) -> MarkLateResult:
    """Mark the appointment late, converting relay errors to a failed result."""
    async with create_http_client() as http_client:
        meevo = create_meevo_client(http_client)
        try:
            return await mark_late(meevo, request)
        except RelayError as e:
            return MarkLateResult(success=False, error=e.message)


def main():
    parser = argparse.ArgumentParser(
        description="Mark a Meevo appointment as running late"
    )
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--appointment-id", help="Appointment service ID to mark directly")
    target.add_argument("--phone", help="Client phone number to look up")
    target.add_argument("--email", help="Client email address to look up")
    parser.add_argument("--location-id", help="Meevo location ID (defaults to MEEVO_LOCATION_ID)")
    parser.add_argument("--minutes", type=int, help="Estimated minutes late")

    args = parser.parse_args()
    configure_logging()

    request = MarkLateRequest(
        appointment_service_id=args.appointment_id,
        client_phone=args.phone,
        client_email=args.email,
        location_id=args.location_id,
        estimated_minutes=args.minutes,
    )
    result = asyncio.run(run(request))
    print(result.model_dump_json(exclude_none=True, indent=2))

    if not result.success:
        sys.exit(1)


if __name__ == "__main__":
    main()
