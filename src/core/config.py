"""
Configuration constants and environment setup.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# MEEVO API (from environment)
# =============================================================================

MEEVO_AUTH_URL = os.environ.get("MEEVO_AUTH_URL", "https://marketplace.meevo.com/oauth2/token")
MEEVO_API_URL = os.environ.get("MEEVO_API_URL", "https://na1pub.meevo.com/publicapi/v1")
MEEVO_CLIENT_ID = os.environ.get("MEEVO_CLIENT_ID", "")
MEEVO_CLIENT_SECRET = os.environ.get("MEEVO_CLIENT_SECRET", "")
MEEVO_TENANT_ID = os.environ.get("MEEVO_TENANT_ID", "")

HTTP_TIMEOUT_SECONDS = float(os.environ.get("HTTP_TIMEOUT_SECONDS", "15"))
TOKEN_REFRESH_MARGIN_SECONDS = 300  # Refresh 5 minutes before expiry

# =============================================================================
# LOCATION
# =============================================================================

MEEVO_LOCATION_ID = os.environ.get("MEEVO_LOCATION_ID", "")
LOCATION_NAME = os.environ.get("LOCATION_NAME", "")
LOCATION_TIMEZONE = os.environ.get("LOCATION_TIMEZONE", "America/Phoenix")

# =============================================================================
# MESSAGES
# =============================================================================

SUCCESS_MESSAGE = "Your barber has been notified that you're running late."
GENERIC_FAILURE_MESSAGE = "Failed to mark appointment as running late"

# =============================================================================
# API CONFIGURATION
# =============================================================================

SERVICE_NAME = "mark-running-late"
ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("PORT", "3000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
API_VERSION = "1.0.0"
