"""
Meevo OAuth2 access token cache.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

import httpx

from core.config import TOKEN_REFRESH_MARGIN_SECONDS
from core.errors import AuthFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessToken:
    """Bearer token and its absolute expiry (epoch seconds)."""

    value: str
    expires_at: float


class TokenManager:
    """
    Holds a single access token for the process and refreshes it on demand.

    A refresh happens once the token is within the refresh margin of its
    expiry. Refresh is single-flight: callers arriving while a refresh is in
    progress wait for it and reuse its result.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        auth_url: str,
        client_id: str,
        client_secret: str,
        refresh_margin: float = TOKEN_REFRESH_MARGIN_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self._http = http_client
        self._auth_url = auth_url
        self._client_id = client_id
        self._client_secret = client_secret
        self._refresh_margin = refresh_margin
        self._clock = clock
        self._token: AccessToken | None = None
        self._lock = asyncio.Lock()

    @property
    def token(self) -> AccessToken | None:
        return self._token

    def _is_fresh(self, token: AccessToken | None) -> bool:
        return token is not None and self._clock() < token.expires_at - self._refresh_margin

    async def get_token(self) -> str:
        """Return a valid access token, fetching a new one if needed."""
        if self._is_fresh(self._token):
            return self._token.value

        async with self._lock:
            # Another caller may have refreshed while we waited
            if self._is_fresh(self._token):
                return self._token.value
            self._token = await self._fetch_token()
            return self._token.value

    async def _fetch_token(self) -> AccessToken:
        issued_at = self._clock()
        try:
            response = await self._http.post(
                self._auth_url,
                json={"client_id": self._client_id, "client_secret": self._client_secret},
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("Meevo token request rejected: %s", e.response.status_code)
            raise AuthFailure() from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Meevo token request failed: %s", e)
            raise AuthFailure() from e

        access_token = payload.get("access_token") if isinstance(payload, dict) else None
        if not access_token:
            logger.error("Meevo token response did not include an access_token")
            raise AuthFailure()

        expires_in = float(payload.get("expires_in") or 0)
        logger.info("Got fresh Meevo token (expires in %ss)", int(expires_in))
        return AccessToken(value=access_token, expires_at=issued_at + expires_in)
