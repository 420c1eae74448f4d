"""
Access-token cache for the Zoho Creator API.

Tokens are obtained lazily through the OAuth refresh-grant exchange and kept
in memory only. A cached credential is served as long as the clock is before
its expiry; otherwise exactly one exchange is issued per caller (concurrent
callers in the same event loop share one exchange).
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import httpx

from src.integrations.contracts.interfaces import Credential
from src.integrations.zoho.base import ZohoHttpClient, response_json
from src.integrations.zoho.errors import AuthError
from src.utils.config_loader import ZohoConfig

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenCache(ZohoHttpClient):
    def __init__(
        self,
        config: ZohoConfig,
        *,
        clock: Clock = utc_now,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        super().__init__(timeout_seconds=config.timeout_seconds, client=client)
        self.config = config
        self._clock = clock
        self._credential: Optional[Credential] = None
        self._refresh_lock = asyncio.Lock()

    @property
    def credential(self) -> Optional[Credential]:
        return self._credential

    def invalidate(self) -> None:
        self._credential = None

    async def get_valid_token(self) -> Credential:
        cached = self._credential
        if cached is not None and cached.is_valid(self._clock()):
            return cached
        async with self._refresh_lock:
            # another waiter may have refreshed while we were queued
            cached = self._credential
            if cached is not None and cached.is_valid(self._clock()):
                return cached
            return await self.refresh()

    async def refresh(self) -> Credential:
        params = {
            "grant_type": "refresh_token",
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "redirect_uri": self.config.redirect_uri,
            "refresh_token": self.config.refresh_token,
        }
        try:
            response = await self._request("POST", self.config.token_url, params=params)
        except httpx.HTTPError as e:
            logger.error("Error fetching Zoho access token: %s", e)
            raise AuthError(f"Token exchange failed: {e}") from e

        data = response_json(response)
        if response.is_error:
            logger.error("Zoho token endpoint returned HTTP %s", response.status_code)
            raise AuthError(f"Token exchange failed with HTTP {response.status_code}", payload=data)
        if not isinstance(data, dict) or not data.get("access_token"):
            raise AuthError("Access token not found in the response.", payload=data)

        lifetime = self._lifetime_seconds(data.get("expires_in"))
        issued_at = self._clock()
        self._credential = Credential(
            token=str(data["access_token"]),
            expires_at=issued_at + timedelta(seconds=lifetime),
        )
        logger.info("Zoho access token refreshed; valid for %ss", lifetime)
        return self._credential

    def _lifetime_seconds(self, raw) -> float:
        try:
            lifetime = float(raw)
        except (TypeError, ValueError):
            lifetime = 0.0
        if lifetime <= 0:
            logger.warning("Token response carried no usable expires_in (%r); assuming %ss", raw, self.config.default_token_lifetime)
            return float(self.config.default_token_lifetime)
        return lifetime
