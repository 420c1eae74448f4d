"""Shared HTTP plumbing for the Zoho Creator clients."""
from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

AUTH_SCHEME = "Zoho-oauthtoken"


def auth_headers(token: str, *, json_body: bool = True) -> Dict[str, str]:
    headers = {"Authorization": f"{AUTH_SCHEME} {token}", "Accept": "application/json"}
    if json_body:
        headers["Content-Type"] = "application/json"
    return headers


def response_json(response: httpx.Response) -> Any:
    """Decoded JSON body, or None when the body is empty or not JSON."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


class ZohoHttpClient:
    """Sends requests through an injected client or a short-lived one."""

    def __init__(self, timeout_seconds: float = 30.0, client: Optional[httpx.AsyncClient] = None) -> None:
        self.timeout_seconds = timeout_seconds
        self._client = client

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        if self._client is not None:
            return await self._client.request(method, url, **kwargs)
        async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
            return await client.request(method, url, **kwargs)
