"""Read-only access to Zoho Creator reports."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

from src.integrations.zoho.base import ZohoHttpClient, auth_headers, response_json
from src.integrations.zoho.errors import ProtocolError
from src.integrations.zoho.token_cache import TokenCache
from src.utils.config_loader import ZohoConfig

logger = logging.getLogger(__name__)


class ReportReader(ZohoHttpClient):
    def __init__(self, config: ZohoConfig, token_cache: TokenCache, client: Optional[httpx.AsyncClient] = None) -> None:
        super().__init__(timeout_seconds=config.timeout_seconds, client=client)
        self.config = config
        self.token_cache = token_cache

    def report_url(self, report_name: str) -> str:
        base = self.config.data_api_base.rstrip("/")
        return f"{base}/{self.config.org_id}/{self.config.app_id}/report/{report_name}"

    async def fetch_records(
        self,
        report_name: str,
        fields: Sequence[str] = (),
        criteria: Optional[str] = None,
        max_records: int = 200,
    ) -> List[Dict[str, Any]]:
        """
        Fetch up to ``max_records`` rows from a report.

        Raises httpx.HTTPStatusError for non-2xx responses and ProtocolError
        when the body carries no ``data`` list.
        """
        credential = await self.token_cache.get_valid_token()
        params: Dict[str, Any] = {"max_records": max_records}
        if fields:
            params["field_config"] = "custom"
            params["fields"] = ",".join(fields)
        if criteria:
            params["criteria"] = criteria

        url = self.report_url(report_name)
        logger.info("Fetching Zoho report %s", report_name)
        response = await self._request("GET", url, params=params, headers=auth_headers(credential.token))
        response.raise_for_status()

        body = response_json(response)
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, list):
            raise ProtocolError(f"Report {report_name} returned no data list", payload=body)
        logger.info("Zoho report %s returned %d records", report_name, len(data))
        return data
