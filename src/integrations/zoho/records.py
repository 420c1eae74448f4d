"""
Record submitter for Zoho Creator forms.

Creates one record per call. There is no retry: Zoho-side rejections come
back as failed SubmissionResults, while AuthError and transport errors
propagate so the caller decides how to report them.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

import httpx

from src.integrations.contracts.interfaces import FormVariant, SubmissionResult
from src.integrations.policy.response_wrappers import normalize_create_response
from src.integrations.zoho.base import ZohoHttpClient, auth_headers, response_json
from src.integrations.zoho.errors import ConfigurationError
from src.integrations.zoho.token_cache import TokenCache
from src.utils.config_loader import ZohoConfig

logger = logging.getLogger(__name__)


class RecordSubmitter(ZohoHttpClient):
    def __init__(self, config: ZohoConfig, token_cache: TokenCache, client: Optional[httpx.AsyncClient] = None) -> None:
        super().__init__(timeout_seconds=config.timeout_seconds, client=client)
        self.config = config
        self.token_cache = token_cache

    def form_url(self, variant: Union[FormVariant, str]) -> str:
        form_name = self.config.form_for(FormVariant(variant))
        if not form_name:
            raise ConfigurationError(f"No Zoho Creator form configured for '{FormVariant(variant).value}'.")
        base = self.config.creator_api_base.rstrip("/")
        return f"{base}/{self.config.org_id}/{self.config.app_id}/form/{form_name}"

    async def submit(self, record: Dict[str, Any], variant: Union[FormVariant, str]) -> SubmissionResult:
        url = self.form_url(variant)
        credential = await self.token_cache.get_valid_token()

        logger.info("Creating Zoho Creator %s record (%d fields) at %s", FormVariant(variant).value, len(record), url)
        logger.debug("Zoho Creator payload: %s", record)
        try:
            response = await self._request("POST", url, json={"data": record}, headers=auth_headers(credential.token))
        except httpx.RequestError as e:
            logger.error(f"Request error connecting to Zoho Creator: {e}")
            raise

        body = response_json(response)
        logger.info(f"Zoho Creator response: status={response.status_code}")
        if response.is_error:
            logger.error("Zoho Creator error response %s: %s", response.status_code, body if body is not None else response.text)
        return normalize_create_response(body, status_code=response.status_code)
