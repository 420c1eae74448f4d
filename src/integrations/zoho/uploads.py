"""
File attacher for Zoho Creator records.

Each upload is independent: a failed file is reported in its own result and
never affects the record or other files. Only AuthError propagates.
"""
from __future__ import annotations

import json
import logging
from typing import Iterable, List, Optional

import httpx

from src.integrations.contracts.interfaces import SubmissionResult, UploadedFile
from src.integrations.policy.response_wrappers import normalize_upload_response, upload_failure
from src.integrations.zoho.base import ZohoHttpClient, auth_headers, response_json
from src.integrations.zoho.token_cache import TokenCache
from src.utils.config_loader import ZohoConfig

logger = logging.getLogger(__name__)

SKIP_WORKFLOW = json.dumps(["schedules", "form_workflow"], separators=(",", ":"))


class FileAttacher(ZohoHttpClient):
    def __init__(
        self,
        config: ZohoConfig,
        token_cache: TokenCache,
        client: Optional[httpx.AsyncClient] = None,
        report_name: Optional[str] = None,
    ) -> None:
        super().__init__(timeout_seconds=config.timeout_seconds, client=client)
        self.config = config
        self.token_cache = token_cache
        self.report_name = report_name or config.upload_report

    def upload_url(self, record_id: str, field_name: str) -> str:
        base = self.config.data_api_base.rstrip("/")
        return f"{base}/{self.config.org_id}/{self.config.app_id}/report/{self.report_name}/{record_id}/{field_name}/upload"

    async def attach(
        self,
        record_id: str,
        field_name: str,
        file_bytes: bytes,
        file_name: str,
        content_type: str = "application/pdf",
    ) -> SubmissionResult:
        credential = await self.token_cache.get_valid_token()
        url = self.upload_url(record_id, field_name)
        logger.info("Uploading %s to record %s field %s", file_name, record_id, field_name)

        try:
            response = await self._request(
                "POST",
                url,
                params={"skip_workflow": SKIP_WORKFLOW},
                headers=auth_headers(credential.token, json_body=False),
                files={"file": (file_name, file_bytes, content_type)},
            )
        except httpx.HTTPError as e:
            logger.error(f"Error uploading file to {field_name}: {e}")
            return upload_failure(e, field_name=field_name)

        body = response_json(response)
        raw = body if body is not None else response.text
        logger.info("File upload response status: %s", response.status_code)
        result = normalize_upload_response(raw, file_name=file_name, field_name=field_name, status_code=response.status_code)
        if not result.success:
            logger.error("Upload of %s to %s failed: %s", file_name, field_name, raw)
        return result

    async def attach_many(self, record_id: str, files: Iterable[UploadedFile]) -> List[SubmissionResult]:
        results = []
        for f in files:
            results.append(await self.attach(record_id, f.field_name, f.content, f.file_name, f.content_type))
        return results
