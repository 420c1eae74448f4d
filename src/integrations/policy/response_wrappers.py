from __future__ import annotations

import logging
from typing import Any, Optional

from src.integrations.contracts.interfaces import SubmissionResult
from src.integrations.zoho.errors import (
    FieldValueError,
    ProtocolError,
    UploadError,
    ValidationError,
    ZohoIntegrationError,
)

logger = logging.getLogger(__name__)

CODE_SUCCESS = 3000
CODE_INVALID_FIELD_VALUES = 3001
CODE_VALIDATION_FAILED = 3002


def normalize_create_response(raw: Any, *, status_code: Optional[int] = None) -> SubmissionResult:
    """Classify a record-create response body into a SubmissionResult.

    3002 -> ValidationError, 3001 -> FieldValueError, a ``data`` object with an
    ``ID`` -> success, anything else -> ProtocolError. Errors are returned as
    failed results, never raised.
    """
    try:
        record_id = _extract_record_id(raw, status_code)
    except ZohoIntegrationError as exc:
        logger.error("Zoho Creator rejected record: %s", exc)
        return SubmissionResult(success=False, message=str(exc), error=exc)
    return SubmissionResult(
        success=True,
        record_id=record_id,
        message="Record created successfully in Zoho Creator",
    )


def normalize_upload_response(
    raw: Any, *, file_name: str, field_name: str, status_code: Optional[int] = None
) -> SubmissionResult:
    """Only code 3000 is a successful upload. Anything else fails with the raw body echoed in `error`."""
    if isinstance(raw, dict) and raw.get("code") == CODE_SUCCESS:
        return SubmissionResult(
            success=True,
            message=f"File {file_name} uploaded successfully to {field_name}",
        )
    detail = raw.get("message") if isinstance(raw, dict) else None
    if not detail and status_code is not None:
        detail = f"HTTP {status_code}"
    return SubmissionResult(
        success=False,
        message=f"Upload failed: {detail or 'Unknown error'}",
        error=raw,
    )


def upload_failure(exc: Exception, *, field_name: str, payload: Any = None) -> SubmissionResult:
    error = UploadError(f"Failed to upload file to {field_name}: {exc}", payload=payload)
    return SubmissionResult(success=False, message=str(error), error=error)


def summarize_errors(error: Any) -> str:
    if isinstance(error, dict):
        return ", ".join(summarize_errors(v) for v in error.values())
    if isinstance(error, (list, tuple)):
        return ", ".join(summarize_errors(v) for v in error)
    return "" if error is None else str(error)


def _extract_record_id(raw: Any, status_code: Optional[int]) -> str:
    if not isinstance(raw, dict):
        raise ProtocolError(f"Invalid response from Zoho Creator (HTTP {status_code}): unexpected response", payload=raw)

    code = raw.get("code")
    if code == CODE_VALIDATION_FAILED:
        messages = summarize_errors(raw.get("error")) or str(raw.get("message") or "")
        raise ValidationError(f"Zoho Creator validation failed: {messages}", payload=raw)
    if code == CODE_INVALID_FIELD_VALUES:
        messages = summarize_errors(raw.get("error")) or str(raw.get("message") or "")
        raise FieldValueError(f"Zoho Creator invalid field values: {messages}", payload=raw)

    data = raw.get("data")
    if isinstance(data, dict) and data.get("ID") not in (None, ""):
        return str(data["ID"])
    raise ProtocolError(f"Invalid response from Zoho Creator (HTTP {status_code}): unexpected response", payload=raw)
