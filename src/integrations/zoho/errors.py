"""Error taxonomy for the Zoho Creator integration."""
from __future__ import annotations

from typing import Any, Optional


class ZohoIntegrationError(Exception):
    def __init__(self, message: str, *, payload: Optional[Any] = None) -> None:
        super().__init__(message)
        self.payload = payload


class AuthError(ZohoIntegrationError):
    """The refresh-grant exchange failed; fatal to the forwarding attempt."""


class ValidationError(ZohoIntegrationError):
    """Zoho rejected the record (code 3002)."""


class FieldValueError(ZohoIntegrationError):
    """Zoho reported invalid column values (code 3001)."""


class ProtocolError(ZohoIntegrationError):
    """Response shape we do not understand."""


class UploadError(ZohoIntegrationError):
    """A single file upload failed."""


class ConfigurationError(ZohoIntegrationError):
    """No form or report link name configured for the requested target."""
