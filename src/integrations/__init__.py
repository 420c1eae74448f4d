"""
Integrations layer.
This package contains all code used to communicate with external systems:
- Zoho Creator (record creation, file uploads, report reads)

Key rule:
- API routes and the intake workflow MUST NOT call Zoho directly.
- They go through the clients under src/integrations/zoho, which return the
  contracts defined in src/integrations/contracts.

Wiring of the real clients happens in ONE place (src/api/dependencies.py); tests
inject an httpx.MockTransport instead.
"""

from .contracts.interfaces import (
    Credential,
    EligibilityOutcome,
    FormPayload,
    FormVariant,
    SubmissionResult,
)

__all__ = [
    "Credential", "EligibilityOutcome", "FormPayload", "FormVariant", "SubmissionResult",
]
