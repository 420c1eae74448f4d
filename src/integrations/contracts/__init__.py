"""
Contracts (data models).

This folder defines the shapes exchanged between the intake workflow and the
Zoho Creator integration:
- form payload access (missing keys are always tolerated)
- access credentials
- uniform submission/upload results
- eligibility outcomes

Both the real Zoho clients and the test doubles return these contracts.
"""

from .interfaces import (
    ApplicationStatus,
    AutoScore,
    Credential,
    EligibilityOutcome,
    FormPayload,
    FormVariant,
    SubmissionResult,
    UploadedFile,
    is_binary,
    is_present,
    parse_date,
    parse_datetime,
    parse_number,
)

__all__ = [
    "ApplicationStatus", "AutoScore", "Credential", "EligibilityOutcome",
    "FormPayload", "FormVariant", "SubmissionResult", "UploadedFile",
    "is_binary", "is_present", "parse_date", "parse_datetime", "parse_number",
]
