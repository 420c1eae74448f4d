"""Backend validation for grant form submissions.

The frontend submits concept papers, proposals and applications as flat
dictionaries. These validators make sure required fields are present and
well-formed before the intake workflow ever sees the payload.

On validation failure, raise `FormValidationError` so the API can return HTTP 400
with structured `field_errors`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple


@dataclass
class FormValidationError(Exception):
    """Exception raised for form validation failures.

    Attributes:
        field_errors: mapping of field name -> human-readable error message.
        message: optional top-level message.
    """

    field_errors: Dict[str, str]
    message: str = "Validation failed"

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    def as_list(self) -> List[Dict[str, str]]:
        return [{"path": field, "msg": msg} for field, msg in self.field_errors.items()]


def _as_str(v: Any) -> str:
    return "" if v is None else str(v)


def _strip(v: Any) -> str:
    return _as_str(v).strip()


def add_error(errors: Dict[str, str], field: str, message: str) -> None:
    if field not in errors:
        errors[field] = message


def require_str(payload: Mapping[str, Any], field: str, errors: Dict[str, str], *, label: Optional[str] = None) -> str:
    value = _strip(payload.get(field))
    if not value:
        add_error(errors, field, f"{label or field} is required")
    return value


def require_number(payload: Mapping[str, Any], field: str, errors: Dict[str, str], *, label: Optional[str] = None) -> str:
    raw = _strip(payload.get(field))
    if not raw:
        add_error(errors, field, f"{label or field} is required and must be a number")
        return raw
    try:
        float(raw)
    except ValueError:
        add_error(errors, field, f"{label or field} is required and must be a number")
    return raw


_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_email(value: Any, errors: Dict[str, str], field: str = "email", *, label: str = "Email") -> str:
    value = _strip(value)
    if not value or not _EMAIL_RE.match(value):
        add_error(errors, field, f"Valid {label} is required")
    return value


def raise_if_errors(errors: Dict[str, str], message: str = "Please correct the highlighted fields") -> None:
    if errors:
        raise FormValidationError(field_errors=errors, message=message)


# (field, label) pairs
_CONCEPT_REQUIRED: Sequence[Tuple[str, str]] = (
    ("projectTitle", "Project Title"),
    ("contactName", "Contact Name"),
    ("organizationName", "Organization Name"),
    ("organizationAddress", "Organization Address"),
    ("district", "District"),
    ("organizationType", "Organization Type"),
    ("dateOfIncorporation", "Date of Incorporation"),
    ("contactPosition", "Contact Position"),
    ("contactTelephone", "Contact Telephone"),
    ("proposedStartDate", "Proposed Start Date"),
    ("thematicArea", "Thematic Area"),
    ("awardCategory", "Award Category"),
    ("projectSummary", "Project Summary"),
    ("projectGoalObjectives", "Project Goal and Objectives"),
    ("projectOutputsActivities", "Project Outputs and Activities"),
    ("legalRepresentativeName", "Legal Representative Name"),
    ("declarationDate", "Declaration Date"),
)
_CONCEPT_NUMERIC: Sequence[Tuple[str, str]] = (
    ("durationMonths", "Duration (Months)"),
    ("totalBudgetRequested", "Total Budget Requested"),
)

_PROPOSAL_REQUIRED: Sequence[Tuple[str, str]] = (
    ("projectTitle", "Project Title"),
    ("contactName", "Contact Name"),
    ("organizationName", "Organization Name"),
    ("organizationAddress", "Organization Address"),
    ("dateOfIncorporation", "Date of Incorporation"),
    ("organizationType", "Organization Type"),
    ("proposedStartDate", "Proposed Start Date"),
    ("expectedEndDate", "Expected End Date"),
    ("primaryLocation", "Primary Location"),
    ("primaryThematicArea", "Primary Thematic Area"),
    ("projectGoalObjectives", "Project Goal and Objectives"),
    ("projectSummary", "Project Summary"),
    ("projectOutputsActivities", "Project Outputs and Activities"),
    ("legalRepresentativeName", "Legal Representative Name"),
    ("declarationDate", "Declaration Date"),
    ("organizationalBackground", "Organizational Background and Capacity"),
    ("projectManagerName", "Project Manager Name"),
    ("projectManagerQualifications", "Project Manager Qualifications"),
)
_PROPOSAL_NUMERIC: Sequence[Tuple[str, str]] = (
    ("projectDurationMonths", "Project Duration (Months)"),
    ("amountRequested", "Amount Requested"),
    ("totalCoFinancing", "Total Co-Financing"),
)

_APPLICATION_REQUIRED: Sequence[Tuple[str, str]] = (
    ("firstName", "First name"),
    ("lastName", "Last name"),
    ("mobile", "Mobile number"),
    ("organizationName", "Organization name"),
)


def _validate(payload: Mapping[str, Any], required, numeric, email_field: str, email_label: str) -> Dict[str, Any]:
    errors: Dict[str, str] = {}
    for field, label in required:
        require_str(payload, field, errors, label=label)
    validate_email(payload.get(email_field), errors, email_field, label=email_label)
    for field, label in numeric:
        require_number(payload, field, errors, label=label)
    raise_if_errors(errors)
    return dict(payload)


def validate_concept_paper(payload: Mapping[str, Any]) -> Dict[str, Any]:
    return _validate(payload, _CONCEPT_REQUIRED, _CONCEPT_NUMERIC, "contactEmail", "Contact Email")


def validate_proposal(payload: Mapping[str, Any]) -> Dict[str, Any]:
    return _validate(payload, _PROPOSAL_REQUIRED, _PROPOSAL_NUMERIC, "contactEmail", "Contact Email")


def validate_application(payload: Mapping[str, Any]) -> Dict[str, Any]:
    return _validate(payload, _APPLICATION_REQUIRED, (), "email", "email")
