"""Validation tests for concept paper, proposal and application payloads."""

import pytest

from src.grants.validation import (
    FormValidationError,
    validate_application,
    validate_concept_paper,
    validate_proposal,
)


def _concept():
    return {
        "projectTitle": "Reef Restoration",
        "contactName": "Ana Cho",
        "contactEmail": "ana@example.org",
        "organizationName": "Coastal Friends",
        "organizationAddress": "1 Front St",
        "district": "Belize",
        "organizationType": "NGO",
        "dateOfIncorporation": "2015-03-09",
        "contactPosition": "Director",
        "contactTelephone": "501-555-0101",
        "proposedStartDate": "2025-01-15",
        "durationMonths": "12",
        "thematicArea": "Marine",
        "awardCategory": "Small Grant",
        "projectSummary": "Summary",
        "projectGoalObjectives": "Goals",
        "projectOutputsActivities": "Outputs",
        "totalBudgetRequested": "15000",
        "legalRepresentativeName": "Ana Cho",
        "declarationDate": "2024-11-30",
    }


def test_valid_concept_paper_passes():
    out = validate_concept_paper(_concept())
    assert out["projectTitle"] == "Reef Restoration"


def test_concept_paper_missing_fields_are_reported():
    payload = _concept()
    payload["district"] = "  "
    del payload["projectSummary"]
    with pytest.raises(FormValidationError) as exc_info:
        validate_concept_paper(payload)
    errors = exc_info.value.field_errors
    assert errors["district"] == "District is required"
    assert errors["projectSummary"] == "Project Summary is required"


def test_concept_paper_numeric_fields_must_be_numbers():
    payload = _concept()
    payload["durationMonths"] = "twelve"
    with pytest.raises(FormValidationError) as exc_info:
        validate_concept_paper(payload)
    assert exc_info.value.field_errors == {"durationMonths": "Duration (Months) is required and must be a number"}


def test_invalid_contact_email():
    payload = _concept()
    payload["contactEmail"] = "not-an-email"
    with pytest.raises(FormValidationError) as exc_info:
        validate_concept_paper(payload)
    assert exc_info.value.as_list() == [{"path": "contactEmail", "msg": "Valid Contact Email is required"}]


def test_proposal_requires_financials():
    with pytest.raises(FormValidationError) as exc_info:
        validate_proposal({"contactEmail": "a@b.org"})
    errors = exc_info.value.field_errors
    assert "amountRequested" in errors
    assert "totalCoFinancing" in errors
    assert "projectManagerQualifications" in errors
    assert "contactEmail" not in errors


def test_application_validation():
    ok = {"firstName": "Ana", "lastName": "Cho", "email": "ana@example.org", "mobile": "555", "organizationName": "CF"}
    assert validate_application(ok) == ok
    with pytest.raises(FormValidationError) as exc_info:
        validate_application({**ok, "email": ""})
    assert exc_info.value.field_errors == {"email": "Valid email is required"}
