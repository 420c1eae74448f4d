"""Tests for the concept paper -> Zoho record mapping."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from src.integrations.contracts.interfaces import FormVariant, UploadedFile
from src.integrations.zoho.field_mapper import map_concept, map_submission
from src.integrations.zoho.field_rules import format_date


def _concept(**overrides):
    payload = {
        "projectTitle": "Reef Restoration",
        "organizationName": "Coastal Friends",
        "organizationAddress": "1 Front St, Belize City",
        "organizationType": "NGO",
        "dateOfIncorporation": "2015-03-09",
        "contactName": "Ana Cho",
        "contactPosition": "Director",
        "contactEmail": "ana@example.org",
        "contactTelephone": "501-555-0101",
        "proposedStartDate": "2025-01-15",
        "durationMonths": "12",
        "awardCategory": "Small Grant",
        "thematicArea": "Marine",
        "projectSummary": "Summary",
        "legalRepresentativeName": "Ana Cho",
        "declarationDate": "2024-11-30T10:00:00Z",
    }
    payload.update(overrides)
    return payload


def test_basic_fields_are_copied_and_dates_formatted():
    record = map_concept(_concept())
    assert record["Project_Title"] == "Reef Restoration"
    assert record["Organization_Name"] == "Coastal Friends"
    assert record["Type_of_Organization"] == "NGO"
    assert record["Email"] == "ana@example.org"
    assert record["Position"] == "Director"
    assert record["Award_Category1"] == "Small Grant"
    assert record["Project_Theme"] == "Marine"
    assert record["Date_of_Incorporation_of_Organization"] == "09-Mar-2015"
    assert record["Proposed_Start_Date"] == "15-Jan-2025"
    assert record["Declaration_Date"] == "30-Nov-2024"


def test_empty_and_null_sources_emit_no_keys():
    record = map_concept(_concept(projectSummary="", contactTelephone=None, thematicArea=[]))
    assert "Project_Summary" not in record
    assert "Telephone" not in record
    assert "Project_Theme" not in record
    assert None not in record.values()
    assert "" not in record.values()


def test_empty_payload_maps_to_empty_record():
    assert map_concept({}) == {}
    assert map_submission(None, FormVariant.CONCEPT) == {}


def test_binary_values_are_never_inlined():
    record = map_concept(_concept(
        projectTitle=b"%PDF-1.4",
        projectSummary=UploadedFile(field_name="Doc", file_name="a.pdf", content=b"x"),
    ))
    assert "Project_Title" not in record
    assert "Project_Summary" not in record


def test_invalid_dates_are_omitted_without_raising():
    record = map_concept(_concept(proposedStartDate="not a date", declarationDate="2024-13-45"))
    assert "Proposed_Start_Date" not in record
    assert "Declaration_Date" not in record


def test_date_objects_are_formatted():
    record = map_concept(_concept(proposedStartDate=date(2025, 2, 3), declarationDate=datetime(2024, 12, 1, 8, 30)))
    assert record["Proposed_Start_Date"] == "03-Feb-2025"
    assert record["Declaration_Date"] == "01-Dec-2024"


@pytest.mark.parametrize("value", ["2024-07-04", "04-Jul-2024", "07/04/2024", "2024-07-04T23:00:00Z"])
def test_date_formatting_is_idempotent(value):
    once = format_date(value)
    assert once == "04-Jul-2024"
    assert format_date(once) == once


def test_two_budget_categories_produce_two_rows_summing_to_100():
    record = map_concept(_concept(salaryBudget="1000", trainingBudget="2000", totalCoFinancing="500"))
    rows = record["Project_Budget_Summary"]
    assert [r["Categories"] for r in rows] == ["Salary", "Training"]
    assert [r["Total_Contribution_BZD"] for r in rows] == ["1000.00", "2000.00"]
    assert sum(Decimal(r["Percentage"]) for r in rows) == Decimal("100.00")


def test_budget_totals_and_co_financing_fields():
    record = map_concept(_concept(salaryBudget=3000, travelBudget="1000abc", totalCoFinancing="1000"))
    assert record["Total2"] == "4000.00"
    assert record["Total_Co_Financing"] == "1000.00"
    assert record["Total_Project_Estimated_Cost"] == "5000.00"
    assert record["Total_Project_Estimated_Cost_Percentage"] == "100.00"
    assert record["Total_Co_Financing_Percentage"] == "20.00"
    assert record["Co_Financing_Details"] == "Total Co-financing: $1000.00"


def test_zero_budget_omits_aggregates():
    record = map_concept(_concept(salaryBudget="0", totalCoFinancing=""))
    for key in ("Project_Budget_Summary", "Total2", "Total_Co_Financing", "Total_Project_Estimated_Cost",
                "Total_Project_Estimated_Cost_Percentage", "Total_Co_Financing_Percentage", "Co_Financing_Details"):
        assert key not in record


def test_mapping_is_deterministic():
    payload = _concept(salaryBudget="10", educationBudget="30")
    assert map_concept(payload) == map_concept(dict(payload))
