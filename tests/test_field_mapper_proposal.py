"""Tests for the GAP proposal -> Zoho record mapping."""

from src.integrations.contracts.interfaces import FormVariant
from src.integrations.zoho.field_mapper import map_proposal, map_submission


def test_duration_in_days_from_start_and_end():
    record = map_proposal({"proposedStartDate": "2024-01-01", "expectedEndDate": "2024-01-11"})
    assert record["Project_Duration1"] == "10 days"
    assert record["Proposed_Start_Date"] == "01-Jan-2024"
    assert record["Expected_End_Date"] == "11-Jan-2024"


def test_duration_omitted_when_a_date_is_missing_or_invalid():
    assert "Project_Duration1" not in map_proposal({"proposedStartDate": "2024-01-01"})
    assert "Project_Duration1" not in map_proposal({"proposedStartDate": "2024-01-01", "expectedEndDate": "soon"})


def test_aliased_targets_receive_the_same_value():
    record = map_proposal({"projectTitle": "Mangroves", "organizationName": "Delta Co-op"})
    assert record["Project_Title"] == record["Project_title1"] == "Mangroves"
    assert record["Organization"] == record["Recipient_Organization"] == "Delta Co-op"


def test_objectives_joined_with_newlines_skipping_empty():
    record = map_proposal({"objective1": "Plant", "objective2": "", "objective3": "Monitor"})
    assert record["Project_Objective_s"] == "Plant\nMonitor"


def test_no_objectives_means_no_key():
    assert "Project_Objective_s" not in map_proposal({"objective1": "", "objective2": None})


def test_risk_subform_rows_only_for_present_groups():
    record = map_proposal({
        "risk1Category": "Environmental",
        "risk1Description": "Erosion",
        "risk1Impact": "High",
        "risk1Mitigation": "Replanting",
        "risk3Impact": "Low",
    })
    rows = record["ENVIRONMENTAL_AND_SOCIAL_RISK_SCREENING_AND_MITIGATION"]
    assert rows == [
        {"Risk_Factors": "Category: Environmental, Description: Erosion, Impact: High, Mitigation: Replanting"},
        {"Risk_Factors": "Category: , Description: , Impact: Low, Mitigation: "},
    ]


def test_subforms_absent_when_no_group_present():
    record = map_proposal({"projectTitle": "X"})
    assert "ENVIRONMENTAL_AND_SOCIAL_RISK_SCREENING_AND_MITIGATION" not in record
    assert "Project_Monitoring_Evaluation_Plan" not in record
    assert "Project_Budget_Summary" not in record


def test_monitoring_plan_items_and_indicators():
    record = map_proposal({
        "meProjectGoal": "Healthy reef",
        "lessonLearning": "Workshops",
        "indicator2Description": "Coral cover",
        "indicator2Baseline": "10%",
        "indicator2Target": "20%",
    })
    rows = [r["Outcome_Outputs"] for r in record["Project_Monitoring_Evaluation_Plan"]]
    assert rows[0] == "Project Goal: Healthy reef"
    assert rows[1] == "Lesson Learning: Workshops"
    assert rows[2] == (
        "Indicator 2: Coral cover. Baseline: 10%. Frequency: . Outcome: . "
        "Responsible: . Target: 20%. Verification: ."
    )


def test_budget_text_lists_present_line_items():
    record = map_proposal({
        "totalBudgetRequested": "5000",
        "totalCoFinancing": "1000",
        "totalProjectCost": "6000",
        "travelCosts": "1200",
        "auditCosts": "300",
    })
    assert record["BUDGET"] == (
        "Total Budget Requested: BZ$5000. Total Co-financing: BZ$1000. Total Project Cost: BZ$6000.\n"
        "Travel Costs: BZ$1200. Audit Costs: BZ$300."
    )


def test_co_financing_sources_subform():
    record = map_proposal({"coFinancingSources": "Ministry of Blue Economy"})
    assert record["Project_Budget_Summary"] == [{"Contributing_Organizations": "Ministry of Blue Economy"}]


def test_replication_potential_overrides_sustainability_plan():
    both = map_proposal({"sustainabilityPlan": "Plan A", "replicationPotential": "Plan B"})
    assert both["SUSTAINABILITY_REPLICATION1"] == "Plan B"
    only_plan = map_proposal({"sustainabilityPlan": "Plan A", "replicationPotential": ""})
    assert only_plan["SUSTAINABILITY_REPLICATION1"] == "Plan A"


def test_document_status_fields():
    record = map_proposal({"generalDoc0Status": "Submitted", "generalDoc7Notes": "Pending", "esrstRiskLevel": "Low"})
    assert record["General_Document_0_Status"] == "Submitted"
    assert record["General_Document_7_Notes"] == "Pending"
    assert record["ESRST_Risk_Level"] == "Low"


def test_community_proposal_uses_proposal_mapping():
    payload = {"projectTitle": "Village Wells", "objective1": "Dig"}
    assert map_submission(payload, FormVariant.COMMUNITY_PROPOSAL) == map_proposal(payload)


def test_no_empty_values_anywhere():
    record = map_proposal({
        "projectTitle": "", "latitude": None, "objective1": "", "risk2Category": "",
        "proposedStartDate": "", "expectedEndDate": "",
    })
    assert all(v not in (None, "", []) for v in record.values())
