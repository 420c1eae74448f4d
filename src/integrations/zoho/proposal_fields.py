"""Zoho field table for the GAP proposal (and community proposal) forms."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from src.integrations.contracts.interfaces import FormPayload
from src.integrations.zoho.field_rules import (
    FieldRule,
    computed,
    copy,
    date,
    duration_days,
    group_row,
    joined,
    subform,
    text_block,
)

# (form key, label used in the BUDGET text block)
PROPOSAL_BUDGET_CATEGORIES = (
    ("fieldStaffSalary", "Field Staff Salary"),
    ("projectManagerSalary", "Project Manager Salary"),
    ("otherPersonnelCosts", "Other Personnel Costs"),
    ("travelCosts", "Travel Costs"),
    ("equipmentPurchase", "Equipment Purchase"),
    ("equipmentRental", "Equipment Rental"),
    ("materialsCosts", "Materials Costs"),
    ("consultantFees", "Consultant Fees"),
    ("trainingCosts", "Training Costs"),
    ("communicationCosts", "Communication Costs"),
    ("utilitiesCosts", "Utilities Costs"),
    ("maintenanceCosts", "Maintenance Costs"),
    ("vehiclesCosts", "Vehicles Costs"),
    ("insuranceCosts", "Insurance Costs"),
    ("auditCosts", "Audit Costs"),
    ("administrativeCosts", "Administrative Costs"),
    ("evaluationBudget", "Evaluation Budget"),
)

RISK_GROUP_COUNT = 3
INDICATOR_GROUP_COUNT = 3

# (label, form key) pairs for the narrative M&E rows, in submission order
ME_PLAN_ITEMS = (
    ("Project Goal", "meProjectGoal"),
    ("Project Objectives", "meProjectObjectives"),
    ("M&E Plan", "monitoringEvaluationPlan"),
    ("Monitoring Integration", "monitoringIntegration"),
    ("Mid-Term Evaluation", "midTermEvaluationPlan"),
    ("End Project Evaluation", "endProjectEvaluationPlan"),
    ("Lesson Learning", "lessonLearning"),
)

INDICATOR_PARTS = (
    ("Baseline", "Baseline"),
    ("Frequency", "Frequency"),
    ("Outcome", "Outcome"),
    ("Responsible", "Responsible"),
    ("Target", "Target"),
    ("Verification", "Verification"),
)


def _project_duration(p: FormPayload) -> Optional[str]:
    days = duration_days(p.value("proposedStartDate"), p.value("expectedEndDate"))
    return None if days is None else f"{days} days"


def _raw_amount(p: FormPayload, key: str) -> Any:
    value = p.value(key)
    return 0 if value is None else value


def _budget_text(p: FormPayload) -> str:
    text = f"Total Budget Requested: BZ${_raw_amount(p, 'totalBudgetRequested')}. "
    text += f"Total Co-financing: BZ${_raw_amount(p, 'totalCoFinancing')}. "
    text += f"Total Project Cost: BZ${_raw_amount(p, 'totalProjectCost')}.\n"
    for key, label in PROPOSAL_BUDGET_CATEGORIES:
        if p.present(key):
            text += f"{label}: BZ${p.text(key)}. "
    return text.strip()


def _risk_row(n: int):
    keys = [f"risk{n}Category", f"risk{n}Description", f"risk{n}Impact", f"risk{n}Mitigation"]
    parts = list(zip(("Category", "Description", "Impact", "Mitigation"), keys))
    return group_row("Risk_Factors", keys, lambda p: text_block(p, parts))


def _me_item_row(label: str, key: str):
    return group_row("Outcome_Outputs", [key], lambda p: f"{label}: {p.text(key)}")


def _indicator_row(n: int):
    prefix = f"indicator{n}"
    description = f"{prefix}Description"
    keys = [description] + [f"{prefix}{suffix}" for _, suffix in INDICATOR_PARTS]

    def render(p: FormPayload) -> str:
        parts = [(label, f"{prefix}{suffix}") for label, suffix in INDICATOR_PARTS]
        return f"Indicator {n}: {p.text(description)}. " + text_block(p, parts, sep=". ", end=".")

    return group_row("Outcome_Outputs", keys, render)


def _co_financing_sources(p: FormPayload) -> Optional[Dict[str, Any]]:
    if not p.present("coFinancingSources"):
        return None
    return {"Contributing_Organizations": p.value("coFinancingSources")}


# General document status/notes slots 0..7
_DOCUMENT_RULES = [
    rule
    for n in range(8)
    for rule in (
        copy(f"generalDoc{n}Status", f"General_Document_{n}_Status"),
        copy(f"generalDoc{n}Notes", f"General_Document_{n}_Notes"),
    )
]


PROPOSAL_RULES: List[FieldRule] = [
    copy("projectTitle", "Project_Title", "Project_title1"),

    date("proposedStartDate", "Proposed_Start_Date"),
    date("registrationDate", "Registration_Date"),
    date("dateOfIncorporation", "Date_of_incorporation_of_Organization"),
    date("expectedEndDate", "Expected_End_Date"),
    date("declarationDate", "Declaration_Date"),

    # Organization
    copy("organizationName", "Organization", "Recipient_Organization"),
    copy("organizationAddress", "Organization_Address"),
    copy("organizationVision", "Organization_Vision"),
    copy("organizationMission", "Organization_Mission"),
    copy("organizationalBackground", "Organizational_Background_and_Capacity"),
    copy("previousRelevantProjects", "Relevant_Previous_Projects"),
    copy("partnerOrganizations", "Partner_Organizations_if_applicable"),

    # Contacts
    copy("contactName", "Contact_Name"),
    copy("contactPosition", "Position"),
    copy("contactEmail", "Email"),
    copy("contactTelephone", "Telephone"),
    copy("projectManagerName", "Project_Manager_Name"),
    copy("projectManagerQualifications", "Project_Manager_Qualifications"),
    copy("legalRepresentativeName", "Legal_Representative_Name"),
    copy("legalRepresentativeTitle", "Legal_Representative_Title"),

    # Project details
    copy("projectSummary", "Project_Summary"),
    copy("projectEnvironment", "Project_Environment"),
    copy("primaryLocation", "Project_Location"),
    copy("latitude", "Latitude"),
    copy("longitude", "Longitude"),
    copy("logicalFrameworkGoal", "Goal"),
    copy("stakeholderEngagementPlan", "Stakeholder_Engagement_Plan_SEP"),
    # both inputs feed one Zoho field; replicationPotential wins when present
    copy("sustainabilityPlan", "SUSTAINABILITY_REPLICATION1"),
    copy("replicationPotential", "SUSTAINABILITY_REPLICATION1"),

    computed("Project_Duration1", _project_duration),
    copy("projectDurationMonths", "Duration_Months"),

    joined(("objective1", "objective2", "objective3"), "Project_Objective_s"),
    copy("projectGoalObjectives", "Project_Goal"),

    # Subforms
    subform(
        "ENVIRONMENTAL_AND_SOCIAL_RISK_SCREENING_AND_MITIGATION",
        [_risk_row(n) for n in range(1, RISK_GROUP_COUNT + 1)],
    ),
    subform("Project_Budget_Summary", [_co_financing_sources]),
    computed("BUDGET", _budget_text),
    subform(
        "Project_Monitoring_Evaluation_Plan",
        [_me_item_row(label, key) for label, key in ME_PLAN_ITEMS]
        + [_indicator_row(n) for n in range(1, INDICATOR_GROUP_COUNT + 1)],
    ),

    # Logical framework
    copy("outcome1", "Outcome1"),
    copy("outcome2", "Outcome2"),
    copy("outcome3", "Outcome3"),
    copy("output1_1", "Output1_1"),
    copy("output1_2", "Output1_2"),
    copy("output2_1", "Output2_1"),
    copy("output2_2", "Output2_2"),
    copy("output3_1", "Output3_1"),
    copy("output3_2", "Output3_2"),
    copy("assumptions1", "Assumptions1"),
    copy("assumptions2", "Assumptions2"),
    copy("assumptions3", "Assumptions3"),
    copy("responsibleParty", "Responsible_Party"),
    copy("verification1", "Verification1"),
    copy("verification2", "Verification2"),
    copy("verification3", "Verification3"),

    # Other narrative fields
    copy("additionalRisks", "Additional_Risks"),
    copy("alignmentJustification", "Alignment_Justification"),
    copy("capacityBuilding", "Capacity_Building"),
    copy("disseminationPlans", "Dissemination_Plans"),
    copy("environmentalSustainability", "Environmental_Sustainability"),
    copy("equipmentJustification", "Equipment_Justification"),
    copy("implementationDuration", "Implementation_Duration"),
    copy("implementationTimeline", "Implementation_Timeline"),
    copy("knowledgeTransfer", "Knowledge_Transfer"),
    copy("communityStewardship", "Community_Stewardship"),
    copy("ecosystemServices", "Ecosystem_Services"),
    copy("revenueGeneration", "Revenue_Generation"),
    copy("postProjectFunding", "Post_Project_Funding"),
    copy("scalingStrategy", "Scaling_Strategy"),
    copy("personnelJustification", "Personnel_Justification"),
    copy("operationalJustification", "Operational_Justification"),
    copy("environmentalSocialRiskSummary", "Environmental_Social_Risk_Summary"),

    # Document status/notes (the files themselves go through the upload channel)
    *_DOCUMENT_RULES,
    copy("environmentalClearanceRequired", "Environmental_Clearance_Required"),
    copy("environmentalClearanceNotes", "Environmental_Clearance_Notes"),
    copy("esrstStatus", "ESRST_Status"),
    copy("esrstRiskLevel", "ESRST_Risk_Level"),
    copy("esrmpStatus", "ESRMP_Status"),
    copy("gapStatus", "GAP_Status"),
    copy("excelBudgetStatus", "Excel_Budget_Status"),
]
