"""Zoho field table for the GAP concept paper form."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from src.integrations.contracts.interfaces import FormPayload
from src.integrations.zoho.field_rules import FieldRule, computed, copy, date, format_amount

# (form key, Zoho category label)
CONCEPT_BUDGET_CATEGORIES = (
    ("salaryBudget", "Salary"),
    ("travelBudget", "Travel/accommodation"),
    ("equipmentBudget", "Equipment/supplies"),
    ("contractedServicesBudget", "Contracted Services"),
    ("operationalBudget", "Operational Costs"),
    ("educationBudget", "Education/outreach"),
    ("trainingBudget", "Training"),
    ("administrativeBudget", "Administrative"),
)


def total_budget_requested(p: FormPayload) -> float:
    return sum(p.number(key) for key, _ in CONCEPT_BUDGET_CATEGORIES)


def total_co_financing(p: FormPayload) -> float:
    return p.number("totalCoFinancing")


def total_project_cost(p: FormPayload) -> float:
    return total_budget_requested(p) + total_co_financing(p)


def _positive_amount(fn):
    def extract(p: FormPayload) -> Optional[str]:
        amount = fn(p)
        return format_amount(amount) if amount > 0 else None

    return extract


def _cost_percentage(p: FormPayload) -> Optional[str]:
    return "100.00" if total_project_cost(p) > 0 else None


def _co_financing_percentage(p: FormPayload) -> Optional[str]:
    total = total_project_cost(p)
    if total <= 0:
        return None
    return format_amount(total_co_financing(p) / total * 100)


def _co_financing_details(p: FormPayload) -> Optional[str]:
    amount = total_co_financing(p)
    return f"Total Co-financing: ${format_amount(amount)}" if amount > 0 else None


def budget_summary(p: FormPayload) -> List[Dict[str, Any]]:
    total = total_budget_requested(p)
    rows = []
    for key, category in CONCEPT_BUDGET_CATEGORIES:
        amount = p.number(key)
        if amount <= 0:
            continue
        percentage = format_amount(amount / total * 100) if total > 0 else "0.00"
        rows.append({
            "Categories": category,
            "Total_Contribution_BZD": format_amount(amount),
            "Percentage": percentage,
        })
    return rows


CONCEPT_RULES: List[FieldRule] = [
    # Background information
    copy("projectTitle", "Project_Title"),
    copy("organizationName", "Organization_Name"),
    copy("organizationAddress", "Organization_Address"),
    copy("organizationType", "Type_of_Organization"),
    date("dateOfIncorporation", "Date_of_Incorporation_of_Organization"),

    # Main contact
    copy("contactName", "Contact_Name"),
    copy("contactPosition", "Position"),
    copy("contactEmail", "Email"),
    copy("contactTelephone", "Telephone"),

    # Duration
    date("proposedStartDate", "Proposed_Start_Date"),
    copy("durationMonths", "Duration_Months"),

    # Award category / theme are single-line text in Zoho
    copy("awardCategory", "Award_Category1"),
    copy("thematicArea", "Project_Theme"),

    # Narrative sections
    copy("projectSummary", "Project_Summary"),
    copy("projectGoalObjectives", "Project_Goal_and_Objectives"),
    copy("projectOutputsActivities", "Project_Outputs_and_Activities"),

    # Budget aggregates
    computed("Total_Co_Financing", _positive_amount(total_co_financing)),
    computed("Total_Project_Estimated_Cost", _positive_amount(total_project_cost)),
    computed("Total_Project_Estimated_Cost_Percentage", _cost_percentage),
    computed("Total2", _positive_amount(total_budget_requested)),
    computed("Total_Co_Financing_Percentage", _co_financing_percentage),
    computed("Project_Budget_Summary", budget_summary),
    computed("Co_Financing_Details", _co_financing_details),

    # Declaration
    copy("legalRepresentativeName", "Legal_Representative_Name"),
    date("declarationDate", "Declaration_Date"),
]
