"""Eligibility gate and auto-scoring for grant applicants.

`evaluate` runs before anything is mapped or forwarded to Zoho: ineligible
submissions are only notified. `calculate_auto_score` is the triage heuristic
recomputed whenever a stored application changes.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, Mapping, Optional

from src.integrations.contracts.interfaces import AutoScore, EligibilityOutcome, parse_date, parse_number

DISALLOWED_ORGANIZATION_TYPES = frozenset({"Government Body", "Statutory Body"})

REASON_ORGANIZATION_TYPE = "Organization type (Government Body/Statutory Body) is not eligible."
REASON_TOO_YOUNG = "Organization must be incorporated for at least one year to be eligible."
REASON_ELIGIBLE = "Eligibility criteria met."

ORGANIZATION_TYPE_SCORES: Dict[str, int] = {
    "NGO": 25,
    "CBO": 20,
    "Cooperative": 15,
    "Private": 10,
    "Government": 5,
}

OPERATIONAL_STATUS_SCORES: Dict[str, int] = {
    "Fully Operational": 25,
    "Partially Operational": 15,
    "Starting Operations": 10,
    "Not Operational": 0,
}


def is_at_least_one_year_old(incorporated: date, today: date) -> bool:
    # calendar comparison: a Feb 29 incorporation turns one on Mar 1
    return (today.year, today.month, today.day) >= (incorporated.year + 1, incorporated.month, incorporated.day)


def evaluate(incorporation_date: Any, organization_type: Optional[str], today: Optional[date] = None) -> EligibilityOutcome:
    today = today or date.today()
    if (organization_type or "").strip() in DISALLOWED_ORGANIZATION_TYPES:
        return EligibilityOutcome(eligible=False, reason=REASON_ORGANIZATION_TYPE)

    incorporated = parse_date(incorporation_date)
    if incorporated is None or not is_at_least_one_year_old(incorporated, today):
        return EligibilityOutcome(eligible=False, reason=REASON_TOO_YOUNG)

    return EligibilityOutcome(eligible=True, reason=REASON_ELIGIBLE)


def evaluate_payload(payload: Mapping[str, Any], today: Optional[date] = None) -> EligibilityOutcome:
    return evaluate(payload.get("dateOfIncorporation"), payload.get("organizationType"), today=today)


def organization_age_score(age_years: float) -> int:
    if age_years >= 5:
        return 30
    if age_years >= 3:
        return 20
    if age_years >= 1:
        return 10
    return 0


def calculate_auto_score(form_data: Mapping[str, Any]) -> AutoScore:
    age = organization_age_score(parse_number(form_data.get("organizationAge")))
    org_type = ORGANIZATION_TYPE_SCORES.get(str(form_data.get("organizationType") or ""), 0)
    status = OPERATIONAL_STATUS_SCORES.get(str(form_data.get("operationalStatus") or ""), 0)
    return AutoScore(
        total=age + org_type + status,
        organization_age_score=age,
        organization_type_score=org_type,
        operational_status_score=status,
    )
