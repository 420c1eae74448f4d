"""Controller for persisting grant applications.

Provides CRUD operations plus the progress / submit helpers used by the
multi-step application form. Requests arrive as flat camelCase dictionaries;
known keys land in their own columns and everything else is merged into
`form_data`.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

from src.grants.eligibility import calculate_auto_score
from src.integrations.contracts.interfaces import ApplicationStatus

logger = logging.getLogger(__name__)

# request key -> column
_COLUMN_KEYS = {
    "applicationStatus": "application_status",
    "eligibilityStatus": "eligibility_status",
    "organizationName": "organization_name",
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "currentStep": "current_step",
    "completedSteps": "completed_steps",
    "variant": "variant",
    "zohoRecordId": "zoho_record_id",
}

# keys that are never accepted from a request body
_READ_ONLY_KEYS = {"id", "_id", "applicationId", "createdAt", "updatedAt", "submittedAt", "autoScore",
                   "organizationAgeScore", "organizationTypeScore", "operationalStatusScore"}


def split_payload(payload: Dict[str, Any], form_data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Turn a flat request body into column updates, merging leftovers into form_data."""
    updates: Dict[str, Any] = {}
    merged = dict(form_data or {})
    for key, value in (payload or {}).items():
        if key in _READ_ONLY_KEYS:
            continue
        column = _COLUMN_KEYS.get(key)
        if column:
            updates[column] = value
        if key not in ("currentStep", "completedSteps", "applicationStatus", "eligibilityStatus", "variant", "zohoRecordId"):
            merged[key] = value
    updates["form_data"] = merged
    return updates


class ApplicationController:
    def __init__(self, db):
        self.db = db

    def create_application(self, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        app = self.db.create_application(split_payload(payload or {}))
        logger.info("Created application %s", app.application_id)
        return self._to_dict(app)

    def get_application(self, app_id: str) -> Optional[Dict[str, Any]]:
        app = self.db.get_application(app_id)
        return self._to_dict(app) if app else None

    def list_applications(
        self,
        status: Optional[str] = None,
        order_by: str = "created_at",
        descending: bool = True,
    ) -> List[Dict[str, Any]]:
        apps = self.db.list_applications(status=status, order_by=order_by, descending=descending)
        return [self._to_summary(a) for a in apps]

    def delete_application(self, app_id: str) -> bool:
        return self.db.delete_application(app_id)

    def update_application(self, app_id: str, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        app = self.db.get_application(app_id)
        if not app:
            return None
        updates = split_payload(payload, app.form_data)
        updates.update(self._score_columns(updates["form_data"]))
        app = self.db.update_application(app.id, updates)
        return self._to_dict(app) if app else None

    def save_progress(
        self,
        app_id: str,
        current_step: Optional[int] = None,
        step_data: Optional[Dict[str, Any]] = None,
        completed_steps: Optional[List[int]] = None,
    ) -> Optional[Dict[str, Any]]:
        payload = dict(step_data or {})
        if current_step is not None:
            payload["currentStep"] = current_step
        if completed_steps is not None:
            payload["completedSteps"] = list(completed_steps)
        return self.update_application(app_id, payload)

    def submit_application(self, app_id: str, payload: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        payload = dict(payload or {})
        payload["applicationStatus"] = ApplicationStatus.SUBMITTED.value
        app = self.update_application(app_id, payload)
        if not app:
            return None
        app = self.db.update_application(app_id, {"submitted_at": datetime.utcnow()})
        logger.info("Application %s submitted", app.application_id)
        return self._to_dict(app)

    def record_forwarding(self, app_id: str, zoho_record_id: Optional[str]) -> Optional[Dict[str, Any]]:
        if not zoho_record_id:
            return self.get_application(app_id)
        app = self.db.update_application(app_id, {"zoho_record_id": zoho_record_id})
        return self._to_dict(app) if app else None

    @staticmethod
    def _score_columns(form_data: Dict[str, Any]) -> Dict[str, int]:
        score = calculate_auto_score(form_data)
        return {
            "auto_score": score.total,
            "organization_age_score": score.organization_age_score,
            "organization_type_score": score.organization_type_score,
            "operational_status_score": score.operational_status_score,
        }

    @staticmethod
    def _iso(value: Optional[datetime]) -> Optional[str]:
        return value.isoformat() if value else None

    def _to_summary(self, app) -> Dict[str, Any]:
        return {
            "id": app.id,
            "applicationId": app.application_id,
            "organizationName": app.organization_name,
            "firstName": app.first_name,
            "lastName": app.last_name,
            "applicationStatus": app.application_status,
            "createdAt": self._iso(app.created_at),
            "updatedAt": self._iso(app.updated_at),
        }

    def _to_dict(self, app):
        if not app:
            return None
        return {
            **self._to_summary(app),
            "variant": app.variant,
            "email": app.email,
            "eligibilityStatus": app.eligibility_status,
            "currentStep": app.current_step,
            "completedSteps": list(app.completed_steps or []),
            "formData": dict(app.form_data or {}),
            "autoScore": app.auto_score,
            "organizationAgeScore": app.organization_age_score,
            "organizationTypeScore": app.organization_type_score,
            "operationalStatusScore": app.operational_status_score,
            "zohoRecordId": app.zoho_record_id,
            "submittedAt": self._iso(app.submitted_at),
        }
