"""
Lightweight in-memory PostgresDB replacement for local development.

This provides the same application CRUD interface as
`src.database.postgres_real` so the API can run without a real database.
It is NOT intended for production use.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Dict, List, Optional
import uuid

from src.database.models import generate_application_id


@dataclass
class GrantApplication:
    id: str
    application_id: str = field(default_factory=generate_application_id)
    variant: Optional[str] = None
    application_status: str = "draft"
    eligibility_status: Optional[str] = None
    organization_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    current_step: int = 1
    completed_steps: List[int] = field(default_factory=list)
    form_data: Dict[str, Any] = field(default_factory=dict)
    auto_score: int = 0
    organization_age_score: int = 0
    organization_type_score: int = 0
    operational_status_score: int = 0
    zoho_record_id: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    submitted_at: Optional[datetime] = None


_COLUMNS = {f.name for f in fields(GrantApplication)} - {"id", "created_at"}


class PostgresDB:
    """
    In-memory stand-in for a Postgres-backed data access layer.
    """

    def __init__(self) -> None:
        self._applications: Dict[str, GrantApplication] = {}

    def create_tables(self) -> None:
        """
        No-op for the in-memory implementation. Kept for compatibility
        with the startup hook in `src/api/main.py`.
        """
        return None

    # ------------------------------------------------------------------ #
    # Grant applications
    # ------------------------------------------------------------------ #
    def create_application(self, initial_data: Optional[Dict[str, Any]] = None) -> GrantApplication:
        data = {k: v for k, v in (initial_data or {}).items() if k in _COLUMNS and v is not None}
        app = GrantApplication(id=str(uuid.uuid4()), **data)
        self._applications[app.id] = app
        return app

    def get_application(self, app_id: str) -> Optional[GrantApplication]:
        app = self._applications.get(str(app_id))
        if app is not None:
            return app
        # fall back to the human-facing reference
        for candidate in self._applications.values():
            if candidate.application_id == str(app_id):
                return candidate
        return None

    def update_application(self, app_id: str, updates: Dict[str, Any]) -> Optional[GrantApplication]:
        app = self.get_application(app_id)
        if not app:
            return None
        for k, v in (updates or {}).items():
            if k in _COLUMNS:
                setattr(app, k, v)
        app.updated_at = datetime.utcnow()
        return app

    def delete_application(self, app_id: str) -> bool:
        app = self.get_application(app_id)
        if not app:
            return False
        del self._applications[app.id]
        return True

    def list_applications(
        self,
        status: Optional[str] = None,
        order_by: str = "created_at",
        descending: bool = True,
    ) -> List[GrantApplication]:
        apps = list(self._applications.values())
        if status:
            apps = [a for a in apps if a.application_status == status]
        if order_by not in ("id", "application_id", "application_status", "created_at", "updated_at"):
            order_by = "created_at"
        apps.sort(key=lambda a: getattr(a, order_by), reverse=descending)
        return apps
