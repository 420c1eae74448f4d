"""
Real Postgres-backed DB for production when DATABASE_URL is set.
Implements the same interface as src.database.postgres (in-memory stub).
"""

from __future__ import annotations

import re
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import uuid4

from sqlalchemy import create_engine, or_, select
from sqlalchemy.orm import Session, sessionmaker

from src.database.models import Base, GrantApplication, generate_application_id

_COLUMNS = {c.key for c in GrantApplication.__table__.columns} - {"id", "created_at"}


def _normalize_connection_string(s: str) -> str:
    """Strip common mistakes: 'psql \'...\'', extra quotes, whitespace."""
    s = s.strip()
    if re.match(r"^psql\s+", s, re.IGNORECASE):
        s = re.sub(r"^psql\s+", "", s, flags=re.IGNORECASE).strip()
    if len(s) >= 2 and s[0] == s[-1] and s[0] in ("'", '"'):
        s = s[1:-1].strip()
    return s


class PostgresDB:
    """
    Postgres data access using SQLAlchemy. Use when DATABASE_URL is set.
    """

    def __init__(self, connection_string: str) -> None:
        connection_string = _normalize_connection_string(connection_string)
        if connection_string.startswith("sqlite"):
            self.engine = create_engine(connection_string)
        else:
            self.engine = create_engine(connection_string, pool_pre_ping=True, pool_size=5, max_overflow=10)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine, expire_on_commit=False)

    def create_tables(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def _session(self) -> Session:
        s = self.SessionLocal()
        try:
            yield s
            s.commit()
        except Exception:
            s.rollback()
            raise
        finally:
            s.close()

    @staticmethod
    def _lookup(app_id: str):
        return select(GrantApplication).where(
            or_(GrantApplication.id == str(app_id), GrantApplication.application_id == str(app_id))
        )

    # ------------------------------------------------------------------ #
    # Grant applications
    # ------------------------------------------------------------------ #
    def create_application(self, initial_data: Optional[Dict[str, Any]] = None) -> GrantApplication:
        data = {k: v for k, v in (initial_data or {}).items() if k in _COLUMNS and v is not None}
        with self._session() as s:
            app = GrantApplication(
                id=str(uuid4()),
                application_id=data.pop("application_id", None) or generate_application_id(),
                application_status=data.pop("application_status", "draft"),
                current_step=data.pop("current_step", 1),
                completed_steps=data.pop("completed_steps", []),
                form_data=data.pop("form_data", {}),
                created_at=datetime.utcnow(),
                updated_at=datetime.utcnow(),
                **data,
            )
            s.add(app)
            s.flush()
            s.refresh(app)
            return app

    def get_application(self, app_id: str) -> Optional[GrantApplication]:
        with self._session() as s:
            return s.execute(self._lookup(app_id)).scalar_one_or_none()

    def update_application(self, app_id: str, updates: Dict[str, Any]) -> Optional[GrantApplication]:
        with self._session() as s:
            app = s.execute(self._lookup(app_id)).scalar_one_or_none()
            if not app:
                return None
            for k, v in (updates or {}).items():
                if k in _COLUMNS:
                    setattr(app, k, v)
            app.updated_at = datetime.utcnow()
            s.add(app)
            s.flush()
            s.refresh(app)
            return app

    def delete_application(self, app_id: str) -> bool:
        with self._session() as s:
            app = s.execute(self._lookup(app_id)).scalar_one_or_none()
            if not app:
                return False
            s.delete(app)
            return True

    def list_applications(
        self,
        status: Optional[str] = None,
        order_by: str = "created_at",
        descending: bool = True,
    ) -> List[GrantApplication]:
        with self._session() as s:
            stmt = select(GrantApplication)
            if status:
                stmt = stmt.where(GrantApplication.application_status == status)
            orderable = {
                "id": GrantApplication.id,
                "application_id": GrantApplication.application_id,
                "application_status": GrantApplication.application_status,
                "created_at": GrantApplication.created_at,
                "updated_at": GrantApplication.updated_at,
            }
            col = orderable.get(order_by) or GrantApplication.created_at
            stmt = stmt.order_by(col.desc() if descending else col.asc())
            return list(s.execute(stmt).scalars().all())
