"""
SQLAlchemy models for grant applications.
Used by postgres_real when DATABASE_URL is set.
"""
from __future__ import annotations
import secrets
import string
import time
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import uuid4
from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

_ID_ALPHABET = string.ascii_uppercase + string.digits


def generate_application_id() -> str:
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(5))
    return f"APP-{millis}-{suffix}"


class Base(DeclarativeBase):
    pass


class GrantApplication(Base):
    __tablename__ = "grant_applications"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    # human-facing reference, e.g. APP-1718000000000-X7K2Q
    application_id: Mapped[str] = mapped_column(String(40), unique=True, nullable=False, index=True, default=generate_application_id)

    variant: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    application_status: Mapped[str] = mapped_column(String(32), default="draft", nullable=False, index=True)
    eligibility_status: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    organization_name: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)

    # Progress tracking
    current_step: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    completed_steps: Mapped[list] = mapped_column(JSON, default=list, nullable=False)  # list[int]

    # Everything the multi-step form collected, keyed as the frontend sends it
    form_data: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)

    # Auto-scoring
    auto_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    organization_age_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    organization_type_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    operational_status_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    zoho_record_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)
    submitted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
