from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class EventDetails(Base):
    __tablename__ = "event_details"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    event_name: Mapped[str] = mapped_column(String, nullable=False)
    event_year: Mapped[int] = mapped_column(Integer, nullable=False)
    location: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    organizer_name: Mapped[str | None] = mapped_column(String, nullable=True)

    nominations_open: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    nominations_close: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    finalists_announced: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    judging_period_start: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    judging_period_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    awards_ceremony: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    nomination_portal_url: Mapped[str | None] = mapped_column(String, nullable=True)
    tickets_portal_url: Mapped[str | None] = mapped_column(String, nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
