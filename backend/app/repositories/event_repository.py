"""Event calendar persistence; the database-backed milestone source."""

from __future__ import annotations

import uuid

from loguru import logger
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain import EventMilestones, parse_instant
from app.models import EventDetails

from .types import MILESTONE_COLUMNS, EventDetailsInput


def to_milestones(record: EventDetails | EventDetailsInput) -> EventMilestones:
    """Project an ``event_details`` row onto the engine's milestone record."""

    return EventMilestones(
        event_name=record.event_name,
        event_year=record.event_year,
        location=record.location,
        nominations_open=parse_instant(record.nominations_open),
        nominations_close=parse_instant(record.nominations_close),
        finalists_announced=parse_instant(record.finalists_announced),
        judging_start=parse_instant(record.judging_period_start),
        judging_end=parse_instant(record.judging_period_end),
        ceremony=parse_instant(record.awards_ceremony),
        nomination_portal_url=record.nomination_portal_url or None,
        tickets_portal_url=record.tickets_portal_url or None,
    )


class EventRepository:
    """Encapsulate event details persistence concerns."""

    def __init__(self, session: Session) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # Mutations

    def upsert_event_details(
        self, payload: EventDetailsInput, *, activate: bool = True
    ) -> EventDetails:
        existing: EventDetails | None = None
        if payload.id:
            existing = self._session.get(EventDetails, payload.id)
        else:
            query = select(EventDetails).where(
                EventDetails.event_name == payload.event_name,
                EventDetails.event_year == payload.event_year,
            )
            existing = self._session.execute(query).scalars().first()

        if existing is None:
            existing = EventDetails(id=payload.id or str(uuid.uuid4()), is_active=False)
            self._session.add(existing)

        existing.event_name = payload.event_name
        existing.event_year = payload.event_year
        existing.location = payload.location
        existing.description = payload.description
        existing.organizer_name = payload.organizer_name
        for column in MILESTONE_COLUMNS:
            setattr(existing, column, getattr(payload, column))
        existing.nomination_portal_url = payload.nomination_portal_url
        existing.tickets_portal_url = payload.tickets_portal_url

        if activate:
            self._session.execute(
                update(EventDetails)
                .where(EventDetails.id != existing.id)
                .values(is_active=False)
            )
            existing.is_active = True

        self._session.flush()
        return existing

    # ------------------------------------------------------------------
    # Queries

    def get_active_event(self) -> EventDetails | None:
        query = (
            select(EventDetails)
            .where(EventDetails.is_active.is_(True))
            .order_by(EventDetails.updated_at.desc())
            .limit(2)
        )
        records = self._session.execute(query).scalars().all()
        if not records:
            return None
        if len(records) > 1:
            logger.warning(
                "More than one active event in event_details; using {} ({})",
                records[0].id,
                records[0].event_name,
            )
        return records[0]

    def get_active_milestones(self) -> EventMilestones | None:
        try:
            record = self.get_active_event()
        except SQLAlchemyError:
            logger.exception("Could not load the active event; treating it as missing")
            self._session.rollback()
            return None
        if record is None:
            return None
        return to_milestones(record)


__all__ = ["EventRepository", "to_milestones"]
