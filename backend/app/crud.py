from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain import EventMilestones
from app.repositories import EventDetailsInput, EventRepository

from .models import EventDetails


def upsert_event_details(
    session: Session, payload: EventDetailsInput, *, activate: bool = True
) -> EventDetails:
    return EventRepository(session).upsert_event_details(payload, activate=activate)


def get_active_event(session: Session) -> EventDetails | None:
    return EventRepository(session).get_active_event()


def get_active_milestones(session: Session) -> EventMilestones | None:
    return EventRepository(session).get_active_milestones()


__all__ = [
    "EventDetailsInput",
    "get_active_event",
    "get_active_milestones",
    "upsert_event_details",
]
