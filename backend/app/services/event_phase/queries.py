"""Yes/no questions about the calendar, answered by resolving the phase."""

from __future__ import annotations

from datetime import datetime

from app.domain import EventMilestones, EventPhase

from .resolver import resolve


def is_in_phase(
    milestones: EventMilestones | None,
    phase: EventPhase | str,
    now: datetime | None = None,
) -> bool:
    return resolve(milestones, now).phase is EventPhase(phase)


def are_nominations_open(milestones: EventMilestones | None, now: datetime | None = None) -> bool:
    return is_in_phase(milestones, EventPhase.NOMINATIONS_OPEN, now)


def is_after_ceremony(milestones: EventMilestones | None, now: datetime | None = None) -> bool:
    return is_in_phase(milestones, EventPhase.POST_CEREMONY, now)


def status_message(milestones: EventMilestones | None, now: datetime | None = None) -> str:
    return resolve(milestones, now).status_message


__all__ = ["are_nominations_open", "is_after_ceremony", "is_in_phase", "status_message"]
