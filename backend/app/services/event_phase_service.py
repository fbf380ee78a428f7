"""Request-scoped facade tying a milestone source to the phase engine."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

from app.domain import (
    CTAButton,
    CTAContext,
    CTALinks,
    CountdownInfo,
    EventPhase,
    MilestoneSource,
    PhaseResult,
)
from app.services.event_phase import format_countdown, resolve, select_cta


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EventPhaseService:
    """Answer phase questions for whatever event the source reports as active.

    Every call fetches a fresh milestone snapshot and re-resolves; nothing is
    cached between calls.
    """

    def __init__(
        self,
        source: MilestoneSource,
        *,
        links: CTALinks | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._source = source
        self._links = links or CTALinks()
        self._clock = clock

    def current_phase(self, now: datetime | None = None) -> PhaseResult:
        milestones = self._source.get_active_milestones()
        return resolve(milestones, now or self._clock(), links=self._links)

    def cta_button(
        self, context: CTAContext | str = CTAContext.HEADER, now: datetime | None = None
    ) -> CTAButton:
        return select_cta(self.current_phase(now), context, links=self._links)

    def countdown(self, now: datetime | None = None) -> CountdownInfo | None:
        return format_countdown(self.current_phase(now))

    def status_message(self, now: datetime | None = None) -> str:
        return self.current_phase(now).status_message

    def is_in_phase(self, phase: EventPhase | str, now: datetime | None = None) -> bool:
        return self.current_phase(now).phase is EventPhase(phase)

    def are_nominations_open(self, now: datetime | None = None) -> bool:
        return self.is_in_phase(EventPhase.NOMINATIONS_OPEN, now)

    def is_after_ceremony(self, now: datetime | None = None) -> bool:
        return self.is_in_phase(EventPhase.POST_CEREMONY, now)
