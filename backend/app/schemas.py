from datetime import datetime
from typing import Any

from pydantic import BaseModel

from app.domain import CTAVariant, EventPhase
from app.domain import CTAButton as CTAButtonValue
from app.domain import CountdownInfo
from app.domain import PhaseResult as PhaseResultValue


class EventDetails(BaseModel):
    id: str
    event_name: str
    event_year: int
    location: str
    description: str | None = None
    organizer_name: str | None = None
    nominations_open: datetime | None = None
    nominations_close: datetime | None = None
    finalists_announced: datetime | None = None
    judging_period_start: datetime | None = None
    judging_period_end: datetime | None = None
    awards_ceremony: datetime | None = None
    nomination_portal_url: str | None = None
    tickets_portal_url: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CTAButton(BaseModel):
    text: str
    href: str
    variant: CTAVariant

    @classmethod
    def from_value(cls, button: CTAButtonValue) -> "CTAButton":
        return cls(text=button.text, href=button.href, variant=button.variant)


class EventPhaseStatus(BaseModel):
    phase: EventPhase
    days_until_next: int
    next_milestone: str
    cta_button: CTAButton
    status_message: str
    is_urgent: bool
    debug_info: dict[str, Any] | None = None

    @classmethod
    def from_result(
        cls, result: PhaseResultValue, *, include_debug: bool = False
    ) -> "EventPhaseStatus":
        return cls(
            phase=result.phase,
            days_until_next=result.days_until_next,
            next_milestone=result.next_milestone,
            cta_button=CTAButton.from_value(result.cta_button),
            status_message=result.status_message,
            is_urgent=result.is_urgent,
            debug_info=result.debug_info if include_debug else None,
        )


class Countdown(BaseModel):
    days: int
    message: str
    is_urgent: bool

    @classmethod
    def from_info(cls, info: CountdownInfo) -> "Countdown":
        return cls(days=info.days, message=info.message, is_urgent=info.is_urgent)


class StatusMessage(BaseModel):
    status_message: str


class PhaseCheck(BaseModel):
    phase: EventPhase
    active: bool


class PhaseChecks(BaseModel):
    nominations_open: bool
    after_ceremony: bool
