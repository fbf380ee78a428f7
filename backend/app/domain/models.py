"""Typed domain representations shared by the phase engine, persistence, and APIs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Protocol

from dateutil import parser as date_parser

DEFAULT_NOMINATION_PORTAL_URL = "https://app.aixr.org/e/20a6e09d-7e86-488d-8436-1cd162d0f5df"
DEFAULT_TICKETS_PORTAL_URL = (
    "https://events.unitedxr.eu/2025?utm_source=AIXR&utm_medium=XR+Awards+Website&utm_campaign=link"
)
DEFAULT_REGISTER_INTEREST_PATH = "/register-interest/"


class EventPhase(str, Enum):
    PRE_NOMINATIONS = "pre-nominations"
    NOMINATIONS_OPEN = "nominations-open"
    NOMINATIONS_CLOSED = "nominations-closed"
    FINALISTS_ANNOUNCED = "finalists-announced"
    JUDGING_PERIOD = "judging-period"
    POST_CEREMONY = "post-ceremony"


class CTAVariant(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    OUTLINE = "outline"


class CTAContext(str, Enum):
    HEADER = "header"
    HERO = "hero"
    FOOTER = "footer"
    TRAVEL = "travel"


def parse_instant(value: Any) -> datetime | None:
    """Coerce a stored milestone into an aware UTC datetime.

    Missing, blank, NaN and unparseable values all come back as ``None`` so
    callers never have to distinguish "absent" from "broken".
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        candidate = value.strip()
        if not candidate:
            return None
        try:
            parsed = date_parser.isoparse(candidate)
        except (ValueError, OverflowError):
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        # Valid offset timestamps at the edges of the calendar leave the
        # datetime range once shifted to UTC.
        return None


@dataclass(frozen=True, slots=True)
class EventMilestones:
    """Calendar snapshot for the single active awards event."""

    event_name: str | None = None
    event_year: int | None = None
    location: str | None = None
    nominations_open: datetime | None = None
    nominations_close: datetime | None = None
    finalists_announced: datetime | None = None
    judging_start: datetime | None = None
    judging_end: datetime | None = None
    ceremony: datetime | None = None
    nomination_portal_url: str | None = None
    tickets_portal_url: str | None = None


@dataclass(frozen=True, slots=True)
class CTALinks:
    """Destinations used when the event record does not carry its own."""

    nomination_portal_url: str = DEFAULT_NOMINATION_PORTAL_URL
    tickets_portal_url: str = DEFAULT_TICKETS_PORTAL_URL
    register_interest_path: str = DEFAULT_REGISTER_INTEREST_PATH


@dataclass(frozen=True, slots=True)
class CTAButton:
    text: str
    href: str
    variant: CTAVariant = CTAVariant.PRIMARY

    def to_dict(self) -> dict[str, str]:
        return {"text": self.text, "href": self.href, "variant": self.variant.value}


@dataclass(frozen=True, slots=True)
class PhaseResult:
    """Outcome of one phase resolution; rebuilt on every call."""

    phase: EventPhase
    days_until_next: int
    next_milestone: str
    cta_button: CTAButton
    status_message: str
    is_urgent: bool
    debug_info: dict[str, Any] | None = field(default=None, compare=False)

    def to_dict(self, *, include_debug: bool = False) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "phase": self.phase.value,
            "days_until_next": self.days_until_next,
            "next_milestone": self.next_milestone,
            "cta_button": self.cta_button.to_dict(),
            "status_message": self.status_message,
            "is_urgent": self.is_urgent,
        }
        if include_debug:
            payload["debug_info"] = self.debug_info
        return payload


@dataclass(frozen=True, slots=True)
class CountdownInfo:
    days: int
    message: str
    is_urgent: bool

    def to_dict(self) -> dict[str, Any]:
        return {"days": self.days, "message": self.message, "is_urgent": self.is_urgent}


class MilestoneSource(Protocol):
    """Anything able to hand over the active event calendar."""

    def get_active_milestones(self) -> EventMilestones | None:
        ...
