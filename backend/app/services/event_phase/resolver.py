"""Resolve the active awards calendar into the phase the site should present.

Phases are evaluated against an ordered rule table; the first rule whose
predicate holds wins. Lower boundaries are inclusive wherever a phase begins
at a milestone, which is why the nominations and judging windows use closed
intervals while the waiting periods between them are open.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, NamedTuple

from loguru import logger

from app.domain import (
    CTAButton,
    CTALinks,
    EventMilestones,
    EventPhase,
    PhaseResult,
    parse_instant,
)

URGENCY_WINDOW_DAYS = 7
COMING_SOON_MILESTONE = "Event details coming soon"
COMING_SOON_STATUS = "Event details are being finalized"

_ONE_DAY = timedelta(days=1)
_ONE_HOUR = timedelta(hours=1)


class Timeline(NamedTuple):
    """The six calendar instants after coercion to aware UTC datetimes."""

    nominations_open: datetime | None = None
    nominations_close: datetime | None = None
    finalists_announced: datetime | None = None
    judging_start: datetime | None = None
    judging_end: datetime | None = None
    ceremony: datetime | None = None

    @classmethod
    def from_milestones(cls, milestones: EventMilestones) -> "Timeline":
        return cls(*(parse_instant(getattr(milestones, name)) for name in cls._fields))


class CountdownUnit(str, Enum):
    DAYS = "days"
    HOURS = "hours"


class Urgency(str, Enum):
    WINDOW = "window"
    HOURLY = "hourly"
    NEVER = "never"


@dataclass(frozen=True, slots=True)
class Countdown:
    days: int
    span: str
    when: str


CTABuilder = Callable[[EventMilestones, Timeline, CTALinks], CTAButton]
Predicate = Callable[[Timeline, datetime], bool]


@dataclass(frozen=True, slots=True)
class PhaseRule:
    """One row of the phase table.

    ``target`` names the :class:`Timeline` field counted down to; rules without
    a target report no countdown. ``status`` is a template receiving ``span``
    (``"3 days"``) and ``when`` (``"in 3 days"`` or ``"Today"``).
    """

    name: str
    phase: EventPhase
    matches: Predicate
    cta: CTABuilder
    label: str
    status: str
    target: str | None = None
    countdown: CountdownUnit = CountdownUnit.DAYS
    urgency: Urgency = Urgency.WINDOW


def _pluralize(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def utc_midnight(moment: datetime) -> datetime:
    moment = moment.astimezone(timezone.utc)
    return datetime(moment.year, moment.month, moment.day, tzinfo=timezone.utc)


def days_between(start: datetime, end: datetime) -> int:
    """Whole days separating two instants, rounded up and never negative."""

    return math.ceil(abs(end - start) / _ONE_DAY)


def day_countdown(target: datetime, now: datetime) -> Countdown:
    days = days_between(utc_midnight(now), target)
    span = _pluralize(days, "day")
    return Countdown(days=days, span=span, when=f"in {span}")


def hour_countdown(target: datetime, now: datetime) -> Countdown:
    """Countdown from the full timestamp, switching to hours inside the last day."""

    remaining = target - now
    if remaining <= timedelta(0):
        return Countdown(days=0, span="0 hours", when="Today")

    hours = math.ceil(remaining / _ONE_HOUR)
    if hours < 24:
        span = _pluralize(hours, "hour")
        return Countdown(days=0, span=span, when=f"in {span}")

    days = math.ceil(remaining / _ONE_DAY)
    span = _pluralize(days, "day")
    return Countdown(days=days, span=span, when=f"in {span}")


_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def format_milestone_date(moment: datetime) -> str:
    """Render ``01 March 2025`` regardless of the process locale."""

    moment = moment.astimezone(timezone.utc)
    return f"{moment.day:02d} {_MONTH_NAMES[moment.month - 1]} {moment.year}"


def _is_urgent(policy: Urgency, countdown: Countdown) -> bool:
    if policy is Urgency.WINDOW:
        return countdown.days <= URGENCY_WINDOW_DAYS
    if policy is Urgency.HOURLY:
        return countdown.days <= 1 or "hour" in countdown.when
    return False


# ----------------------------------------------------------------------
# Boundary predicates


def _before(boundary: datetime | None, now: datetime) -> bool:
    return boundary is not None and now < boundary


def _after(boundary: datetime | None, now: datetime) -> bool:
    return boundary is not None and now > boundary


def _within(start: datetime | None, end: datetime | None, now: datetime) -> bool:
    return start is not None and end is not None and start <= now <= end


def _between(start: datetime | None, end: datetime | None, now: datetime) -> bool:
    return start is not None and end is not None and start < now < end


def _starting_at(start: datetime | None, end: datetime | None, now: datetime) -> bool:
    return start is not None and end is not None and start <= now < end


# ----------------------------------------------------------------------
# Default calls to action


def register_interest_cta(
    milestones: EventMilestones, timeline: Timeline, links: CTALinks
) -> CTAButton:
    return CTAButton(text="Register Interest", href=links.register_interest_path)


def nominate_cta(
    milestones: EventMilestones, timeline: Timeline, links: CTALinks
) -> CTAButton:
    href = milestones.nomination_portal_url or links.nomination_portal_url
    return CTAButton(text="Nominate Now", href=href)


def tickets_cta(
    milestones: EventMilestones, timeline: Timeline, links: CTALinks
) -> CTAButton:
    href = milestones.tickets_portal_url or links.tickets_portal_url
    return CTAButton(text="Secure Tickets", href=href)


def winners_cta(
    milestones: EventMilestones, timeline: Timeline, links: CTALinks
) -> CTAButton:
    year = milestones.event_year
    if year is None and timeline.ceremony is not None:
        year = timeline.ceremony.year
    return CTAButton(text="View Winners", href=f"/winners-and-finalists-{year}/")


PHASE_RULES: tuple[PhaseRule, ...] = (
    PhaseRule(
        name="awaiting-nominations",
        phase=EventPhase.PRE_NOMINATIONS,
        matches=lambda t, now: _before(t.nominations_open, now),
        cta=register_interest_cta,
        label="Nominations open",
        status="Nominations open in {span}",
        target="nominations_open",
    ),
    PhaseRule(
        name="nominations-window",
        phase=EventPhase.NOMINATIONS_OPEN,
        matches=lambda t, now: _within(t.nominations_open, t.nominations_close, now),
        cta=nominate_cta,
        label="Nominations close",
        status="Nominations close in {span}",
        target="nominations_close",
    ),
    PhaseRule(
        name="awaiting-finalists",
        phase=EventPhase.NOMINATIONS_CLOSED,
        matches=lambda t, now: _between(t.nominations_close, t.finalists_announced, now),
        cta=tickets_cta,
        label="Finalists announced",
        status="Finalists announced {when}",
        target="finalists_announced",
        countdown=CountdownUnit.HOURS,
        urgency=Urgency.HOURLY,
    ),
    PhaseRule(
        name="awaiting-judging",
        phase=EventPhase.FINALISTS_ANNOUNCED,
        matches=lambda t, now: _starting_at(t.finalists_announced, t.judging_start, now),
        cta=tickets_cta,
        label="Judging begins",
        status="Judging begins in {span}",
        target="judging_start",
        urgency=Urgency.NEVER,
    ),
    PhaseRule(
        name="judging-window",
        phase=EventPhase.JUDGING_PERIOD,
        matches=lambda t, now: _within(t.judging_start, t.judging_end, now),
        cta=tickets_cta,
        label="Judging ends",
        status="Judging in progress - {span} remaining",
        target="judging_end",
        urgency=Urgency.NEVER,
    ),
    # Shares the finalists-announced tag with the pre-judging window.
    PhaseRule(
        name="awaiting-ceremony",
        phase=EventPhase.FINALISTS_ANNOUNCED,
        matches=lambda t, now: _between(t.judging_end, t.ceremony, now),
        cta=tickets_cta,
        label="Awards ceremony",
        status="Awards ceremony in {span}",
        target="ceremony",
    ),
    PhaseRule(
        name="ceremony-held",
        phase=EventPhase.POST_CEREMONY,
        matches=lambda t, now: _after(t.ceremony, now),
        cta=winners_cta,
        label="Event completed",
        status="Event completed - view the winners",
        urgency=Urgency.NEVER,
    ),
)

FALLBACK_RULE = PhaseRule(
    name="coming-soon",
    phase=EventPhase.PRE_NOMINATIONS,
    matches=lambda t, now: True,
    cta=register_interest_cta,
    label=COMING_SOON_MILESTONE,
    status=COMING_SOON_STATUS,
    urgency=Urgency.NEVER,
)


def match_rule(
    timeline: Timeline, now: datetime, rules: Sequence[PhaseRule] = PHASE_RULES
) -> PhaseRule:
    """Return the first rule whose predicate holds, or the fallback."""

    return next((rule for rule in rules if rule.matches(timeline, now)), FALLBACK_RULE)


def build_debug_snapshot(timeline: Timeline, now: datetime) -> dict[str, Any]:
    snapshot: dict[str, Any] = {
        "current_time": now.isoformat(),
        "today": utc_midnight(now).isoformat(),
    }
    for name, value in timeline._asdict().items():
        snapshot[name] = value.isoformat() if value is not None else None
    snapshot["comparisons"] = {rule.name: rule.matches(timeline, now) for rule in PHASE_RULES}
    return snapshot


def _apply_rule(
    rule: PhaseRule,
    milestones: EventMilestones,
    timeline: Timeline,
    now: datetime,
    links: CTALinks,
    debug_info: dict[str, Any],
) -> PhaseResult:
    cta = rule.cta(milestones, timeline, links)
    target = getattr(timeline, rule.target) if rule.target else None
    if target is None:
        return PhaseResult(
            phase=rule.phase,
            days_until_next=0,
            next_milestone=rule.label,
            cta_button=cta,
            status_message=rule.status,
            is_urgent=False,
            debug_info=debug_info,
        )

    if rule.countdown is CountdownUnit.HOURS:
        countdown = hour_countdown(target, now)
    else:
        countdown = day_countdown(target, now)

    return PhaseResult(
        phase=rule.phase,
        days_until_next=countdown.days,
        next_milestone=f"{rule.label} {format_milestone_date(target)}",
        cta_button=cta,
        status_message=rule.status.format(span=countdown.span, when=countdown.when),
        is_urgent=_is_urgent(rule.urgency, countdown),
        debug_info=debug_info,
    )


def resolve(
    milestones: EventMilestones | None,
    now: datetime | None = None,
    *,
    links: CTALinks | None = None,
) -> PhaseResult:
    """Classify ``now`` against the event calendar.

    Never raises: a missing record, absent or unparseable milestones and
    out-of-order calendars all resolve to a defined phase. When ``now`` is
    omitted the current UTC time is used; naive datetimes are read as UTC.
    """

    links = links or CTALinks()
    current = parse_instant(now) or datetime.now(timezone.utc)

    if milestones is None:
        logger.debug("No active event details; using the coming-soon fallback")
        return _apply_rule(
            FALLBACK_RULE,
            EventMilestones(),
            Timeline(),
            current,
            links,
            {"no_event_details": True},
        )

    timeline = Timeline.from_milestones(milestones)
    debug_info = build_debug_snapshot(timeline, current)
    rule = match_rule(timeline, current)
    debug_info["matched_rule"] = rule.name
    logger.debug(
        "Resolved event phase {} via rule {} at {}",
        rule.phase.value,
        rule.name,
        debug_info["current_time"],
    )
    return _apply_rule(rule, milestones, timeline, current, links, debug_info)


__all__ = [
    "COMING_SOON_MILESTONE",
    "COMING_SOON_STATUS",
    "FALLBACK_RULE",
    "PHASE_RULES",
    "URGENCY_WINDOW_DAYS",
    "Countdown",
    "CountdownUnit",
    "PhaseRule",
    "Timeline",
    "Urgency",
    "build_debug_snapshot",
    "day_countdown",
    "days_between",
    "format_milestone_date",
    "hour_countdown",
    "match_rule",
    "resolve",
    "utc_midnight",
]
