"""Domain models describing the awards calendar and its resolved phases."""

from .models import (
    CTAButton,
    CTAContext,
    CTALinks,
    CTAVariant,
    CountdownInfo,
    EventMilestones,
    EventPhase,
    MilestoneSource,
    PhaseResult,
    parse_instant,
)

__all__ = [
    "CTAButton",
    "CTAContext",
    "CTALinks",
    "CTAVariant",
    "CountdownInfo",
    "EventMilestones",
    "EventPhase",
    "MilestoneSource",
    "PhaseResult",
    "parse_instant",
]
