"""Event phase engine: resolution, CTA selection, countdowns and queries."""

from .countdown import format_countdown
from .cta import CONTEXT_OVERRIDES, select_cta
from .queries import are_nominations_open, is_after_ceremony, is_in_phase, status_message
from .resolver import FALLBACK_RULE, PHASE_RULES, PhaseRule, match_rule, resolve

__all__ = [
    "CONTEXT_OVERRIDES",
    "FALLBACK_RULE",
    "PHASE_RULES",
    "PhaseRule",
    "are_nominations_open",
    "format_countdown",
    "is_after_ceremony",
    "is_in_phase",
    "match_rule",
    "resolve",
    "select_cta",
    "status_message",
]
