from __future__ import annotations

from app.domain import CountdownInfo, PhaseResult


def format_countdown(result: PhaseResult) -> CountdownInfo | None:
    """Countdown widget payload, or ``None`` when there is nothing to count down to."""

    if result.days_until_next == 0:
        return None
    return CountdownInfo(
        days=result.days_until_next,
        message=result.next_milestone,
        is_urgent=result.is_urgent,
    )


__all__ = ["format_countdown"]
