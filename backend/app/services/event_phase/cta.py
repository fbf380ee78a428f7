"""Per-context adjustments to the phase's default call to action."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

from app.domain import CTAButton, CTAContext, CTALinks, CTAVariant, EventPhase, PhaseResult

Override = Callable[[CTAButton, CTALinks], CTAButton]


def _submit_nomination(button: CTAButton, links: CTALinks) -> CTAButton:
    return replace(button, text="Submit Your Nomination")


def _register_interest_now(button: CTAButton, links: CTALinks) -> CTAButton:
    return CTAButton(
        text="Register Interest Now",
        href=links.register_interest_path,
        variant=CTAVariant.PRIMARY,
    )


def _secure_tickets(button: CTAButton, links: CTALinks) -> CTAButton:
    return CTAButton(text="Secure Tickets", href=button.href, variant=CTAVariant.PRIMARY)


CONTEXT_OVERRIDES: dict[tuple[CTAContext, EventPhase], Override] = {
    (CTAContext.HERO, EventPhase.NOMINATIONS_OPEN): _submit_nomination,
    (CTAContext.FOOTER, EventPhase.POST_CEREMONY): _register_interest_now,
    **{
        (CTAContext.TRAVEL, phase): _secure_tickets
        for phase in EventPhase
        if phase is not EventPhase.POST_CEREMONY
    },
}


def select_cta(
    result: PhaseResult,
    context: CTAContext | str = CTAContext.HEADER,
    *,
    links: CTALinks | None = None,
) -> CTAButton:
    """Return the button to render in ``context`` for an already resolved phase.

    Contexts without an override for the current phase get the resolver's
    default untouched. Unknown context names raise ``ValueError``.
    """

    context = CTAContext(context)
    override = CONTEXT_OVERRIDES.get((context, result.phase))
    if override is None:
        return result.cta_button
    return override(result.cta_button, links or CTALinks())


__all__ = ["CONTEXT_OVERRIDES", "select_cta"]
