from __future__ import annotations

from datetime import datetime, timezone

import pytest

from app.domain import CTAButton, CTAContext, CTALinks, CTAVariant, EventPhase
from app.domain.models import DEFAULT_NOMINATION_PORTAL_URL
from app.services.event_phase import resolve, select_cta


def _utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


PRE_NOMINATIONS = _utc(2025, 1, 1)
NOMINATIONS_OPEN = _utc(2025, 2, 1)
JUDGING = _utc(2025, 5, 1)
AFTER_CEREMONY = _utc(2025, 7, 1)


def test_header_passes_default_through(milestones):
    result = resolve(milestones, NOMINATIONS_OPEN)

    assert select_cta(result, CTAContext.HEADER) is result.cta_button
    assert select_cta(result) is result.cta_button


def test_hero_rewords_nomination_button(milestones):
    result = resolve(milestones, NOMINATIONS_OPEN)
    assert result.cta_button.text == "Nominate Now"

    button = select_cta(result, "hero")

    assert button == CTAButton("Submit Your Nomination", DEFAULT_NOMINATION_PORTAL_URL, CTAVariant.PRIMARY)
    assert button.href == result.cta_button.href
    assert button.variant == result.cta_button.variant


@pytest.mark.parametrize("now", [PRE_NOMINATIONS, JUDGING, AFTER_CEREMONY])
def test_hero_outside_nominations_passes_through(milestones, now):
    result = resolve(milestones, now)

    assert select_cta(result, CTAContext.HERO) is result.cta_button


def test_footer_after_ceremony_invites_registration(milestones):
    result = resolve(milestones, AFTER_CEREMONY)

    assert select_cta(result, CTAContext.FOOTER) == CTAButton(
        "Register Interest Now", "/register-interest/", CTAVariant.PRIMARY
    )


def test_footer_uses_configured_register_path(milestones):
    result = resolve(milestones, AFTER_CEREMONY)
    links = CTALinks(register_interest_path="/stay-in-touch/")

    assert select_cta(result, CTAContext.FOOTER, links=links).href == "/stay-in-touch/"


def test_footer_before_ceremony_passes_through(milestones):
    result = resolve(milestones, JUDGING)

    assert select_cta(result, CTAContext.FOOTER) is result.cta_button


@pytest.mark.parametrize("now", [PRE_NOMINATIONS, NOMINATIONS_OPEN, JUDGING])
def test_travel_always_sells_tickets_but_keeps_href(milestones, now):
    result = resolve(milestones, now)

    button = select_cta(result, CTAContext.TRAVEL)

    assert button.text == "Secure Tickets"
    assert button.href == result.cta_button.href
    assert button.variant is CTAVariant.PRIMARY


def test_travel_after_ceremony_shows_winners(milestones):
    result = resolve(milestones, AFTER_CEREMONY)

    button = select_cta(result, CTAContext.TRAVEL)

    assert result.phase is EventPhase.POST_CEREMONY
    assert button.text == "View Winners"


def test_unknown_context_is_rejected(milestones):
    result = resolve(milestones, JUDGING)

    with pytest.raises(ValueError):
        select_cta(result, "sidebar")
