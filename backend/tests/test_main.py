from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.main import _event_phase_service, _event_repository, app
from app.models import EventDetails
from app.services.event_phase_service import EventPhaseService


def _utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def client():
    """Test client that cleans up dependency overrides after each test."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def use_calendar(milestones):
    """Serve the fixture calendar with the clock frozen during nominations."""

    def _install(calendar=milestones, now=_utc(2025, 2, 1)):
        source = MagicMock()
        source.get_active_milestones.return_value = calendar
        service = EventPhaseService(source, clock=lambda: now)
        app.dependency_overrides[_event_phase_service] = lambda: service
        return source

    return _install


def test_healthcheck(client):
    """Verify the healthcheck endpoint returns a successful response."""
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_event_phase(client, use_calendar):
    use_calendar()

    response = client.get("/event/phase")

    assert response.status_code == 200
    payload = response.json()
    assert payload["phase"] == "nominations-open"
    assert payload["days_until_next"] == 59
    assert payload["next_milestone"] == "Nominations close 31 March 2025"
    assert payload["cta_button"]["text"] == "Nominate Now"
    assert payload["cta_button"]["variant"] == "primary"
    assert payload["is_urgent"] is False
    assert payload["debug_info"] is None


def test_event_phase_without_event(client, use_calendar):
    use_calendar(calendar=None)

    response = client.get("/event/phase")

    assert response.status_code == 200
    assert response.json() == {
        "phase": "pre-nominations",
        "days_until_next": 0,
        "next_milestone": "Event details coming soon",
        "cta_button": {"text": "Register Interest", "href": "/register-interest/", "variant": "primary"},
        "status_message": "Event details are being finalized",
        "is_urgent": False,
        "debug_info": None,
    }


def test_event_phase_preview_instant(client, use_calendar):
    use_calendar()

    response = client.get("/event/phase", params={"at": "2025-04-15T09:30:00Z"})

    assert response.status_code == 200
    assert response.json()["status_message"] == "Finalists announced in 3 hours"


def test_event_phase_debug_snapshot_when_enabled(client, use_calendar, monkeypatch):
    use_calendar()
    monkeypatch.setattr("app.main.settings.expose_phase_debug", True)

    response = client.get("/event/phase")

    assert response.json()["debug_info"]["matched_rule"] == "nominations-window"


def test_event_phase_rejects_bad_instant(client, use_calendar):
    use_calendar()

    response = client.get("/event/phase", params={"at": "tomorrow-ish"})

    assert response.status_code == 422


def test_check_event_phase(client, use_calendar):
    use_calendar()

    assert client.get("/event/phase/nominations-open").json() == {
        "phase": "nominations-open",
        "active": True,
    }
    assert client.get("/event/phase/post-ceremony").json()["active"] is False
    assert client.get("/event/phase/voting").status_code == 422


def test_phase_checks(client, use_calendar):
    use_calendar(now=_utc(2025, 7, 1))

    response = client.get("/event/checks")

    assert response.json() == {"nominations_open": False, "after_ceremony": True}


def test_event_cta_by_context(client, use_calendar):
    use_calendar()

    hero = client.get("/event/cta", params={"context": "hero"}).json()
    header = client.get("/event/cta").json()
    travel = client.get("/event/cta", params={"context": "travel"}).json()

    assert hero["text"] == "Submit Your Nomination"
    assert hero["href"] == header["href"]
    assert header["text"] == "Nominate Now"
    assert travel == {"text": "Secure Tickets", "href": header["href"], "variant": "primary"}


def test_event_cta_rejects_unknown_context(client, use_calendar):
    use_calendar()

    assert client.get("/event/cta", params={"context": "sidebar"}).status_code == 422


def test_event_countdown(client, use_calendar):
    use_calendar(now=_utc(2025, 1, 10, 15))

    response = client.get("/event/countdown")

    assert response.status_code == 200
    assert response.json() == {
        "days": 5,
        "message": "Nominations open 15 January 2025",
        "is_urgent": True,
    }


def test_event_countdown_null_after_ceremony(client, use_calendar):
    use_calendar(now=_utc(2025, 7, 1))

    response = client.get("/event/countdown")

    assert response.status_code == 200
    assert response.json() is None


def test_event_status(client, use_calendar):
    use_calendar(now=_utc(2025, 5, 1, 10))

    response = client.get("/event/status")

    assert response.json() == {"status_message": "Judging in progress - 19 days remaining"}


def test_active_event_not_found(client):
    mock_repo = MagicMock()
    mock_repo.get_active_event.return_value = None
    app.dependency_overrides[_event_repository] = lambda: mock_repo

    response = client.get("/event")

    assert response.status_code == 404


def test_active_event(client):
    now = _utc(2025, 1, 1)
    record = EventDetails(
        id="evt-1",
        event_name="XR Awards",
        event_year=2025,
        location="Amsterdam",
        awards_ceremony=_utc(2025, 6, 10, 18),
        is_active=True,
        created_at=now,
        updated_at=now,
    )
    mock_repo = MagicMock()
    mock_repo.get_active_event.return_value = record
    app.dependency_overrides[_event_repository] = lambda: mock_repo

    response = client.get("/event")

    assert response.status_code == 200
    payload = response.json()
    assert payload["id"] == "evt-1"
    assert payload["event_year"] == 2025
    assert payload["nominations_open"] is None
