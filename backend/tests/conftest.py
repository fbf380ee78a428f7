from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.domain import EventMilestones


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def milestones() -> EventMilestones:
    """A complete, well-ordered 2025 awards calendar."""

    return EventMilestones(
        event_name="XR Awards",
        event_year=2025,
        location="Amsterdam",
        nominations_open=utc(2025, 1, 15),
        nominations_close=utc(2025, 3, 31, 23, 59),
        finalists_announced=utc(2025, 4, 15, 12),
        judging_start=utc(2025, 4, 20),
        judging_end=utc(2025, 5, 20),
        ceremony=utc(2025, 6, 10, 18),
    )


@pytest.fixture
def event_payload() -> dict[str, object]:
    return {
        "event_name": "XR Awards",
        "event_year": 2025,
        "location": "Amsterdam",
        "nominations_open": "2025-01-15T00:00:00Z",
        "nominations_close": "2025-03-31T23:59:00Z",
        "finalists_announced": "2025-04-15T12:00:00Z",
        "judging_period_start": "2025-04-20T00:00:00Z",
        "judging_period_end": "2025-05-20T00:00:00Z",
        "awards_ceremony": "2025-06-10T18:00:00Z",
        "tickets_portal_url": "https://tickets.example.org/2025",
    }


@pytest.fixture
def db_session():
    from app import models  # noqa: F401
    from app.db import Base

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autoflush=True, future=True)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def test_settings(tmp_path, monkeypatch) -> Settings:
    settings = Settings(
        database_url=f"sqlite:///{tmp_path/'awards.db'}",
        tickets_portal_url="https://tickets.example.org/fallback",
    )
    monkeypatch.setattr("app.core.config.get_settings", lambda: settings)
    monkeypatch.setattr("app.core.config.settings", settings)
    return settings
