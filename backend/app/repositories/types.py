"""Shared repository input types."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any

from app.domain import parse_instant

MILESTONE_COLUMNS = (
    "nominations_open",
    "nominations_close",
    "finalists_announced",
    "judging_period_start",
    "judging_period_end",
    "awards_ceremony",
)


@dataclass(slots=True)
class EventDetailsInput:
    """Validated event record ready to be written to ``event_details``."""

    event_name: str
    event_year: int
    location: str
    id: str | None = None
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

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "EventDetailsInput":
        """Build an input from loosely typed data (YAML, JSON, form posts).

        Unlike the phase engine, which shrugs off bad dates, this is the write
        boundary: a milestone that is present but unparseable is rejected.
        """

        known = {item.name for item in fields(cls)}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise ValueError(f"Unknown event fields: {', '.join(unknown)}")

        for required in ("event_name", "event_year", "location"):
            if payload.get(required) in (None, ""):
                raise ValueError(f"Event field '{required}' is required")

        values: dict[str, Any] = dict(payload)
        for column in MILESTONE_COLUMNS:
            raw = values.get(column)
            if raw in (None, ""):
                values[column] = None
                continue
            parsed = parse_instant(raw)
            if parsed is None:
                raise ValueError(f"Event field '{column}' is not a valid timestamp: {raw!r}")
            values[column] = parsed

        try:
            values["event_year"] = int(values["event_year"])
        except (TypeError, ValueError) as exc:
            raise ValueError("Event field 'event_year' must be an integer") from exc

        if values.get("id") is not None:
            values["id"] = str(values["id"])
        return cls(**values)


__all__ = ["EventDetailsInput", "MILESTONE_COLUMNS"]
