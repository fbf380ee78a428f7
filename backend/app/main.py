from __future__ import annotations

from datetime import datetime
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Query

from . import schemas
from .core.config import settings
from .db import get_db, init_db
from .domain import CTAContext, EventPhase
from .repositories import EventRepository
from .services.event_phase_service import EventPhaseService

app = FastAPI(title="Awards Event API", version="0.1.0", debug=settings.debug)

PreviewInstant = Annotated[
    datetime | None,
    Query(description="Evaluate the calendar at this instant instead of now (naive values are UTC)"),
]


@app.on_event("startup")
def on_startup() -> None:
    """Initialize database connections when the API boots."""

    init_db()


@app.get("/healthz", tags=["system"])
def healthcheck() -> dict[str, str]:
    """Basic readiness check consumed by infrastructure monitors."""

    return {"status": "ok"}


def _event_repository(db=Depends(get_db)) -> EventRepository:
    return EventRepository(db)


def _event_phase_service(
    repository: EventRepository = Depends(_event_repository),
) -> EventPhaseService:
    """Provide the phase service backed by the active event in the database."""

    return EventPhaseService(repository, links=settings.cta_links)


@app.get("/event", response_model=schemas.EventDetails, tags=["event"])
def get_active_event(repository: EventRepository = Depends(_event_repository)):
    """Return the calendar of the currently active awards event."""

    record = repository.get_active_event()
    if record is None:
        raise HTTPException(status_code=404, detail="No active event")
    return record


@app.get("/event/phase", response_model=schemas.EventPhaseStatus, tags=["event"])
def get_event_phase(
    at: PreviewInstant = None,
    service: EventPhaseService = Depends(_event_phase_service),
):
    """Resolve the phase, countdown and default call to action."""

    result = service.current_phase(at)
    include_debug = settings.debug or settings.expose_phase_debug
    return schemas.EventPhaseStatus.from_result(result, include_debug=include_debug)


@app.get("/event/phase/{phase}", response_model=schemas.PhaseCheck, tags=["event"])
def check_event_phase(
    phase: EventPhase,
    at: PreviewInstant = None,
    service: EventPhaseService = Depends(_event_phase_service),
):
    """Report whether the calendar is currently in ``phase``."""

    return schemas.PhaseCheck(phase=phase, active=service.is_in_phase(phase, at))


@app.get("/event/checks", response_model=schemas.PhaseChecks, tags=["event"])
def get_phase_checks(
    at: PreviewInstant = None,
    service: EventPhaseService = Depends(_event_phase_service),
):
    """Shortcut flags used by templates to toggle nomination and winners blocks."""

    phase = service.current_phase(at).phase
    return schemas.PhaseChecks(
        nominations_open=phase is EventPhase.NOMINATIONS_OPEN,
        after_ceremony=phase is EventPhase.POST_CEREMONY,
    )


@app.get("/event/cta", response_model=schemas.CTAButton, tags=["event"])
def get_event_cta(
    context: Annotated[CTAContext, Query(description="Where the button is rendered")] = CTAContext.HEADER,
    at: PreviewInstant = None,
    service: EventPhaseService = Depends(_event_phase_service),
):
    """Return the call to action for a page region."""

    return schemas.CTAButton.from_value(service.cta_button(context, at))


@app.get("/event/countdown", response_model=schemas.Countdown | None, tags=["event"])
def get_event_countdown(
    at: PreviewInstant = None,
    service: EventPhaseService = Depends(_event_phase_service),
):
    """Return the countdown to the next milestone, or null when none applies."""

    info = service.countdown(at)
    if info is None:
        return None
    return schemas.Countdown.from_info(info)


@app.get("/event/status", response_model=schemas.StatusMessage, tags=["event"])
def get_event_status(
    at: PreviewInstant = None,
    service: EventPhaseService = Depends(_event_phase_service),
):
    """Return the human-readable status line for the current phase."""

    return schemas.StatusMessage(status_message=service.status_message(at))
