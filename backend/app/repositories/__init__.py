"""Repository abstractions for database interactions."""

from .event_repository import EventRepository, to_milestones
from .types import EventDetailsInput

__all__ = [
    "EventDetailsInput",
    "EventRepository",
    "to_milestones",
]
