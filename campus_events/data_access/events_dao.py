"""Data access helpers for events."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from ..models.entities import Event, EventStatus, EventType
from .store import get_store

# Fields a PUT may touch; identity, ownership and status are never among them.
UPDATABLE_FIELDS = {
    "title",
    "description",
    "start_date",
    "end_date",
    "event_type",
    "club_id",
    "budget",
    "collaborators",
    "participant_count",
}


def create_event(
    title: str,
    description: str,
    start_date: datetime,
    end_date: datetime,
    organizer_id: int,
    status: EventStatus,
    event_type: EventType = EventType.SINGLE_DAY,
    club_id: Optional[int] = None,
    budget: float = 0.0,
    collaborators: Optional[list[str]] = None,
) -> Event:
    """Insert a new event."""

    store = get_store()
    event = Event(
        event_id=store.events.next_id(),
        title=title,
        description=description,
        start_date=start_date,
        end_date=end_date,
        event_type=event_type,
        organizer_id=organizer_id,
        status=status,
        club_id=club_id,
        budget=budget,
        collaborators=list(collaborators or []),
        created_at=datetime.now(timezone.utc),
    )
    return store.events.add(event)


def get_event_by_id(event_id: int) -> Event | None:
    return get_store().events.get(event_id)


def list_events() -> list[Event]:
    return get_store().events.all()


def update_event(event_id: int, **fields: Any) -> Event | None:
    """Update mutable fields for an event, silently dropping the rest."""

    event = get_event_by_id(event_id)
    if event is None:
        return None
    updates = {key: value for key, value in fields.items() if key in UPDATABLE_FIELDS}
    for key, value in updates.items():
        setattr(event, key, value)
    event.updated_at = datetime.now(timezone.utc)
    return event


def set_status(event_id: int, status: EventStatus) -> Event | None:
    """Update an event status lifecycle value."""

    event = get_event_by_id(event_id)
    if event is None:
        return None
    event.status = status
    event.updated_at = datetime.now(timezone.utc)
    return event


def delete_event(event_id: int) -> Event | None:
    return get_store().events.remove(event_id)
