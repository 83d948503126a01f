"""Event and booking state machines, visibility rules and club membership.

Transitions never write notifications themselves. Each one returns a
``Transition`` holding the changed entity and the notification drafts it
produced; ``services.notifier.dispatch`` stores them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, Optional, TypeVar

from flask import current_app

from ..data_access import bookings_dao, clubs_dao, events_dao, notifications_dao, resources_dao
from ..data_access.store import get_store
from ..errors import Forbidden, InvalidTransition, NotFound, ValidationError
from ..models.entities import (
    ADMIN_AUDIENCE,
    Booking,
    BookingStatus,
    Club,
    Event,
    EventStatus,
    EventType,
    Notification,
    NotificationDraft,
    NotificationKind,
    Role,
    User,
)
from ..security import require_role

T = TypeVar("T")

EVENT_CREATORS = {Role.ORGANIZER, Role.ADMIN}
MODERATORS = {Role.ADMIN}

EVENT_TRANSITIONS = {
    EventStatus.DRAFT: {EventStatus.APPROVED, EventStatus.REJECTED},
    EventStatus.APPROVED: set(),
    EventStatus.REJECTED: set(),
}

BOOKING_TRANSITIONS = {
    BookingStatus.PENDING: {BookingStatus.APPROVED, BookingStatus.REJECTED},
    BookingStatus.APPROVED: set(),
    BookingStatus.REJECTED: set(),
}


@dataclass
class Transition(Generic[T]):
    """A changed entity plus the notifications the change should emit."""

    entity: T
    notifications: list[NotificationDraft] = field(default_factory=list)


def _ensure_owner_or_admin(actor: User, event: Event) -> None:
    if event.organizer_id != actor.user_id and not actor.is_admin:
        raise Forbidden("Not authorized to modify this event")


def _validate_window(start: datetime, end: datetime) -> None:
    if end < start:
        raise ValidationError("Event end must not be before its start.")


# ============ Events ============

def create_event(
    actor: User,
    title: str,
    description: str,
    start_date: datetime,
    end_date: datetime,
    event_type: EventType = EventType.SINGLE_DAY,
    club_id: Optional[int] = None,
    budget: float = 0.0,
    collaborators: Optional[list[str]] = None,
) -> Transition[Event]:
    """Create an event; admins publish directly, organizers start a draft."""

    require_role(actor.role, EVENT_CREATORS)
    _validate_window(start_date, end_date)
    if budget < 0:
        raise ValidationError("Budget must be non-negative.")
    if club_id is not None and clubs_dao.get_club_by_id(club_id) is None:
        raise NotFound("Club", club_id)

    status = EventStatus.APPROVED if actor.is_admin else EventStatus.DRAFT
    event = events_dao.create_event(
        title=title,
        description=description,
        start_date=start_date,
        end_date=end_date,
        organizer_id=actor.user_id,
        status=status,
        event_type=event_type,
        club_id=club_id,
        budget=budget,
        collaborators=collaborators,
    )
    current_app.logger.info("Event %s created by user %s as %s", event.event_id, actor.user_id, status.value)

    outbox: list[NotificationDraft] = []
    if status is EventStatus.DRAFT:
        outbox.append(
            NotificationDraft(
                audience=ADMIN_AUDIENCE,
                kind=NotificationKind.EVENT_APPROVAL,
                message=f'New event "{event.title}" requires approval',
                event_id=event.event_id,
            )
        )
    return Transition(event, outbox)


def get_event(event_id: int) -> Event:
    event = events_dao.get_event_by_id(event_id)
    if event is None:
        raise NotFound("Event", event_id)
    return event


def update_event(actor: User, event_id: int, changes: dict[str, Any]) -> Event:
    """Apply a partial update; identity, ownership and status are ignored."""

    event = get_event(event_id)
    _ensure_owner_or_admin(actor, event)
    start = changes.get("start_date", event.start_date)
    end = changes.get("end_date", event.end_date)
    _validate_window(start, end)
    if changes.get("budget") is not None and changes["budget"] < 0:
        raise ValidationError("Budget must be non-negative.")
    if changes.get("club_id") is not None and clubs_dao.get_club_by_id(changes["club_id"]) is None:
        raise NotFound("Club", changes["club_id"])
    updated = events_dao.update_event(event_id, **changes)
    current_app.logger.info("Event %s updated by user %s", event_id, actor.user_id)
    return updated


def delete_event(actor: User, event_id: int) -> Event:
    event = get_event(event_id)
    _ensure_owner_or_admin(actor, event)
    events_dao.delete_event(event_id)
    current_app.logger.info("Event %s deleted by user %s", event_id, actor.user_id)
    return event


def set_event_status(actor: User, event_id: int, status: EventStatus) -> Transition[Event]:
    """Approve or reject a draft event and notify its organizer."""

    require_role(actor.role, MODERATORS)
    with get_store().lock:
        event = get_event(event_id)
        if status not in EVENT_TRANSITIONS[event.status]:
            raise InvalidTransition("event", event.status.value, status.value)
        events_dao.set_status(event_id, status)
    current_app.logger.info("Event %s moved to %s by admin %s", event_id, status.value, actor.user_id)
    draft = NotificationDraft(
        audience=event.organizer_id,
        kind=NotificationKind.EVENT_STATUS,
        message=f'Event "{event.title}" has been {status.value}',
        event_id=event.event_id,
    )
    return Transition(event, [draft])


def visible_events(
    actor: User,
    status: Optional[str] = None,
    club_id: Optional[int] = None,
    event_type: Optional[str] = None,
) -> list[Event]:
    """Apply the role visibility policy, then intersect the optional filters."""

    events = events_dao.list_events()
    if actor.role is Role.PARTICIPANT:
        events = [event for event in events if event.status is EventStatus.APPROVED]
    elif actor.role is Role.ORGANIZER:
        events = [
            event
            for event in events
            if event.status is EventStatus.APPROVED or event.organizer_id == actor.user_id
        ]
    elif actor.role is Role.ADMIN:
        pass
    else:
        raise Forbidden()

    if status:
        events = [event for event in events if event.status.value == status]
    if club_id is not None:
        events = [event for event in events if event.club_id == club_id]
    if event_type:
        events = [event for event in events if event.event_type.value == event_type]
    return events


# ============ Bookings ============

def request_booking(
    actor: User,
    resource_id: int,
    start_time: datetime,
    end_time: datetime,
    purpose: str,
    event_id: Optional[int] = None,
) -> Transition[Booking]:
    """Reserve a resource window; overlapping non-rejected bookings refuse it."""

    resource = resources_dao.get_resource_by_id(resource_id)
    if resource is None:
        raise NotFound("Resource", resource_id)
    if event_id is not None and events_dao.get_event_by_id(event_id) is None:
        raise NotFound("Event", event_id)
    booking = bookings_dao.create_booking(
        resource_id=resource_id,
        requester_id=actor.user_id,
        start_time=start_time,
        end_time=end_time,
        purpose=purpose,
        event_id=event_id,
    )
    current_app.logger.info(
        "Booking %s requested on resource %s by user %s", booking.booking_id, resource_id, actor.user_id
    )
    draft = NotificationDraft(
        audience=ADMIN_AUDIENCE,
        kind=NotificationKind.BOOKING_REQUEST,
        message=f"New booking request for {resource.name}",
        booking_id=booking.booking_id,
    )
    return Transition(booking, [draft])


def visible_bookings(actor: User) -> list[Booking]:
    """Admins see every booking; everyone else only their own."""

    if actor.is_admin:
        return bookings_dao.list_bookings()
    return bookings_dao.list_bookings_for_user(actor.user_id)


def set_booking_status(actor: User, booking_id: int, status: BookingStatus) -> Transition[Booking]:
    """Approve or reject a pending booking and notify the requester."""

    require_role(actor.role, MODERATORS)
    with get_store().lock:
        booking = bookings_dao.get_booking_by_id(booking_id)
        if booking is None:
            raise NotFound("Booking", booking_id)
        if status not in BOOKING_TRANSITIONS[booking.status]:
            raise InvalidTransition("booking", booking.status.value, status.value)
        bookings_dao.update_booking_status(booking_id, status)
    current_app.logger.info("Booking %s moved to %s by admin %s", booking_id, status.value, actor.user_id)
    resource = resources_dao.get_resource_by_id(booking.resource_id)
    resource_name = resource.name if resource else "resource"
    draft = NotificationDraft(
        audience=booking.requester_id,
        kind=NotificationKind.BOOKING_STATUS,
        message=f"Booking for {resource_name} has been {status.value}",
        booking_id=booking.booking_id,
    )
    return Transition(booking, [draft])


# ============ Clubs ============

def join_club(actor: User, club_id: int) -> Club:
    with get_store().lock:
        existing = clubs_dao.get_club_by_id(club_id)
        already_member = existing is not None and actor.user_id in existing.members
        club = clubs_dao.add_member(club_id, actor.user_id)
    if not already_member:
        current_app.logger.info("User %s joined club %s", actor.user_id, club_id)
    return club


# ============ Notifications ============

def mark_notification_read(actor: User, notification_id: int) -> Notification:
    """Only the addressee, or any admin for the shared admin mailbox, may mark."""

    notification = notifications_dao.get_notification_by_id(notification_id)
    if notification is None:
        raise NotFound("Notification", notification_id)
    if notification.for_admins:
        allowed = actor.is_admin
    else:
        allowed = notification.audience == actor.user_id
    if not allowed:
        raise Forbidden("Not authorized to update this notification")
    return notifications_dao.mark_read(notification_id)
