"""Data access helpers for bookings."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from flask import current_app

from ..errors import Conflict, ValidationError
from ..models.entities import Booking, BookingStatus
from .store import get_store


def create_booking(
    resource_id: int,
    requester_id: int,
    start_time: datetime,
    end_time: datetime,
    purpose: str,
    event_id: Optional[int] = None,
) -> Booking:
    """Insert a new pending booking after validating conflicts."""

    if end_time <= start_time:
        raise ValidationError("End time must be after start time.")

    store = get_store()
    with store.lock:
        if has_conflict(resource_id, start_time, end_time):
            current_app.logger.info(
                "Booking conflict on resource %s for %s - %s", resource_id, start_time, end_time
            )
            raise Conflict("Resource is already booked for this time slot")
        now = datetime.now(timezone.utc)
        booking = Booking(
            booking_id=store.bookings.next_id(),
            resource_id=resource_id,
            requester_id=requester_id,
            start_time=start_time,
            end_time=end_time,
            purpose=purpose,
            status=BookingStatus.PENDING,
            event_id=event_id,
            created_at=now,
            updated_at=now,
        )
        return store.bookings.add(booking)


def get_booking_by_id(booking_id: int) -> Booking | None:
    """Fetch a specific booking."""

    return get_store().bookings.get(booking_id)


def update_booking_status(booking_id: int, status: BookingStatus) -> Booking | None:
    """Update booking status and timestamp."""

    booking = get_booking_by_id(booking_id)
    if booking is None:
        return None
    booking.status = status
    booking.updated_at = datetime.now(timezone.utc)
    return booking


def list_bookings() -> list[Booking]:
    return get_store().bookings.all()


def list_bookings_for_user(user_id: int) -> list[Booking]:
    """Return bookings initiated by a requester."""

    return get_store().bookings.filter(lambda booking: booking.requester_id == user_id)


def list_bookings_for_resource(resource_id: int) -> list[Booking]:
    """Return bookings for a specific resource."""

    return get_store().bookings.filter(lambda booking: booking.resource_id == resource_id)


def has_conflict(
    resource_id: int,
    start_time: datetime,
    end_time: datetime,
    exclude_booking_id: Optional[int] = None,
) -> bool:
    """Return True when [start_time, end_time) overlaps a pending/approved slot."""

    for booking in list_bookings_for_resource(resource_id):
        if exclude_booking_id is not None and booking.booking_id == exclude_booking_id:
            continue
        if booking.blocks_resource and booking.overlaps(start_time, end_time):
            return True
    return False
