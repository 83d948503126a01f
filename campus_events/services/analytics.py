"""Aggregate statistics and exports for the admin dashboard."""

from __future__ import annotations

import csv
import io
from datetime import datetime, timezone
from typing import Any, Optional

from ..data_access import bookings_dao, clubs_dao, events_dao, resources_dao
from ..models.entities import BookingStatus, EventStatus

RECENT_LIMIT = 5
CSV_HEADER = ["Event Title", "Status", "Type", "Budget", "Created Date"]


def _average(total: float, count: int, digits: int) -> float:
    return round(total / count, digits) if count else 0


def build_summary(now: Optional[datetime] = None) -> dict[str, Any]:
    """Compute the dashboard statistics object."""

    now = now or datetime.now(timezone.utc)
    events = events_dao.list_events()
    resources = resources_dao.list_resources()
    bookings = bookings_dao.list_bookings()
    clubs = clubs_dao.list_clubs()

    approved_bookings = sum(1 for booking in bookings if booking.status is BookingStatus.APPROVED)
    total_members = sum(len(club.members) for club in clubs)
    total_budget = sum(event.budget or 0 for event in events)

    return {
        "eventStats": {
            "total": len(events),
            "approved": sum(1 for event in events if event.status is EventStatus.APPROVED),
            "pending": sum(1 for event in events if event.status is EventStatus.DRAFT),
            "thisMonth": sum(
                1
                for event in events
                if event.created_at.year == now.year and event.created_at.month == now.month
            ),
        },
        "resourceStats": {
            "total": len(resources),
            "available": sum(1 for resource in resources if resource.available),
            "booked": approved_bookings,
            "utilizationRate": _average(approved_bookings * 100, len(resources), 1),
        },
        "clubStats": {
            "total": len(clubs),
            "totalMembers": total_members,
            "averageMembers": _average(total_members, len(clubs), 1),
        },
        "budgetStats": {
            "totalBudget": total_budget,
            "averageBudget": _average(total_budget, len(events), 2),
        },
        "recentActivity": {
            "recentEvents": [event.to_dict() for event in reversed(events[-RECENT_LIMIT:])],
            "recentBookings": [booking.to_dict() for booking in reversed(bookings[-RECENT_LIMIT:])],
        },
    }


def export_json(now: Optional[datetime] = None) -> dict[str, Any]:
    """Full dump of events, resources, bookings and clubs."""

    now = now or datetime.now(timezone.utc)
    return {
        "events": [event.to_dict() for event in events_dao.list_events()],
        "resources": [resource.to_dict() for resource in resources_dao.list_resources()],
        "bookings": [booking.to_dict() for booking in bookings_dao.list_bookings()],
        "clubs": [club.to_dict() for club in clubs_dao.list_clubs()],
        "exportDate": now.isoformat(),
    }


def export_events_csv() -> str:
    """One CSV row per event."""

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for event in events_dao.list_events():
        writer.writerow(
            [
                event.title,
                event.status.value,
                event.event_type.value,
                event.budget,
                event.created_at.isoformat(),
            ]
        )
    return buffer.getvalue()
