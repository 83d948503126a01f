"""Deterministic seed data for the Campus Events Hub."""

from __future__ import annotations

from datetime import datetime, time, timedelta, timezone

from ..models.entities import BookingStatus, EventStatus, EventType, Role
from . import bookings_dao, clubs_dao, events_dao, resources_dao, users_dao

DEMO_PASSWORD = "Password123!"

USERS = [
    ("Ada Admin", "ada.admin@campus.edu", Role.ADMIN, "IT Services", ""),
    ("Olu Organizer", "olu.organizer@campus.edu", Role.ORGANIZER, "Student Life", "4"),
    ("Alice Student", "alice@student.edu", Role.PARTICIPANT, "Computer Science", "2"),
    ("Ben Student", "ben@student.edu", Role.PARTICIPANT, "Biology", "1"),
]

RESOURCES = [
    ("Main Auditorium", "venue", "Tiered seating with stage lighting.", 300),
    ("Seminar Room 2B", "room", "Whiteboards and a ceiling projector.", 30),
    ("Portable PA System", "equipment", "Two speakers, mixer and wireless microphones.", None),
]

CLUBS = [
    ("Robotics Society", "technology", "Build and race autonomous robots."),
    ("Debate Union", "academic", "Weekly motions and inter-campus tournaments."),
]


def seed() -> None:
    """Populate the store with representative demo records."""

    if users_dao.get_user_by_email(USERS[0][1]) is not None:
        return

    password_hash = users_dao.hash_password(DEMO_PASSWORD)
    users = {}
    for name, email, role, department, year in USERS:
        users[email] = users_dao.create_user(
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            department=department,
            year=year,
        )

    resources = [
        resources_dao.create_resource(name=name, category=category, description=description, capacity=capacity)
        for name, category, description, capacity in RESOURCES
    ]
    clubs = [
        clubs_dao.create_club(name=name, category=category, description=description)
        for name, category, description in CLUBS
    ]

    admin = users["ada.admin@campus.edu"]
    organizer = users["olu.organizer@campus.edu"]
    student = users["alice@student.edu"]
    clubs_dao.add_member(clubs[0].club_id, student.user_id)

    today = datetime.now(timezone.utc).date()
    next_week = datetime.combine(today + timedelta(days=7), time(9, 0), tzinfo=timezone.utc)

    events_dao.create_event(
        title="Welcome Week Fair",
        description="Meet every club on campus.",
        start_date=next_week,
        end_date=next_week + timedelta(days=2),
        organizer_id=admin.user_id,
        status=EventStatus.APPROVED,
        event_type=EventType.MULTI_DAY,
        budget=1500.0,
    )
    robotics_demo = events_dao.create_event(
        title="Robotics Demo Night",
        description="Showcase of this term's builds.",
        start_date=next_week + timedelta(hours=9),
        end_date=next_week + timedelta(hours=12),
        organizer_id=organizer.user_id,
        status=EventStatus.DRAFT,
        club_id=clubs[0].club_id,
        budget=250.0,
    )

    booking = bookings_dao.create_booking(
        resource_id=resources[0].resource_id,
        requester_id=organizer.user_id,
        start_time=next_week + timedelta(hours=9),
        end_time=next_week + timedelta(hours=12),
        purpose="Robotics Demo Night",
        event_id=robotics_demo.event_id,
    )
    bookings_dao.update_booking_status(booking.booking_id, BookingStatus.APPROVED)
    bookings_dao.create_booking(
        resource_id=resources[1].resource_id,
        requester_id=student.user_id,
        start_time=next_week + timedelta(days=1, hours=5),
        end_time=next_week + timedelta(days=1, hours=7),
        purpose="Study group",
    )
