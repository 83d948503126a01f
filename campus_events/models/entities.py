"""Dataclass-style entity representations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union

from flask_login import UserMixin

ADMIN_AUDIENCE = "admin"


class Role(str, Enum):
    """Closed set of account roles."""

    PARTICIPANT = "participant"
    ORGANIZER = "organizer"
    ADMIN = "admin"


class EventStatus(str, Enum):
    DRAFT = "draft"
    APPROVED = "approved"
    REJECTED = "rejected"


class EventType(str, Enum):
    SINGLE_DAY = "single-day"
    MULTI_DAY = "multi-day"


class BookingStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class NotificationKind(str, Enum):
    EVENT_APPROVAL = "event_approval"
    EVENT_STATUS = "event_status"
    BOOKING_REQUEST = "booking_request"
    BOOKING_STATUS = "booking_status"


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class User(UserMixin):
    """User entity compatible with Flask-Login."""

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    department: str
    year: str
    created_at: datetime
    clubs: list[int] = field(default_factory=list)

    def get_id(self) -> str:
        return str(self.user_id)

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def to_public_dict(self) -> dict[str, Any]:
        """Profile fields safe to hand to any authenticated caller."""

        return {
            "id": self.user_id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
            "department": self.department,
            "year": self.year,
            "clubs": list(self.clubs),
        }


@dataclass
class Event:
    """Campus event moving through the approval workflow."""

    event_id: int
    title: str
    description: str
    start_date: datetime
    end_date: datetime
    event_type: EventType
    organizer_id: int
    status: EventStatus
    created_at: datetime
    club_id: Optional[int] = None
    budget: float = 0.0
    collaborators: list[str] = field(default_factory=list)
    participant_count: int = 0
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.event_id,
            "title": self.title,
            "description": self.description,
            "startDate": _iso(self.start_date),
            "endDate": _iso(self.end_date),
            "type": self.event_type.value,
            "club": self.club_id,
            "budget": self.budget,
            "collaborators": list(self.collaborators),
            "organizerId": self.organizer_id,
            "status": self.status.value,
            "participantCount": self.participant_count,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


@dataclass
class Resource:
    """Bookable campus resource."""

    resource_id: int
    name: str
    category: str
    description: str
    created_at: datetime
    capacity: Optional[int] = None
    available: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.resource_id,
            "name": self.name,
            "type": self.category,
            "description": self.description,
            "capacity": self.capacity,
            "available": self.available,
            "createdAt": _iso(self.created_at),
        }


@dataclass
class Booking:
    """Resource booking request over the half-open window [start, end)."""

    booking_id: int
    resource_id: int
    requester_id: int
    start_time: datetime
    end_time: datetime
    purpose: str
    status: BookingStatus
    created_at: datetime
    event_id: Optional[int] = None
    updated_at: Optional[datetime] = None

    @property
    def blocks_resource(self) -> bool:
        return self.status is not BookingStatus.REJECTED

    def overlaps(self, start: datetime, end: datetime) -> bool:
        return self.start_time < end and self.end_time > start

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.booking_id,
            "resourceId": self.resource_id,
            "userId": self.requester_id,
            "startTime": _iso(self.start_time),
            "endTime": _iso(self.end_time),
            "purpose": self.purpose,
            "eventId": self.event_id,
            "status": self.status.value,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


@dataclass
class Club:
    """Student club with a member roster."""

    club_id: int
    name: str
    category: str
    description: str
    created_at: datetime
    members: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.club_id,
            "name": self.name,
            "category": self.category,
            "description": self.description,
            "members": list(self.members),
            "createdAt": _iso(self.created_at),
        }


@dataclass
class Notification:
    """Side-effect record addressed to a user id or the admin mailbox."""

    notification_id: int
    audience: Union[int, str]
    kind: NotificationKind
    message: str
    created_at: datetime
    event_id: Optional[int] = None
    booking_id: Optional[int] = None
    read: bool = False

    @property
    def for_admins(self) -> bool:
        return self.audience == ADMIN_AUDIENCE

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.notification_id,
            "userId": self.audience,
            "type": self.kind.value,
            "message": self.message,
            "eventId": self.event_id,
            "bookingId": self.booking_id,
            "read": self.read,
            "createdAt": _iso(self.created_at),
        }


@dataclass(frozen=True)
class NotificationDraft:
    """Notification produced by a workflow transition, not yet stored."""

    audience: Union[int, str]
    kind: NotificationKind
    message: str
    event_id: Optional[int] = None
    booking_id: Optional[int] = None


@dataclass
class Message:
    """A direct message, optionally tied to an event or club."""

    message_id: int
    sender_id: int
    recipient_id: int
    content: str
    created_at: datetime
    event_id: Optional[int] = None
    club_id: Optional[int] = None
    read: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.message_id,
            "senderId": self.sender_id,
            "recipientId": self.recipient_id,
            "content": self.content,
            "eventId": self.event_id,
            "clubId": self.club_id,
            "read": self.read,
            "createdAt": _iso(self.created_at),
        }
