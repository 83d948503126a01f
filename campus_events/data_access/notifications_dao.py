"""Data access helpers for notifications."""

from __future__ import annotations

from datetime import datetime, timezone

from ..models.entities import ADMIN_AUDIENCE, Notification, NotificationDraft, User
from .store import get_store


def create_notification(draft: NotificationDraft) -> Notification:
    """Persist a notification draft produced by a workflow transition."""

    store = get_store()
    notification = Notification(
        notification_id=store.notifications.next_id(),
        audience=draft.audience,
        kind=draft.kind,
        message=draft.message,
        event_id=draft.event_id,
        booking_id=draft.booking_id,
        created_at=datetime.now(timezone.utc),
    )
    return store.notifications.add(notification)


def get_notification_by_id(notification_id: int) -> Notification | None:
    return get_store().notifications.get(notification_id)


def list_for_user(user: User) -> list[Notification]:
    """Own notifications, plus the shared admin mailbox for admins."""

    def _visible(notification: Notification) -> bool:
        if notification.audience == user.user_id:
            return True
        return user.is_admin and notification.audience == ADMIN_AUDIENCE

    return get_store().notifications.filter(_visible)


def list_notifications() -> list[Notification]:
    return get_store().notifications.all()


def mark_read(notification_id: int) -> Notification | None:
    notification = get_notification_by_id(notification_id)
    if notification is not None:
        notification.read = True
    return notification
