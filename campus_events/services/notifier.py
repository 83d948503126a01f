"""Dispatcher for notification drafts emitted by workflow transitions."""

from __future__ import annotations

from typing import Iterable

from flask import current_app

from ..data_access import notifications_dao
from ..models.entities import Notification, NotificationDraft


def dispatch(drafts: Iterable[NotificationDraft]) -> list[Notification]:
    """Store every draft. Delivery is best effort with no retries."""

    stored = []
    for draft in drafts:
        notification = notifications_dao.create_notification(draft)
        current_app.logger.info(
            "Notification %s (%s) queued for %s",
            notification.notification_id,
            notification.kind.value,
            notification.audience,
        )
        stored.append(notification)
    return stored
