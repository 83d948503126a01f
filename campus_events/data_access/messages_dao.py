"""Data access helpers for direct messages."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from ..models.entities import Message
from .store import get_store


def post_message(
    sender_id: int,
    recipient_id: int,
    content: str,
    event_id: Optional[int] = None,
    club_id: Optional[int] = None,
) -> Message:
    """Append a message; messages are never edited afterwards."""

    store = get_store()
    message = Message(
        message_id=store.messages.next_id(),
        sender_id=sender_id,
        recipient_id=recipient_id,
        content=content,
        event_id=event_id,
        club_id=club_id,
        created_at=datetime.now(timezone.utc),
    )
    return store.messages.add(message)


def list_messages_for_user(
    user_id: int,
    club_id: Optional[int] = None,
    event_id: Optional[int] = None,
) -> list[Message]:
    """Messages the user sent or received, narrowed by club and event."""

    def _matches(message: Message) -> bool:
        if user_id not in (message.sender_id, message.recipient_id):
            return False
        if club_id is not None and message.club_id != club_id:
            return False
        if event_id is not None and message.event_id != event_id:
            return False
        return True

    return get_store().messages.filter(_matches)
