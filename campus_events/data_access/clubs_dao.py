"""Data access helpers for clubs and memberships."""

from __future__ import annotations

from datetime import datetime, timezone

from ..errors import NotFound
from ..models.entities import Club
from .store import get_store


def create_club(name: str, description: str, category: str) -> Club:
    """Insert a new club with no members."""

    store = get_store()
    club = Club(
        club_id=store.clubs.next_id(),
        name=name,
        description=description,
        category=category,
        created_at=datetime.now(timezone.utc),
    )
    return store.clubs.add(club)


def get_club_by_id(club_id: int) -> Club | None:
    return get_store().clubs.get(club_id)


def list_clubs() -> list[Club]:
    return get_store().clubs.all()


def add_member(club_id: int, user_id: int) -> Club:
    """Idempotently add a user to a club and the club to the user.

    Both sides are written while holding the store lock, so no caller ever
    observes one side updated without the other.
    """

    store = get_store()
    with store.lock:
        club = store.clubs.get(club_id)
        if club is None:
            raise NotFound("Club", club_id)
        user = store.users.get(user_id)
        if user is None:
            raise NotFound("User", user_id)
        if user_id not in club.members:
            club.members.append(user_id)
        if club_id not in user.clubs:
            user.clubs.append(club_id)
        return club
