"""In-memory store with one repository per entity type."""

from __future__ import annotations

import itertools
import threading
from typing import Callable, Generic, Optional, TypeVar

import click
from flask import Flask, current_app

from ..models.entities import Booking, Club, Event, Message, Notification, Resource, User

T = TypeVar("T")

EXTENSION_KEY = "campus_store"


class Repository(Generic[T]):
    """Keyed collection preserving insertion order with sequential ids."""

    def __init__(self, id_attr: str):
        self._id_attr = id_attr
        self._rows: dict[int, T] = {}
        self._ids = itertools.count(1)

    def next_id(self) -> int:
        return next(self._ids)

    def add(self, entity: T) -> T:
        self._rows[getattr(entity, self._id_attr)] = entity
        return entity

    def get(self, entity_id: int) -> Optional[T]:
        return self._rows.get(entity_id)

    def remove(self, entity_id: int) -> Optional[T]:
        return self._rows.pop(entity_id, None)

    def all(self) -> list[T]:
        return list(self._rows.values())

    def filter(self, predicate: Callable[[T], bool]) -> list[T]:
        return [row for row in self._rows.values() if predicate(row)]

    def first(self, predicate: Callable[[T], bool]) -> Optional[T]:
        return next((row for row in self._rows.values() if predicate(row)), None)

    def __len__(self) -> int:
        return len(self._rows)


class InMemoryStore:
    """Process-local state for every entity type.

    ``lock`` serialises check-then-act sequences (booking conflict check then
    insert, club membership add then user update) when Flask serves requests
    on several threads.
    """

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.users: Repository[User] = Repository("user_id")
        self.events: Repository[Event] = Repository("event_id")
        self.resources: Repository[Resource] = Repository("resource_id")
        self.bookings: Repository[Booking] = Repository("booking_id")
        self.clubs: Repository[Club] = Repository("club_id")
        self.notifications: Repository[Notification] = Repository("notification_id")
        self.messages: Repository[Message] = Repository("message_id")


def get_store() -> InMemoryStore:
    """Return the store bound to the active application."""

    return current_app.extensions[EXTENSION_KEY]


def init_app(app: Flask, store: InMemoryStore | None = None) -> None:
    """Attach a store to the Flask app and register CLI helpers."""

    app.extensions[EXTENSION_KEY] = store or InMemoryStore()

    @app.cli.command("issue-token")
    @click.argument("email")
    def issue_token_command(email: str) -> None:
        """Print a bearer token for an existing (seeded) user."""

        from ..security import issue_token  # pylint: disable=import-outside-toplevel
        from . import users_dao  # pylint: disable=import-outside-toplevel

        user = users_dao.get_user_by_email(email)
        if user is None:
            raise click.ClickException(f"No user with email {email}.")
        click.echo(issue_token(user))
