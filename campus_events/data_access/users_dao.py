"""Data access helpers for users."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import bcrypt
from flask import current_app

from ..errors import Conflict
from ..models.entities import Role, User
from .store import get_store

# bcrypt refuses passwords longer than this many bytes.
MAX_PASSWORD_BYTES = 72


def _normalise_email(email: str) -> str:
    return email.strip().lower()


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with the configured bcrypt cost."""

    cost = rounds or current_app.config["BCRYPT_ROUNDS"]
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=cost)).decode("utf-8")


def create_user(
    name: str,
    email: str,
    password_hash: str,
    role: Role = Role.PARTICIPANT,
    department: Optional[str] = None,
    year: Optional[str] = None,
) -> User:
    """Insert a new user, refusing duplicate email addresses."""

    store = get_store()
    email = _normalise_email(email)
    with store.lock:
        if get_user_by_email(email) is not None:
            raise Conflict("User already exists")
        user = User(
            user_id=store.users.next_id(),
            name=name,
            email=email,
            password_hash=password_hash,
            role=Role(role),
            department=department or "",
            year=year or "",
            created_at=datetime.now(timezone.utc),
        )
        return store.users.add(user)


def get_user_by_id(user_id: int) -> User | None:
    """Fetch a user by primary key."""

    return get_store().users.get(user_id)


def get_user_by_email(email: str) -> User | None:
    """Fetch a user by unique email address."""

    target = _normalise_email(email)
    return get_store().users.first(lambda user: user.email == target)


def verify_password(stored_hash: str, candidate: str) -> bool:
    """Compare a stored hash against a candidate password."""

    if not stored_hash:
        return False
    encoded = candidate.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, stored_hash.encode("utf-8"))
