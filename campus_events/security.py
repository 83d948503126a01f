"""Bearer token issuing/verification and role checks.

Tokens are HS256 JWTs carrying ``{id, email, role}`` plus ``iat``/``exp``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable, Optional

import jwt
from flask import current_app

from .errors import Forbidden, InvalidToken, Unauthenticated
from .models.entities import Role, User

BEARER_PREFIX = "bearer"


def issue_token(user: User) -> str:
    """Sign a token for ``user`` valid for ``TOKEN_TTL``."""

    now = datetime.now(timezone.utc)
    payload = {
        "id": user.user_id,
        "email": user.email,
        "role": user.role.value,
        "iat": now,
        "exp": now + current_app.config["TOKEN_TTL"],
    }
    return jwt.encode(
        payload,
        current_app.config["JWT_SECRET_KEY"],
        algorithm=current_app.config["JWT_ALGORITHM"],
    )


def resolve_token(token: Optional[str]) -> dict[str, Any]:
    """Decode and validate a token.

    Raises Unauthenticated when no token is given and InvalidToken when the
    signature, expiry or claims do not check out.
    """

    if not token:
        raise Unauthenticated()
    try:
        claims = jwt.decode(
            token,
            current_app.config["JWT_SECRET_KEY"],
            algorithms=[current_app.config["JWT_ALGORITHM"]],
            options={"require": ["exp", "iat"]},
        )
    except jwt.InvalidTokenError as exc:
        raise InvalidToken() from exc
    for claim in ("id", "email", "role"):
        if claim not in claims:
            raise InvalidToken()
    try:
        claims["role"] = Role(claims["role"])
    except ValueError as exc:
        raise InvalidToken() from exc
    return claims


def token_from_header(header_value: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""

    if not header_value:
        return None
    scheme, _, token = header_value.partition(" ")
    if scheme.lower() != BEARER_PREFIX or not token.strip():
        return None
    return token.strip()


def require_role(role: Role, allowed: Iterable[Role]) -> None:
    """Raise Forbidden unless ``role`` belongs to ``allowed``."""

    if Role(role) not in set(allowed):
        raise Forbidden()
