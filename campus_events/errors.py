"""Business exceptions raised by the workflow engine and the API layer.

Every exception carries the HTTP status it maps to so the error handlers in
``app.py`` can answer uniformly with ``{"error": message}``.
"""

from __future__ import annotations

from typing import Any, Optional


class ApiError(Exception):
    """Base class for every error surfaced to API clients."""

    status_code = 500
    default_message = "An unexpected error occurred."

    def __init__(self, message: Optional[str] = None, details: Optional[dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class InternalError(ApiError):
    """Unexpected failure while handling a request."""


# ============ Input errors ============

class ValidationError(ApiError):
    """Missing or malformed request input."""

    status_code = 400
    default_message = "The request payload is invalid."


class InvalidCredentials(ValidationError):
    """Email/password pair did not match a user."""

    default_message = "Invalid credentials"


class InvalidTransition(ValidationError):
    """A workflow status change that the state machine does not allow."""

    def __init__(self, entity: str, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move {entity} from '{current}' to '{requested}'")


class Conflict(ApiError):
    """Booking overlap or duplicate registration."""

    status_code = 400
    default_message = "The request conflicts with existing data."


# ============ Identity errors ============

class Unauthenticated(ApiError):
    """No bearer token was supplied."""

    status_code = 401
    default_message = "Access token required"


class InvalidToken(Unauthenticated):
    """The bearer token is malformed, tampered with, or expired."""

    status_code = 403
    default_message = "Invalid or expired token"


class Forbidden(ApiError):
    """The caller's role or ownership does not permit the operation."""

    status_code = 403
    default_message = "Insufficient permissions"


# ============ Lookup errors ============

class NotFound(ApiError):
    """An entity id did not resolve."""

    status_code = 404
    default_message = "Not found"

    def __init__(self, entity: str, entity_id: Any = None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")
