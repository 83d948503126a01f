"""JSON request binding on top of Flask-WTF forms."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Type, TypeVar

from flask import request
from flask_wtf import FlaskForm
from werkzeug.datastructures import ImmutableMultiDict
from wtforms import Field, StringField
from wtforms.validators import ValidationError as WTFormsValidationError
from wtforms.widgets import TextInput

from ..errors import ValidationError

F = TypeVar("F", bound=FlaskForm)


class ApiForm(FlaskForm):
    """Base form for JSON bodies; bearer tokens make CSRF tokens moot."""

    class Meta:
        csrf = False


class IsoDateTimeField(Field):
    """ISO 8601 timestamp; naive values are read as UTC."""

    widget = TextInput()

    def _value(self) -> str:
        return self.data.isoformat() if self.data else ""

    def process_formdata(self, valuelist):
        if not valuelist or valuelist[0] in (None, ""):
            self.data = None
            return
        raw = str(valuelist[0]).strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(raw)
        except ValueError as exc:
            self.data = None
            raise ValueError("Not a valid ISO 8601 timestamp.") from exc
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        self.data = value


def json_payload() -> dict[str, Any]:
    """Return the JSON object body, or an empty dict when absent."""

    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object.")
    return payload


def bind_form(form_cls: Type[F], payload: dict[str, Any] | None = None) -> F:
    """Validate a JSON body against ``form_cls`` or raise ValidationError."""

    payload = json_payload() if payload is None else payload
    # Nulls count as absent; lists are passed to the view separately.
    scalars = {
        key: value
        for key, value in payload.items()
        if value is not None and not isinstance(value, (list, dict))
    }
    form = form_cls(formdata=ImmutableMultiDict(scalars))
    # Text fields only accept JSON strings; numbers and booleans are refused.
    type_errors = {
        attr: ["Must be a string."]
        for attr, field in form._fields.items()
        if isinstance(field, StringField)
        and field.name in scalars
        and not isinstance(scalars[field.name], str)
    }
    if type_errors:
        raise ValidationError("Invalid request payload.", details=type_errors)
    if not form.validate():
        raise ValidationError("Invalid request payload.", details=form.errors)
    return form


def int_arg(name: str) -> int | None:
    """Read an optional integer query parameter, refusing non-integers."""

    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValidationError(f"{name} must be an integer.") from exc


class MaxBytes:
    """Cap the UTF-8 encoded length of a text field."""

    def __init__(self, limit: int, message: str | None = None):
        self.limit = limit
        self.message = message or f"Must be at most {limit} bytes."

    def __call__(self, form, field):
        if field.data and len(field.data.encode("utf-8")) > self.limit:
            raise WTFormsValidationError(self.message)
