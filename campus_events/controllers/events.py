"""Event workflow blueprint."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required
from wtforms import FloatField, IntegerField, StringField, TextAreaField
from wtforms.validators import AnyOf, InputRequired, Length, NumberRange, Optional

from ..errors import ValidationError
from ..models.entities import EventStatus, EventType, Role
from ..services import notifier, workflow
from .auth import role_required
from .forms import ApiForm, IsoDateTimeField, bind_form, int_arg, json_payload

bp = Blueprint("events", __name__, url_prefix="/api/events")

EVENT_TYPES = [event_type.value for event_type in EventType]

# JSON key -> Event attribute for partial updates.
UPDATE_FIELD_MAP = {
    "title": "title",
    "description": "description",
    "startDate": "start_date",
    "endDate": "end_date",
    "type": "event_type",
    "club": "club_id",
    "budget": "budget",
    "participantCount": "participant_count",
}
REQUIRED_ON_UPDATE = {"title", "description", "start_date", "end_date"}
CLEARABLE_ON_UPDATE = {"club_id"}


class EventForm(ApiForm):
    """Payload for creating an event."""

    title = StringField("Title", validators=[InputRequired(), Length(max=200)])
    description = TextAreaField("Description", validators=[InputRequired(), Length(max=5000)])
    start_date = IsoDateTimeField("Start", validators=[InputRequired()], name="startDate")
    end_date = IsoDateTimeField("End", validators=[InputRequired()], name="endDate")
    event_type = StringField(
        "Type",
        validators=[Optional(), AnyOf(EVENT_TYPES)],
        default=EventType.SINGLE_DAY.value,
        name="type",
    )
    club_id = IntegerField("Club", validators=[Optional()], name="club")
    budget = FloatField("Budget", validators=[Optional(), NumberRange(min=0)], default=0.0)


class EventUpdateForm(ApiForm):
    """Partial update payload; every field is optional."""

    title = StringField("Title", validators=[Optional(), Length(max=200)])
    description = TextAreaField("Description", validators=[Optional(), Length(max=5000)])
    start_date = IsoDateTimeField("Start", validators=[Optional()], name="startDate")
    end_date = IsoDateTimeField("End", validators=[Optional()], name="endDate")
    event_type = StringField("Type", validators=[Optional(), AnyOf(EVENT_TYPES)], name="type")
    club_id = IntegerField("Club", validators=[Optional()], name="club")
    budget = FloatField("Budget", validators=[Optional(), NumberRange(min=0)])
    participant_count = IntegerField(
        "Participants", validators=[Optional(), NumberRange(min=0)], name="participantCount"
    )


class StatusForm(ApiForm):
    status = StringField(
        "Status",
        validators=[InputRequired(), AnyOf([EventStatus.APPROVED.value, EventStatus.REJECTED.value])],
    )


def _collaborators(payload: dict) -> list[str] | None:
    value = payload.get("collaborators")
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValidationError("collaborators must be a list.")
    return [str(item) for item in value]


@bp.route("", methods=["POST"])
@role_required(Role.ORGANIZER, Role.ADMIN)
def create():
    """Create an event; organizer events wait for admin approval."""

    payload = json_payload()
    form = bind_form(EventForm, payload)
    transition = workflow.create_event(
        current_user,
        title=form.title.data,
        description=form.description.data,
        start_date=form.start_date.data,
        end_date=form.end_date.data,
        event_type=EventType(form.event_type.data or EventType.SINGLE_DAY.value),
        club_id=form.club_id.data,
        budget=form.budget.data or 0.0,
        collaborators=_collaborators(payload),
    )
    notifier.dispatch(transition.notifications)
    return jsonify(transition.entity.to_dict()), 201


@bp.route("", methods=["GET"])
@login_required
def list_events():
    """List events visible to the caller, filtered by status, club and type."""

    events = workflow.visible_events(
        current_user,
        status=request.args.get("status") or None,
        club_id=int_arg("club"),
        event_type=request.args.get("type") or None,
    )
    return jsonify([event.to_dict() for event in events])


@bp.route("/<int:event_id>", methods=["GET"])
@login_required
def detail(event_id: int):
    return jsonify(workflow.get_event(event_id).to_dict())


@bp.route("/<int:event_id>", methods=["PUT"])
@login_required
def update(event_id: int):
    """Apply a partial update from the owner or an admin."""

    payload = json_payload()
    form = bind_form(EventUpdateForm, payload)
    changes = {}
    for key, attr in UPDATE_FIELD_MAP.items():
        if key not in payload:
            continue
        value = getattr(form, attr).data
        if value in (None, ""):
            if attr in REQUIRED_ON_UPDATE:
                raise ValidationError(f"{key} cannot be empty.")
            if attr in CLEARABLE_ON_UPDATE:
                changes[attr] = None
            continue
        changes[attr] = value
    if "event_type" in changes:
        changes["event_type"] = EventType(changes["event_type"])
    if "collaborators" in payload:
        changes["collaborators"] = _collaborators(payload) or []
    event = workflow.update_event(current_user, event_id, changes)
    return jsonify(event.to_dict())


@bp.route("/<int:event_id>/status", methods=["PATCH"])
@role_required(Role.ADMIN)
def set_status(event_id: int):
    """Approve or reject a draft event."""

    form = bind_form(StatusForm)
    transition = workflow.set_event_status(current_user, event_id, EventStatus(form.status.data))
    notifier.dispatch(transition.notifications)
    return jsonify(transition.entity.to_dict())


@bp.route("/<int:event_id>", methods=["DELETE"])
@login_required
def delete(event_id: int):
    workflow.delete_event(current_user, event_id)
    return jsonify({"message": "Event deleted successfully"})
