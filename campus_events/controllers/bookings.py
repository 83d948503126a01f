"""Booking workflow blueprint."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_login import current_user, login_required
from wtforms import IntegerField, StringField, TextAreaField
from wtforms.validators import AnyOf, InputRequired, Length, Optional

from ..data_access import resources_dao
from ..models.entities import BookingStatus, Role
from ..services import notifier, workflow
from .auth import role_required
from .forms import ApiForm, IsoDateTimeField, bind_form

bp = Blueprint("bookings", __name__, url_prefix="/api/bookings")


class BookingRequestForm(ApiForm):
    """Payload to request a reservation."""

    resource_id = IntegerField("Resource", validators=[InputRequired()], name="resourceId")
    start_time = IsoDateTimeField(
        "Start",
        validators=[InputRequired(message="Please provide a start time.")],
        name="startTime",
    )
    end_time = IsoDateTimeField(
        "End",
        validators=[InputRequired(message="Please provide an end time.")],
        name="endTime",
    )
    purpose = TextAreaField("Purpose", validators=[Optional(), Length(max=1000)])
    event_id = IntegerField("Event", validators=[Optional()], name="eventId")


class BookingStatusForm(ApiForm):
    status = StringField(
        "Status",
        validators=[InputRequired(), AnyOf([BookingStatus.APPROVED.value, BookingStatus.REJECTED.value])],
    )


@bp.route("", methods=["POST"])
@login_required
def create():
    """Create a pending booking unless the window is already taken."""

    form = bind_form(BookingRequestForm)
    transition = workflow.request_booking(
        current_user,
        resource_id=form.resource_id.data,
        start_time=form.start_time.data,
        end_time=form.end_time.data,
        purpose=form.purpose.data or "",
        event_id=form.event_id.data,
    )
    notifier.dispatch(transition.notifications)
    return jsonify(transition.entity.to_dict()), 201


@bp.route("", methods=["GET"])
@login_required
def list_bookings():
    """Own bookings, or every booking for admins, with the resource attached."""

    items = []
    for booking in workflow.visible_bookings(current_user):
        resource = resources_dao.get_resource_by_id(booking.resource_id)
        body = booking.to_dict()
        body["resource"] = resource.to_dict() if resource else None
        items.append(body)
    return jsonify(items)


@bp.route("/<int:booking_id>/status", methods=["PATCH"])
@role_required(Role.ADMIN)
def set_status(booking_id: int):
    """Approve or reject a pending booking."""

    form = bind_form(BookingStatusForm)
    transition = workflow.set_booking_status(current_user, booking_id, BookingStatus(form.status.data))
    notifier.dispatch(transition.notifications)
    return jsonify(transition.entity.to_dict())
