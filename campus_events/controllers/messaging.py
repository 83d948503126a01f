"""Direct messaging between campus users."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_login import current_user, login_required
from wtforms import IntegerField, TextAreaField
from wtforms.validators import InputRequired, Length, Optional

from ..data_access import clubs_dao, events_dao, messages_dao, users_dao
from ..errors import NotFound
from .forms import ApiForm, bind_form, int_arg

bp = Blueprint("messaging", __name__, url_prefix="/api/messages")


class MessageForm(ApiForm):
    """Payload for sending a message."""

    recipient_id = IntegerField("Recipient", validators=[InputRequired()], name="recipientId")
    content = TextAreaField("Message", validators=[InputRequired(), Length(max=2000)])
    event_id = IntegerField("Event", validators=[Optional()], name="eventId")
    club_id = IntegerField("Club", validators=[Optional()], name="clubId")


@bp.route("", methods=["POST"])
@login_required
def send():
    """Send a message to another user."""

    form = bind_form(MessageForm)
    if users_dao.get_user_by_id(form.recipient_id.data) is None:
        raise NotFound("Recipient", form.recipient_id.data)
    if form.event_id.data is not None and events_dao.get_event_by_id(form.event_id.data) is None:
        raise NotFound("Event", form.event_id.data)
    if form.club_id.data is not None and clubs_dao.get_club_by_id(form.club_id.data) is None:
        raise NotFound("Club", form.club_id.data)
    message = messages_dao.post_message(
        sender_id=current_user.user_id,
        recipient_id=form.recipient_id.data,
        content=form.content.data,
        event_id=form.event_id.data,
        club_id=form.club_id.data,
    )
    return jsonify(message.to_dict()), 201


@bp.route("", methods=["GET"])
@login_required
def inbox():
    """Messages the caller sent or received, with sender profiles attached."""

    messages = messages_dao.list_messages_for_user(
        current_user.user_id,
        club_id=int_arg("clubId"),
        event_id=int_arg("eventId"),
    )
    items = []
    for message in messages:
        sender = users_dao.get_user_by_id(message.sender_id)
        body = message.to_dict()
        body["sender"] = sender.to_public_dict() if sender else None
        items.append(body)
    return jsonify(items)
