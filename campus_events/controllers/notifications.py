"""Notification inbox blueprint."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from ..data_access import notifications_dao
from ..services import workflow

bp = Blueprint("notifications", __name__, url_prefix="/api/notifications")


@bp.route("", methods=["GET"])
@login_required
def list_notifications():
    """Own notifications plus the shared admin mailbox for admins."""

    notifications = notifications_dao.list_for_user(current_user)
    return jsonify([notification.to_dict() for notification in notifications])


@bp.route("/<int:notification_id>/read", methods=["PATCH"])
@login_required
def mark_read(notification_id: int):
    notification = workflow.mark_notification_read(current_user, notification_id)
    return jsonify(notification.to_dict())
