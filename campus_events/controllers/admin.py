"""Administrative analytics and export routes."""

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request

from ..models.entities import Role
from ..services import analytics
from .auth import role_required

bp = Blueprint("admin", __name__, url_prefix="/api/analytics")


@bp.route("", methods=["GET"])
@role_required(Role.ADMIN)
def summary():
    """Aggregate event, resource, club and budget statistics."""

    return jsonify(analytics.build_summary())


@bp.route("/export", methods=["GET"])
@role_required(Role.ADMIN)
def export():
    """CSV of events with ``?format=csv``, otherwise a JSON dump."""

    if request.args.get("format", "json").lower() == "csv":
        return Response(
            analytics.export_events_csv(),
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=analytics.csv"},
        )
    return jsonify(analytics.export_json())
