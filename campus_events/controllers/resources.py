"""Resource catalogue blueprint."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from flask_login import login_required
from wtforms import IntegerField, StringField, TextAreaField
from wtforms.validators import InputRequired, Length, NumberRange, Optional

from ..data_access import resources_dao
from ..models.entities import Role
from .auth import role_required
from .forms import ApiForm, bind_form

bp = Blueprint("resources", __name__, url_prefix="/api/resources")


class ResourceForm(ApiForm):
    """Payload for registering a bookable resource."""

    name = StringField("Name", validators=[InputRequired(), Length(max=200)])
    category = StringField("Type", validators=[InputRequired(), Length(max=100)], name="type")
    description = TextAreaField("Description", validators=[Optional(), Length(max=5000)])
    capacity = IntegerField("Capacity", validators=[Optional(), NumberRange(min=0)])


def _parse_flag(raw: str | None) -> bool | None:
    if raw is None:
        return None
    return raw.strip().lower() == "true"


@bp.route("", methods=["POST"])
@role_required(Role.ADMIN)
def create():
    """Register a new resource."""

    form = bind_form(ResourceForm)
    resource = resources_dao.create_resource(
        name=form.name.data,
        category=form.category.data,
        description=form.description.data,
        capacity=form.capacity.data,
    )
    current_app.logger.info("Resource %s created", resource.resource_id)
    return jsonify(resource.to_dict()), 201


@bp.route("", methods=["GET"])
@login_required
def list_resources():
    """List resources, optionally by type and availability."""

    resources = resources_dao.list_resources(
        category=request.args.get("type") or None,
        available=_parse_flag(request.args.get("available")),
    )
    return jsonify([resource.to_dict() for resource in resources])
