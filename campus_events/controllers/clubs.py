"""Club directory and membership blueprint."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify
from flask_login import current_user, login_required
from wtforms import StringField, TextAreaField
from wtforms.validators import InputRequired, Length

from ..data_access import clubs_dao
from ..models.entities import Role
from ..services import workflow
from .auth import role_required
from .forms import ApiForm, bind_form

bp = Blueprint("clubs", __name__, url_prefix="/api/clubs")


class ClubForm(ApiForm):
    name = StringField("Name", validators=[InputRequired(), Length(max=200)])
    description = TextAreaField("Description", validators=[InputRequired(), Length(max=5000)])
    category = StringField("Category", validators=[InputRequired(), Length(max=100)])


@bp.route("", methods=["POST"])
@role_required(Role.ADMIN)
def create():
    form = bind_form(ClubForm)
    club = clubs_dao.create_club(
        name=form.name.data,
        description=form.description.data,
        category=form.category.data,
    )
    current_app.logger.info("Club %s created", club.club_id)
    return jsonify(club.to_dict()), 201


@bp.route("", methods=["GET"])
@login_required
def list_clubs():
    return jsonify([club.to_dict() for club in clubs_dao.list_clubs()])


@bp.route("/<int:club_id>/join", methods=["POST"])
@login_required
def join(club_id: int):
    """Join a club; joining twice is a successful no-op."""

    club = workflow.join_club(current_user, club_id)
    return jsonify(club.to_dict())
