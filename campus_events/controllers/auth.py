"""Authentication blueprint handling registration, login, and profile lookup."""

from __future__ import annotations

from functools import wraps
from typing import Callable

from flask import Blueprint, current_app, jsonify
from flask_login import current_user, login_required
from wtforms import PasswordField, SelectField, StringField
from wtforms.validators import Email, InputRequired, Length, Optional

from ..data_access import users_dao
from ..errors import Forbidden, InvalidCredentials, NotFound
from ..models.entities import Role
from ..security import issue_token, require_role
from .forms import ApiForm, MaxBytes, bind_form

bp = Blueprint("auth", __name__, url_prefix="/api/auth")


class RegistrationForm(ApiForm):
    """Registration payload for new campus users."""

    name = StringField("Full Name", validators=[InputRequired(), Length(max=120)])
    email = StringField("Email", validators=[InputRequired(), Email(), Length(max=255)])
    password = PasswordField(
        "Password",
        validators=[InputRequired(), Length(min=8), MaxBytes(users_dao.MAX_PASSWORD_BYTES)],
    )
    role = SelectField(
        "Role",
        choices=[(role.value, role.value.title()) for role in Role],
        validators=[Optional()],
        default=Role.PARTICIPANT.value,
    )
    department = StringField("Department", validators=[Optional(), Length(max=120)])
    year = StringField("Year", validators=[Optional(), Length(max=20)])


class LoginForm(ApiForm):
    """Basic credential payload."""

    email = StringField("Email", validators=[InputRequired(), Email()])
    password = PasswordField("Password", validators=[InputRequired()])


def role_required(*roles: Role) -> Callable:
    """Decorator enforcing authentication plus role-based access control."""

    allowed_roles = tuple(Role(role) for role in roles)

    def decorator(view: Callable) -> Callable:
        @wraps(view)
        @login_required
        def wrapped(*args, **kwargs):
            require_role(current_user.role, allowed_roles)
            return view(*args, **kwargs)

        return wrapped

    return decorator


def _session_payload(user) -> dict:
    return {"token": issue_token(user), "user": user.to_public_dict()}


@bp.route("/register", methods=["POST"])
def register():
    """Handle new user registration."""

    form = bind_form(RegistrationForm)
    role = Role(form.role.data or Role.PARTICIPANT.value)
    if role is Role.ADMIN and not current_app.config["ALLOW_ADMIN_REGISTRATION"]:
        raise Forbidden("Admin accounts cannot be self-registered")

    user = users_dao.create_user(
        name=form.name.data,
        email=form.email.data,
        password_hash=users_dao.hash_password(form.password.data),
        role=role,
        department=form.department.data or None,
        year=form.year.data or None,
    )
    current_app.logger.info("Registered user %s with role %s", user.user_id, user.role.value)
    return jsonify(_session_payload(user)), 201


@bp.route("/login", methods=["POST"])
def login():
    """Authenticate an existing user."""

    form = bind_form(LoginForm)
    user = users_dao.get_user_by_email(form.email.data)
    if not user or not users_dao.verify_password(user.password_hash, form.password.data):
        raise InvalidCredentials()
    current_app.logger.info("User %s signed in", user.user_id)
    return jsonify(_session_payload(user))


@bp.route("/me")
@login_required
def me():
    """Return the current user's profile."""

    user = users_dao.get_user_by_id(current_user.user_id)
    if user is None:
        raise NotFound("User", current_user.user_id)
    return jsonify(user.to_public_dict())
