"""Application factory for the Campus Events Hub API."""

from __future__ import annotations

from datetime import datetime, timezone

from flask import Flask, Request, current_app, g, jsonify
from flask_login import LoginManager
from werkzeug.exceptions import HTTPException

from .config import BaseConfig, get_config
from .data_access import seed, users_dao
from .data_access.store import InMemoryStore, init_app as init_store_app
from .errors import ApiError, InternalError, InvalidToken, Unauthenticated
from .models.entities import User
from .security import resolve_token, token_from_header

login_manager = LoginManager()
# Identity comes from the bearer token on every request, never from the session.
login_manager.session_protection = None


@login_manager.request_loader
def load_user_from_request(request: Request) -> User | None:
    """Resolve the bearer token on each request into a stored user."""

    token = token_from_header(request.headers.get("Authorization"))
    if token is None:
        return None
    try:
        claims = resolve_token(token)
    except InvalidToken as exc:
        g.auth_error = exc
        return None
    user = users_dao.get_user_by_id(claims["id"])
    if user is None:
        g.auth_error = InvalidToken()
    return user


@login_manager.unauthorized_handler
def unauthorized():
    """Turn Flask-Login's refusal into an API error."""

    raise g.pop("auth_error", None) or Unauthenticated()


def create_app(config_object: type[BaseConfig] | None = None, store: InMemoryStore | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)

    config_cls = config_object or get_config()
    app.config.from_object(config_cls)
    app.json.sort_keys = False
    app.logger.setLevel(app.config["LOG_LEVEL"])

    login_manager.init_app(app)
    init_store_app(app, store)

    register_blueprints(app)
    register_error_handlers(app)

    @app.route("/api/health")
    def health():
        """Liveness probe."""

        return jsonify({"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()})

    if app.config["SEED_DEMO_DATA"]:
        with app.app_context():
            seed.seed()
            app.logger.info("Loaded demo data")

    return app


def register_blueprints(app: Flask) -> None:
    """Import and register application blueprints."""

    from .controllers import (  # pylint: disable=import-outside-toplevel
        admin,
        auth,
        bookings,
        clubs,
        events,
        messaging,
        notifications,
        resources,
    )

    app.register_blueprint(auth.bp)
    app.register_blueprint(events.bp)
    app.register_blueprint(resources.bp)
    app.register_blueprint(bookings.bp)
    app.register_blueprint(clubs.bp)
    app.register_blueprint(messaging.bp)
    app.register_blueprint(notifications.bp)
    app.register_blueprint(admin.bp)


def register_error_handlers(app: Flask) -> None:
    """Answer every failure with a JSON body."""

    @app.errorhandler(ApiError)
    def api_error(error: ApiError):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def server_error(error: Exception):
        current_app.logger.exception("Unhandled error: %s", error)
        return jsonify(InternalError().to_dict()), 500
