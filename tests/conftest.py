"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Callable, Generator

import pytest
from flask import Flask

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from campus_events.app import create_app
from campus_events.config import TestingConfig
from campus_events.data_access import seed, users_dao


@pytest.fixture()
def app() -> Generator[Flask, None, None]:
    """Configure a Flask application with a fresh, seeded in-memory store."""

    application = create_app(TestingConfig)
    with application.app_context():
        seed.seed()
    yield application


@pytest.fixture()
def client(app: Flask):
    """Flask test client."""

    return app.test_client()


@pytest.fixture()
def runner(app: Flask):
    """Flask CLI runner."""

    return app.test_cli_runner()


@pytest.fixture()
def login(client) -> Callable[[str], dict[str, str]]:
    """Return a helper that signs in and yields Authorization headers."""

    def _login(email: str, password: str = seed.DEMO_PASSWORD) -> dict[str, str]:
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.get_json()
        return {"Authorization": f"Bearer {response.get_json()['token']}"}

    return _login


@pytest.fixture()
def admin_headers(login):
    return login("ada.admin@campus.edu")


@pytest.fixture()
def organizer_headers(login):
    return login("olu.organizer@campus.edu")


@pytest.fixture()
def student_headers(login):
    return login("alice@student.edu")


@pytest.fixture()
def other_student_headers(login):
    return login("ben@student.edu")


@pytest.fixture()
def admin_user(app: Flask):
    with app.app_context():
        return users_dao.get_user_by_email("ada.admin@campus.edu")


@pytest.fixture()
def organizer_user(app: Flask):
    with app.app_context():
        return users_dao.get_user_by_email("olu.organizer@campus.edu")


@pytest.fixture()
def student_user(app: Flask):
    with app.app_context():
        return users_dao.get_user_by_email("alice@student.edu")


@pytest.fixture()
def resource_id(client, admin_headers) -> int:
    """A fresh resource with no bookings."""

    response = client.post(
        "/api/resources",
        json={"name": "Media Lab", "type": "room", "capacity": 12},
        headers=admin_headers,
    )
    assert response.status_code == 201
    return response.get_json()["id"]
