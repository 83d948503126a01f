"""Authentication flow tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from campus_events.app import create_app
from campus_events.config import TestingConfig


def test_register_login_and_access_protected(client):
    """Register a new organizer, login, and read the profile with the token."""

    response = client.post(
        "/api/auth/register",
        json={
            "name": "Test Organizer",
            "email": "organizer@campus.edu",
            "password": "Password123!",
            "role": "organizer",
            "department": "Testing",
            "year": "3",
        },
    )
    assert response.status_code == 201
    body = response.get_json()
    assert body["token"]
    assert body["user"]["role"] == "organizer"
    assert "password" not in body["user"]
    assert "password_hash" not in body["user"]

    login_resp = client.post(
        "/api/auth/login",
        json={"email": "organizer@campus.edu", "password": "Password123!"},
    )
    assert login_resp.status_code == 200
    token = login_resp.get_json()["token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.get_json()["email"] == "organizer@campus.edu"
    assert me.get_json()["department"] == "Testing"


def test_register_defaults_to_participant(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "New Student", "email": "new@student.edu", "password": "Password123!"},
    )
    assert response.status_code == 201
    assert response.get_json()["user"]["role"] == "participant"


def test_register_rejects_missing_fields_and_unknown_role(client):
    missing = client.post("/api/auth/register", json={"email": "x@campus.edu"})
    assert missing.status_code == 400
    assert "name" in missing.get_json()["details"]

    bad_role = client.post(
        "/api/auth/register",
        json={"name": "X", "email": "x@campus.edu", "password": "Password123!", "role": "superuser"},
    )
    assert bad_role.status_code == 400


def test_duplicate_registration_conflicts(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "Ada Again", "email": "ada.admin@campus.edu", "password": "Password123!"},
    )
    assert response.status_code == 400
    assert response.get_json()["error"] == "User already exists"


def test_invalid_credentials_fail(client):
    """Invalid sign-ins should return an error body."""

    response = client.post(
        "/api/auth/login",
        json={"email": "nonexistent@campus.edu", "password": "WrongPassword!"},
    )
    assert response.status_code == 400
    assert response.get_json()["error"] == "Invalid credentials"

    wrong_password = client.post(
        "/api/auth/login",
        json={"email": "alice@student.edu", "password": "WrongPassword!"},
    )
    assert wrong_password.status_code == 400


def test_missing_token_is_unauthenticated(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.get_json()["error"] == "Access token required"


def test_tampered_and_expired_tokens_are_rejected(client, admin_user):
    garbage = client.get("/api/events", headers={"Authorization": "Bearer not-a-token"})
    assert garbage.status_code == 403

    past = datetime.now(timezone.utc) - timedelta(days=8)
    expired = jwt.encode(
        {
            "id": admin_user.user_id,
            "email": admin_user.email,
            "role": "admin",
            "iat": past,
            "exp": past + timedelta(days=7),
        },
        TestingConfig.JWT_SECRET_KEY,
        algorithm="HS256",
    )
    response = client.get("/api/events", headers={"Authorization": f"Bearer {expired}"})
    assert response.status_code == 403
    assert response.get_json()["error"] == "Invalid or expired token"

    forged = jwt.encode(
        {
            "id": admin_user.user_id,
            "email": admin_user.email,
            "role": "admin",
            "iat": datetime.now(timezone.utc),
            "exp": datetime.now(timezone.utc) + timedelta(days=1),
        },
        "someone-elses-secret",
        algorithm="HS256",
    )
    response = client.get("/api/events", headers={"Authorization": f"Bearer {forged}"})
    assert response.status_code == 403


def test_admin_routes_require_admin_role(client, student_headers, organizer_headers, admin_headers):
    """Only admins may register resources or read analytics."""

    payload = {"name": "Lab", "type": "room"}
    assert client.post("/api/resources", json=payload, headers=student_headers).status_code == 403
    assert client.post("/api/resources", json=payload, headers=organizer_headers).status_code == 403
    assert client.post("/api/resources", json=payload, headers=admin_headers).status_code == 201

    assert client.get("/api/analytics", headers=organizer_headers).status_code == 403
    assert client.get("/api/analytics", headers=admin_headers).status_code == 200


def test_admin_self_registration_can_be_disabled():
    class _LockedConfig(TestingConfig):
        ALLOW_ADMIN_REGISTRATION = False

    client = create_app(_LockedConfig).test_client()
    response = client.post(
        "/api/auth/register",
        json={"name": "Mallory", "email": "mallory@campus.edu", "password": "Password123!", "role": "admin"},
    )
    assert response.status_code == 403


def test_health_needs_no_token(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


def test_issue_token_command(runner, app):
    result = runner.invoke(args=["issue-token", "alice@student.edu"])
    assert result.exit_code == 0
    token = result.output.strip()
    with app.app_context():
        claims = jwt.decode(token, TestingConfig.JWT_SECRET_KEY, algorithms=["HS256"])
    assert claims["email"] == "alice@student.edu"
    assert claims["role"] == "participant"

    missing = runner.invoke(args=["issue-token", "nobody@campus.edu"])
    assert missing.exit_code != 0


def test_passwords_over_bcrypt_limit(client):
    """Passwords are capped at 72 UTF-8 bytes, not 72 characters."""

    accented = client.post(
        "/api/auth/register",
        json={"name": "Eloise", "email": "eloise@campus.edu", "password": "é" * 40},
    )
    assert accented.status_code == 400
    assert "password" in accented.get_json()["details"]

    too_long = client.post("/api/auth/login", json={"email": "alice@student.edu", "password": "x" * 100})
    assert too_long.status_code == 400
    assert too_long.get_json()["error"] == "Invalid credentials"


def test_numeric_name_is_rejected_on_registration(client):
    response = client.post(
        "/api/auth/register",
        json={"name": 7, "email": "seven@campus.edu", "password": "Password123!"},
    )
    assert response.status_code == 400
    assert "name" in response.get_json()["details"]
