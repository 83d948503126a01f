"""Data access layer tests."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from campus_events.data_access import resources_dao, users_dao
from campus_events.data_access.store import InMemoryStore, Repository
from campus_events.errors import Conflict
from campus_events.models.entities import Role


def test_repository_assigns_sequential_ids():
    repo: Repository[SimpleNamespace] = Repository("id")
    first = repo.add(SimpleNamespace(id=repo.next_id(), name="a"))
    second = repo.add(SimpleNamespace(id=repo.next_id(), name="b"))
    assert (first.id, second.id) == (1, 2)
    assert repo.get(2) is second
    assert repo.first(lambda row: row.name == "a") is first
    assert repo.remove(1) is first
    assert repo.all() == [second]
    assert len(repo) == 1


def test_stores_are_isolated():
    one, two = InMemoryStore(), InMemoryStore()
    assert one.users is not two.users
    assert one.users.next_id() == two.users.next_id() == 1


def test_resource_create_and_filter(app):
    with app.app_context():
        created = resources_dao.create_resource(name="Drone Kit", category="equipment", capacity=2)
        assert created.available is True
        assert resources_dao.get_resource_by_id(created.resource_id) is created

        equipment = resources_dao.list_resources(category="equipment")
        assert {resource.name for resource in equipment} == {"Portable PA System", "Drone Kit"}
        assert resources_dao.list_resources(available=False) == []


def test_user_email_is_unique_and_case_insensitive(app):
    with app.app_context():
        user = users_dao.create_user(
            name="Case Test", email="Case@Campus.edu", password_hash=users_dao.hash_password("Password123!")
        )
        assert user.role is Role.PARTICIPANT
        assert users_dao.get_user_by_email("case@campus.edu") is user
        assert users_dao.verify_password(user.password_hash, "Password123!")
        assert not users_dao.verify_password(user.password_hash, "nope")
        with pytest.raises(Conflict):
            users_dao.create_user(name="Dupe", email="case@campus.edu", password_hash="x")


def test_resource_listing_filters_over_http(client, student_headers):
    rooms = client.get("/api/resources?type=room", headers=student_headers).get_json()
    assert [resource["name"] for resource in rooms] == ["Seminar Room 2B"]
    assert client.get("/api/resources?available=false", headers=student_headers).get_json() == []
    assert len(client.get("/api/resources?available=true", headers=student_headers).get_json()) == 3
