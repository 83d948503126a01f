"""Direct messaging tests."""

from __future__ import annotations


def test_send_and_list_messages(client, student_headers, other_student_headers, organizer_headers, student_user):
    ben = client.get("/api/auth/me", headers=other_student_headers).get_json()
    sent = client.post(
        "/api/messages",
        json={"recipientId": ben["id"], "content": "See you at robotics?", "clubId": 1},
        headers=student_headers,
    )
    assert sent.status_code == 201
    assert sent.get_json()["senderId"] == student_user.user_id

    inbox = client.get("/api/messages", headers=other_student_headers).get_json()
    assert len(inbox) == 1
    assert inbox[0]["content"] == "See you at robotics?"
    assert inbox[0]["sender"]["email"] == "alice@student.edu"
    assert "password_hash" not in inbox[0]["sender"]

    outbox = client.get("/api/messages", headers=student_headers).get_json()
    assert [message["id"] for message in outbox] == [inbox[0]["id"]]

    assert client.get("/api/messages", headers=organizer_headers).get_json() == []


def test_message_filters(client, student_headers, other_student_headers):
    ben_id = client.get("/api/auth/me", headers=other_student_headers).get_json()["id"]
    client.post("/api/messages", json={"recipientId": ben_id, "content": "club", "clubId": 1}, headers=student_headers)
    client.post("/api/messages", json={"recipientId": ben_id, "content": "event", "eventId": 1}, headers=student_headers)

    by_club = client.get("/api/messages?clubId=1", headers=other_student_headers).get_json()
    assert [message["content"] for message in by_club] == ["club"]

    by_event = client.get("/api/messages?eventId=1", headers=other_student_headers).get_json()
    assert [message["content"] for message in by_event] == ["event"]

    assert client.get("/api/messages?clubId=2", headers=other_student_headers).get_json() == []


def test_message_validation(client, student_headers):
    assert client.post("/api/messages", json={"recipientId": 2}, headers=student_headers).status_code == 400
    unknown = client.post("/api/messages", json={"recipientId": 9999, "content": "hi"}, headers=student_headers)
    assert unknown.status_code == 404
    unknown_club = client.post(
        "/api/messages", json={"recipientId": 2, "content": "hi", "clubId": 9999}, headers=student_headers
    )
    assert unknown_club.status_code == 404


def test_message_filters_must_be_integers(client, student_headers):
    assert client.get("/api/messages?clubId=abc", headers=student_headers).status_code == 400
    assert client.get("/api/messages?eventId=1.5", headers=student_headers).status_code == 400
