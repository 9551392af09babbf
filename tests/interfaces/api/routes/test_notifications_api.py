"""Integration tests for the notification service endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from sqlalchemy.exc import OperationalError
from starlette.websockets import WebSocketDisconnect

from social_notifications.infrastructure.repositories import NotificationRepository


def _create(client, **payload):
    body = {"recipient_id": 7, "triggering_user_id": 8, "type": "like", "entity_id": 100}
    body.update(payload)
    return client.post("/notifications", json=body)


def test_create_notification_returns_created_row(client):
    response = _create(client, content="Ana liked your post", is_read=True)

    assert response.status_code == 201
    body = response.json()
    assert body["id"] > 0
    assert body["recipient_id"] == 7
    assert body["type"] == "like"
    assert body["is_read"] is False
    assert body["created_at"] == body["updated_at"]


def test_create_notification_accepts_legacy_field_names(client):
    response = client.post(
        "/notifications",
        json={
            "user_id": 3,
            "sender_id": 4,
            "notification_type": "comment",
            "resource_id": 55,
            "resource_url": "/posts/55",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["recipient_id"] == 3
    assert body["triggering_user_id"] == 4
    assert body["type"] == "comment"
    assert body["entity_id"] == 55


def test_create_self_notification_is_rejected(client):
    response = _create(client, recipient_id=8)

    assert response.status_code == 400
    assert response.json()["code"] == "invalid_operation"
    assert client.get("/notifications/user/8").json() == []


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "like"},
        {"recipient_id": "seven", "type": "like"},
        {"recipient_id": 7, "type": "unknown"},
    ],
)
def test_malformed_create_body_is_a_bad_request(client, payload):
    response = client.post("/notifications", json=payload)

    assert response.status_code == 400
    assert response.json() == {"code": "invalid_operation", "detail": "malformed request"}


def test_list_user_notifications(client):
    _create(client, entity_id=1)
    _create(client, entity_id=2)
    _create(client, recipient_id=9, entity_id=3)

    response = client.get("/notifications/user/7")

    assert response.status_code == 200
    listed = response.json()
    assert {item["entity_id"] for item in listed} == {1, 2}
    assert listed == sorted(listed, key=lambda item: (item["created_at"], item["id"]), reverse=True)


def test_list_for_unknown_user_is_an_empty_array(client):
    response = client.get("/notifications/user/424242")

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("get", "/notifications/user/abc"),
        ("get", "/notifications/user/0"),
        ("put", "/notifications/abc/read"),
        ("put", "/notifications/1.5/read"),
        ("put", "/notifications/user/-3/read-all"),
        ("delete", "/notifications/abc"),
    ],
)
def test_non_numeric_identifiers_are_rejected(client, method, path):
    response = getattr(client, method)(path)

    assert response.status_code == 400
    assert response.json()["code"] == "invalid_operation"


def test_mark_notification_read(client):
    created = _create(client).json()

    first = client.put(f"/notifications/{created['id']}/read")
    second = client.put(f"/notifications/{created['id']}/read")

    assert first.status_code == 200
    assert first.json()["success"] is True
    assert second.status_code == 200
    [stored] = client.get("/notifications/user/7").json()
    assert stored["is_read"] is True


def test_mark_unknown_notification_read_succeeds(client):
    response = client.put("/notifications/987654/read")

    assert response.status_code == 200
    assert response.json()["success"] is True


def test_mark_all_read_leaves_other_users_untouched(client):
    _create(client, entity_id=1)
    _create(client, entity_id=2)
    _create(client, recipient_id=9, entity_id=3)

    response = client.put("/notifications/user/7/read-all")

    assert response.status_code == 200
    assert response.json() == {"success": True, "updated": 2}
    assert all(item["is_read"] for item in client.get("/notifications/user/7").json())
    assert [item["is_read"] for item in client.get("/notifications/user/9").json()] == [False]


def test_delete_notification_is_idempotent(client):
    created = _create(client).json()

    first = client.delete(f"/notifications/{created['id']}")
    second = client.delete(f"/notifications/{created['id']}")

    assert first.status_code == 200
    assert second.status_code == 200
    assert client.get("/notifications/user/7").json() == []


def test_store_failure_is_a_generic_internal_error(client, monkeypatch):
    def broken(self, user_id, *, limit=None):
        raise OperationalError("SELECT notifications", {}, Exception("password=hunter2"))

    monkeypatch.setattr(NotificationRepository, "list_for_user", broken)

    response = client.get("/notifications/user/7")

    assert response.status_code == 500
    assert response.json() == {"code": "internal_error", "detail": "internal server error"}
    assert "hunter2" not in response.text


def test_websocket_sends_pending_notifications_and_answers_ping(client, auth_headers):
    created = _create(client).json()
    token = auth_headers(7)["Authorization"].split(" ", 1)[1]

    with client.websocket_connect(f"/notifications/ws?token={token}") as websocket:
        init = websocket.receive_json()
        assert init["type"] == "init"
        assert [item["id"] for item in init["data"]] == [created["id"]]

        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

        websocket.send_json({"type": "ack", "ids": [created["id"]]})
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

    [stored] = client.get("/notifications/user/7").json()
    assert stored["is_read"] is True


def test_websocket_pushes_new_notifications(client, auth_headers):
    token = auth_headers(7)["Authorization"].split(" ", 1)[1]

    with client.websocket_connect(f"/notifications/ws?token={token}") as websocket:
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

        created = _create(client, content="pushed").json()

        message = websocket.receive_json()
        assert message["type"] == "notification"
        assert message["data"]["id"] == created["id"]
        assert message["data"]["content"] == "pushed"


def test_websocket_without_valid_token_is_closed(client):
    with pytest.raises(WebSocketDisconnect) as excinfo:
        with client.websocket_connect("/notifications/ws?token=not-a-token") as websocket:
            websocket.receive_json()

    assert excinfo.value.code == 1008


def test_repeated_comment_notifications_each_get_a_row(client):
    body = {"recipient_id": 2, "triggering_user_id": 3, "type": "comment", "entity_id": 7}

    first = client.post("/notifications", json={**body, "content": "first"})
    second = client.post("/notifications", json={**body, "content": "second"})

    assert first.status_code == 201
    assert second.status_code == 201
    assert second.json()["id"] != first.json()["id"]
    assert second.json()["content"] == "second"
    listed = client.get("/notifications/user/2").json()
    assert len(listed) == 2


def test_repeated_like_notification_returns_the_stored_row(client):
    first = _create(client, content="first").json()
    second = _create(client, content="second")

    assert second.status_code == 201
    assert second.json()["id"] == first["id"]
    assert len(client.get("/notifications/user/7").json()) == 1
