"""Tests for the authentication token endpoint."""

from __future__ import annotations


def test_login_returns_token_and_role(client, register) -> None:
    register("alice", admin=True)

    response = client.post("/auth/token", data={"username": "Alice", "password": "correct-horse"})

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["username"] == "alice"
    assert body["can_manage_users"] is True


def test_wrong_password_is_rejected(client, register) -> None:
    register("alice")

    response = client.post("/auth/token", data={"username": "alice", "password": "wrong-horse"})

    assert response.status_code == 401


def test_protected_routes_require_a_token(client) -> None:
    assert client.get("/library/").status_code == 401
    assert client.get("/library/", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_repeated_failures_lock_the_client_out(client, register) -> None:
    register("alice")
    for _ in range(5):
        response = client.post(
            "/auth/token", data={"username": "alice", "password": "wrong-horse"}
        )
        assert response.status_code == 401

    locked = client.post("/auth/token", data={"username": "alice", "password": "correct-horse"})

    assert locked.status_code == 429
    assert locked.json()["detail"] == (
        "Too many login attempts. Please try again in 15 minutes."
    )
    assert locked.headers["Retry-After"] == "900"


def test_successful_login_resets_the_failure_count(client, register) -> None:
    register("alice")
    for _ in range(4):
        client.post("/auth/token", data={"username": "alice", "password": "wrong-horse"})
    assert (
        client.post("/auth/token", data={"username": "alice", "password": "correct-horse"})
    ).status_code == 200

    for _ in range(4):
        client.post("/auth/token", data={"username": "alice", "password": "wrong-horse"})
    response = client.post("/auth/token", data={"username": "alice", "password": "correct-horse"})

    assert response.status_code == 200
