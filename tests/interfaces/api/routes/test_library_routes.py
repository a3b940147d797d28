"""Tests for the library and sharing endpoints."""

from __future__ import annotations


def test_game_without_date_is_saved_as_unreleased_and_announced(
    client, register, login, outbox
) -> None:
    register("alice", email="alice@example.com")
    headers = login("alice")

    response = client.post(
        "/library/",
        json={"game_id": "42", "name": "Nova", "status": "playing"},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["status"] == "unreleased"
    assert outbox.emails == [
        (
            "Nova was added to your library",
            "Nova was added to your library. Release date: TBA.",
            "alice@example.com",
        )
    ]

    listed = client.get("/library/", headers=headers).json()
    assert [game["game_id"] for game in listed] == ["42"]


def test_invalid_status_is_rejected(client, register, login) -> None:
    register("alice")

    response = client.post(
        "/library/",
        json={"game_id": "42", "name": "Nova", "status": "finished"},
        headers=login("alice"),
    )

    assert response.status_code == 422


def test_remove_game(client, register, login) -> None:
    register("alice")
    headers = login("alice")
    client.post(
        "/library/",
        json={"game_id": "42", "name": "Nova", "status": "wishlist", "release_date": "2020-01-01"},
        headers=headers,
    )

    assert client.delete("/library/42", headers=headers).status_code == 204
    assert client.delete("/library/42", headers=headers).status_code == 404


def test_shared_library_flow(client, register, login) -> None:
    register("alice")
    register("bob")
    alice = login("alice")
    bob = login("bob")
    client.post(
        "/library/",
        json={"game_id": "42", "name": "Nova", "status": "wishlist", "release_date": "2020-01-01"},
        headers=alice,
    )

    assert client.get("/sharing/alice/library", headers=bob).status_code == 403

    response = client.put("/sharing/", json={"to_users": ["BOB", "alice"]}, headers=alice)
    assert response.json() == {"to_users": ["bob"]}

    shared = client.get("/sharing/alice/library", headers=bob)
    assert shared.status_code == 200
    assert [game["name"] for game in shared.json()] == ["Nova"]
    assert [item["from_user"] for item in client.get("/sharing/with-me", headers=bob).json()] == ["alice"]

    assert client.delete("/sharing/with-me/alice", headers=bob).status_code == 204
    assert client.get("/sharing/alice/library", headers=bob).status_code == 403


def test_sharing_with_unknown_user_fails(client, register, login) -> None:
    register("alice")

    response = client.put("/sharing/", json={"to_users": ["ghost"]}, headers=login("alice"))

    assert response.status_code == 400
    assert "ghost" in response.json()["detail"]
