"""Session hand-off, the known-user directory and search."""
from __future__ import annotations

from prylics.services import create_access_token
from prylics.services.entity_store import KNOWN_USERS


def test_session_registers_user_once(client, store):
    first = client.post(
        "/auth/session",
        json={"uid": "ada", "displayName": "Ada Lovelace", "email": "ada@example.org", "photoURL": "https://img/ada.png"},
    )
    second = client.post("/auth/session", json={"uid": "ada", "displayName": "Renamed"})

    assert first.status_code == 201
    body = first.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["avatarUrl"] == "https://img/ada.png"
    assert body["user"]["profileUrl"] == "/profile/ada"
    assert second.json()["user"]["name"] == "Ada Lovelace"
    assert [profile.uid for profile in store.load(KNOWN_USERS)] == ["ada"]


def test_me_returns_profile_for_token(client, sign_in):
    headers = sign_in("ada", "Ada Lovelace")

    response = client.get("/auth/me", headers=headers)

    assert response.status_code == 200
    assert response.json()["name"] == "Ada Lovelace"


def test_token_for_unknown_uid_resolves_to_placeholder(client):
    token = create_access_token("stranger")

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.json()["name"] == "Unknown User"
    assert response.json()["profileUrl"] == "/profile/stranger"


def test_missing_or_bad_token_is_unauthorized(client):
    assert client.get("/auth/me").status_code == 401
    assert client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 401


def test_search_matches_names_case_insensitively(client, sign_in):
    sign_in("ada", "Ada Lovelace")
    sign_in("grace", "Grace Hopper")

    hits = client.get("/users/search", params={"q": "LOVE"}).json()["items"]
    blank = client.get("/users/search", params={"q": "   "}).json()["items"]

    assert [user["uid"] for user in hits] == ["ada"]
    assert blank == []


def test_own_profile_is_available_before_directory_entry(client):
    token = create_access_token("newcomer")

    overview = client.get("/users/newcomer", headers={"Authorization": f"Bearer {token}"}).json()

    assert overview["isOwnProfile"] is True
    assert overview["user"]["name"] == "Unknown User"
