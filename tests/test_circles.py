"""Integration tests for circles, their rosters and chats."""
from __future__ import annotations

from prylics.services.entity_store import CIRCLE_CHATS, CIRCLE_MEMBERSHIPS, CIRCLES


def _create_circle(client, headers, name: str = "Quantum Computing") -> dict:
    response = client.post(
        "/circles",
        json={"name": name, "description": "Qubits, gates and error correction"},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_new_circle_counts_creator_as_member(client, store, sign_in):
    headers = sign_in("ada")

    circle = _create_circle(client, headers, name="X Ray Lab")

    assert circle["memberCount"] == 1
    assert circle["id"].startswith("x-ray-lab-")
    memberships = store.load(CIRCLE_MEMBERSHIPS)
    assert memberships[0].user_id == "ada"
    assert memberships[0].circle_ids == [circle["id"]]
    assert store.load(CIRCLE_CHATS)[0].id == circle["id"]

    detail = client.get(f"/circles/{circle['id']}", headers=headers).json()
    assert detail["isMember"] is True
    assert detail["isCreator"] is True


def test_toggle_twice_restores_roster_and_count(client, store, sign_in):
    owner = sign_in("ada")
    guest = sign_in("bob")
    circle = _create_circle(client, owner)

    joined = client.post(f"/circles/{circle['id']}/membership", headers=guest).json()
    assert joined["joined"] is True
    assert joined["navigateTo"] == f"/circles/{circle['id']}"
    assert joined["circle"]["memberCount"] == 2

    left = client.post(f"/circles/{circle['id']}/membership", headers=guest).json()
    assert left["joined"] is False
    assert left["navigateTo"] is None
    assert left["circle"]["memberCount"] == 1

    bob = next(m for m in store.load(CIRCLE_MEMBERSHIPS) if m.user_id == "bob")
    assert bob.circle_ids == []


def test_toggle_unknown_circle_is_not_found(client, sign_in):
    response = client.post("/circles/nowhere/membership", headers=sign_in("ada"))
    assert response.status_code == 404


def test_chat_is_limited_to_members(client, sign_in):
    owner = sign_in("ada")
    guest = sign_in("bob")
    circle = _create_circle(client, owner)

    assert client.get(f"/circles/{circle['id']}/chat", headers=guest).status_code == 403
    assert client.post(f"/circles/{circle['id']}/chat", json={"text": "hi"}, headers=guest).status_code == 403

    sent = client.post(f"/circles/{circle['id']}/chat", json={"text": "  welcome  "}, headers=owner)
    assert sent.status_code == 201
    message = sent.json()["messages"][0]
    assert message["text"] == "welcome"
    assert message["senderId"] == "ada"
    assert message["sender"]["name"] == "Ada"

    blank = client.post(f"/circles/{circle['id']}/chat", json={"text": "   "}, headers=owner)
    assert blank.status_code == 400


def test_only_creator_deletes_circle_and_references_are_removed(client, store, sign_in):
    owner = sign_in("ada")
    guest = sign_in("bob")
    circle = _create_circle(client, owner)
    client.post(f"/circles/{circle['id']}/membership", headers=guest)

    assert client.delete(f"/circles/{circle['id']}", headers=guest).status_code == 403
    assert client.delete(f"/circles/{circle['id']}", headers=owner).status_code == 204

    assert store.load(CIRCLES) == []
    assert store.load(CIRCLE_CHATS) == []
    assert all(circle["id"] not in m.circle_ids for m in store.load(CIRCLE_MEMBERSHIPS))
    assert client.get(f"/circles/{circle['id']}").status_code == 404


def test_creating_circle_requires_session(client):
    response = client.post("/circles", json={"name": "Anon", "description": "Nobody signed in here"})
    assert response.status_code == 401


def test_names_with_url_characters_stay_addressable(client, sign_in):
    owner = sign_in("ada")
    guest = sign_in("bob")

    for name, prefix in (("AI/ML Lab", "ai-ml-lab-"), ("Why Quarks?", "why-quarks-"), ("%#?!", "untitled-")):
        circle = _create_circle(client, owner, name=name)
        assert circle["id"].startswith(prefix)

        assert client.get(f"/circles/{circle['id']}").status_code == 200
        joined = client.post(f"/circles/{circle['id']}/membership", headers=guest).json()
        assert joined["joined"] is True
        assert joined["circle"]["memberCount"] == 2
