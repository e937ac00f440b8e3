"""Integration tests for collaborative projects."""
from __future__ import annotations

from prylics.services.entity_store import PROJECT_DISCUSSIONS, PROJECTS


def _create_project(client, headers) -> dict:
    response = client.post(
        "/projects",
        json={"title": "Enzyme Scale-Up", "description": "Scaling plastic-eating enzyme production"},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_creator_is_first_collaborator(client, store, sign_in):
    headers = sign_in("ada", "Ada Lovelace")

    project = _create_project(client, headers)

    assert [c["uid"] for c in project["collaborators"]] == ["ada"]
    assert store.load(PROJECT_DISCUSSIONS)[0].id == project["id"]
    listed = client.get("/projects").json()["items"]
    assert [p["id"] for p in listed] == [project["id"]]


def test_collaboration_toggle_adds_and_removes_profile(client, store, sign_in):
    owner = sign_in("ada")
    guest = sign_in("bob", "Bob Builder")
    project = _create_project(client, owner)

    joined = client.post(f"/projects/{project['id']}/collaboration", headers=guest).json()
    assert joined["joined"] is True
    assert joined["navigateTo"] == f"/projects/{project['id']}"
    assert [c["name"] for c in joined["project"]["collaborators"]] == ["Ada", "Bob Builder"]

    detail = client.get(f"/projects/{project['id']}", headers=guest).json()
    assert detail["isCollaborator"] is True
    assert detail["isCreator"] is False

    left = client.post(f"/projects/{project['id']}/collaboration", headers=guest).json()
    assert left["joined"] is False
    assert left["navigateTo"] is None
    assert [c.uid for c in store.load(PROJECTS)[0].collaborators] == ["ada"]


def test_discussion_is_limited_to_collaborators(client, sign_in):
    owner = sign_in("ada")
    guest = sign_in("bob")
    project = _create_project(client, owner)

    assert client.get(f"/projects/{project['id']}/discussion", headers=guest).status_code == 403

    client.post(f"/projects/{project['id']}/collaboration", headers=guest)
    sent = client.post(f"/projects/{project['id']}/discussion", json={"text": "Happy to help"}, headers=guest)
    assert sent.status_code == 201

    discussion = client.get(f"/projects/{project['id']}/discussion", headers=owner).json()
    assert [m["text"] for m in discussion["messages"]] == ["Happy to help"]


def test_only_creator_deletes_project(client, store, sign_in):
    owner = sign_in("ada")
    guest = sign_in("bob")
    project = _create_project(client, owner)

    assert client.delete(f"/projects/{project['id']}", headers=guest).status_code == 403
    assert client.delete(f"/projects/{project['id']}", headers=owner).status_code == 204
    assert store.load(PROJECTS) == []
    assert store.load(PROJECT_DISCUSSIONS) == []


def test_title_with_url_characters_stays_addressable(client, sign_in):
    owner = sign_in("ada")
    guest = sign_in("bob")
    response = client.post(
        "/projects",
        json={"title": "AI/ML Toolkit?", "description": "Shared notebooks for model experiments"},
        headers=owner,
    )
    project = response.json()

    assert project["id"].startswith("ai-ml-toolkit-")
    assert client.get(f"/projects/{project['id']}").status_code == 200
    assert client.post(f"/projects/{project['id']}/collaboration", headers=guest).json()["joined"] is True


def test_creator_cannot_leave_own_project(client, store, sign_in):
    owner = sign_in("ada")
    project = _create_project(client, owner)

    response = client.post(f"/projects/{project['id']}/collaboration", headers=owner)

    assert response.status_code == 400
    assert [c.uid for c in store.load(PROJECTS)[0].collaborators] == ["ada"]
