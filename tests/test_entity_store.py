"""Tests for whole-collection persistence and its failure modes."""
from __future__ import annotations

import pytest

from prylics.models import StorageEntry
from prylics.schemas import Circle
from prylics.services import MalformedCollectionError, track_changes
from prylics.services.entity_store import CIRCLES, INITIAL_POSTS, KNOWN_USERS, USER_POSTS


def test_absent_collection_reads_as_empty(store):
    assert store.load(CIRCLES) == []
    assert store.exists(CIRCLES.key) is False


def test_saved_collection_is_stored_in_camel_case(store):
    store.save(CIRCLES, [Circle(id="c1", name="Optics", description="Light and lenses", creator_id="u1", member_count=1)])

    raw = store.load_raw(CIRCLES.key)

    assert raw == [{"id": "c1", "name": "Optics", "description": "Light and lenses", "creatorId": "u1", "memberCount": 1}]
    assert store.load(CIRCLES)[0].member_count == 1
    assert store.keys() == ["circles"]


def test_entities_failing_validation_are_rejected(store):
    store.save_raw(KNOWN_USERS.key, [{"uid": "u1"}])

    with pytest.raises(MalformedCollectionError) as excinfo:
        store.load(KNOWN_USERS)
    assert excinfo.value.key == "knownUsers"


def test_non_array_and_invalid_json_are_rejected(store):
    with store._session_factory() as session:
        session.add(StorageEntry(key=CIRCLES.key, value="{\"id\": \"c1\"}"))
        session.add(StorageEntry(key=KNOWN_USERS.key, value="[not json"))
        session.commit()

    with pytest.raises(MalformedCollectionError):
        store.load(CIRCLES)
    with pytest.raises(MalformedCollectionError):
        store.load(KNOWN_USERS)


def test_malformed_collection_surfaces_as_server_error(client, store):
    store.save_raw(CIRCLES.key, [{"id": 42}])

    response = client.get("/circles")

    assert response.status_code == 500
    assert response.json() == {"detail": "Stored collection 'circles' is malformed"}


def test_listeners_see_every_written_key(store):
    with track_changes(store) as changed:
        store.save(CIRCLES, [])
        store.save_raw("conversations", [])
    store.save(CIRCLES, [])

    assert changed == ["circles", "conversations"]


def test_clear_removes_collection(store):
    store.save(CIRCLES, [])
    store.clear(CIRCLES)

    assert store.exists(CIRCLES.key) is False


def test_list_adapters_are_built_once_per_model():
    assert CIRCLES.adapter is CIRCLES.adapter
    assert INITIAL_POSTS.adapter is USER_POSTS.adapter
