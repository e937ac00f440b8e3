"""Integration tests for threaded comments on posts."""
from __future__ import annotations

from prylics.services import track_changes
from prylics.services.entity_store import INITIAL_POSTS
from prylics.services.seed_service import build_demo_posts


def test_nested_replies_keep_comment_count_in_step(client, store, sign_in):
    store.save(INITIAL_POSTS, build_demo_posts())
    headers = sign_in("ada")

    root = client.post("/posts/2/comments", json={"text": "Great idea"}, headers=headers)
    assert root.status_code == 201
    parent_id = root.json()["comments"][0]["id"]

    for depth in range(3):
        response = client.post(
            "/posts/2/comments",
            json={"text": f"reply at depth {depth + 1}", "parentId": parent_id},
            headers=headers,
        )
        assert response.status_code == 201
        node = response.json()["comments"][0]
        for _ in range(depth + 1):
            node = node["replies"][-1]
        parent_id = node["id"]

    tree = client.get("/posts/2/comments").json()
    assert tree["commentCount"] == 4
    assert tree["comments"][0]["replies"][0]["replies"][0]["replies"][0]["text"] == "reply at depth 3"

    stored = next(post for post in store.load(INITIAL_POSTS) if post.id == "2")
    assert stored.comment_count == 4


def test_reply_to_unknown_parent_changes_nothing(client, store, sign_in):
    store.save(INITIAL_POSTS, build_demo_posts())
    headers = sign_in("ada")

    with track_changes(store) as changed:
        response = client.post("/posts/3/comments", json={"text": "lost reply", "parentId": "nope"}, headers=headers)

    assert response.status_code == 200
    assert changed == []
    assert response.json()["commentCount"] == 0
    assert response.json()["comments"] == []


def test_comment_on_missing_post_is_not_found(client, sign_in):
    headers = sign_in("ada")

    response = client.post("/posts/missing/comments", json={"text": "hello"}, headers=headers)

    assert response.status_code == 404


def test_blank_comment_is_rejected(client, store, sign_in):
    store.save(INITIAL_POSTS, build_demo_posts())
    headers = sign_in("ada")

    response = client.post("/posts/1/comments", json={"text": "   "}, headers=headers)

    assert response.status_code == 400
    assert store.load(INITIAL_POSTS)[0].comments == []
