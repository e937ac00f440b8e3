"""Integration tests for the follow graph and profile views."""
from __future__ import annotations

from prylics.services.entity_store import FOLLOWING


def test_follow_then_unfollow_reverts_both_sides(client, store, sign_in):
    alice = sign_in("alice", "Alice")
    sign_in("bob", "Bob")

    followed = client.post("/follows/bob", headers=alice)
    assert followed.status_code == 200
    body = followed.json()
    assert body["status"] == "followed"
    assert body["isFollowing"] is True
    assert [p["uid"] for p in body["followers"]] == ["alice"]

    alice_stats = client.get("/follows/stats/alice").json()
    assert [p["uid"] for p in alice_stats["following"]] == ["bob"]
    assert alice_stats["followingCount"] == 1

    unfollowed = client.post("/follows/bob", headers=alice).json()
    assert unfollowed["status"] == "unfollowed"
    assert unfollowed["followers"] == []
    assert unfollowed["followersCount"] == 0

    assert client.get("/follows/stats/alice").json()["following"] == []
    assert store.load(FOLLOWING)[0].following_ids == []


def test_self_follow_is_rejected(client, store, sign_in):
    alice = sign_in("alice")

    response = client.post("/follows/alice", headers=alice)

    assert response.status_code == 400
    assert store.load(FOLLOWING) == []


def test_unknown_followers_are_counted_but_not_listed(client, sign_in):
    alice = sign_in("alice")
    client.post("/follows/ghost", headers=alice)

    stats = client.get("/follows/stats/alice").json()

    assert stats["followingCount"] == 1
    assert stats["following"] == []


def test_profile_overview_gathers_posts_and_follows(client, sign_in):
    alice = sign_in("alice", "Alice")
    bob = sign_in("bob", "Bob")
    client.post("/posts", json={"content": "Bob's first research note", "tags": ["notes"]}, headers=bob)
    client.post("/follows/bob", headers=alice)

    overview = client.get("/users/bob", headers=alice).json()

    assert overview["user"]["name"] == "Bob"
    assert len(overview["posts"]) == 1
    assert overview["isOwnProfile"] is False
    assert overview["isFollowing"] is True
    assert [p["uid"] for p in overview["followers"]] == ["alice"]


def test_unknown_profile_is_not_found(client):
    assert client.get("/users/nobody").status_code == 404
