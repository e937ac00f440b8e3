"""Business logic for follower relationships."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import HTTPException, status

from ..schemas import Following, UserProfile
from .entity_store import FOLLOWING, EntityStore
from .membership import toggle_member
from .user_directory import profile_index

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FollowStats:
    user_id: str
    followers: list[UserProfile]
    following: list[UserProfile]
    followers_count: int
    following_count: int
    is_following: bool


def _record_for(records: list[Following], user_id: str) -> Following:
    for record in records:
        if record.user_id == user_id:
            return record
    record = Following(user_id=user_id, following_ids=[])
    records.append(record)
    return record


def toggle_follow(store: EntityStore, *, follower_id: str, target_id: str) -> bool:
    """Follow ``target_id`` or stop following it; returns whether ``follower_id`` now follows."""

    if follower_id == target_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot follow yourself")

    records = store.load(FOLLOWING)
    record = _record_for(records, follower_id)
    result = toggle_member(record.following_ids, target_id)
    record.following_ids = result.member_ids
    store.save(FOLLOWING, records)
    logger.info("Follow toggled | follower=%s target=%s following=%s", follower_id, target_id, result.joined)
    return result.joined


def get_follow_stats(store: EntityStore, *, user_id: str, viewer_id: str | None = None) -> FollowStats:
    records = store.load(FOLLOWING)
    profiles = profile_index(store)

    follower_uids = [record.user_id for record in records if user_id in record.following_ids]
    followed_uids: list[str] = []
    is_following = False
    for record in records:
        if record.user_id == user_id:
            followed_uids = list(record.following_ids)
        if viewer_id is not None and record.user_id == viewer_id:
            is_following = user_id in record.following_ids

    # Profiles missing from the directory are left out of the lists.
    followers = [profiles[uid] for uid in follower_uids if uid in profiles]
    following = [profiles[uid] for uid in followed_uids if uid in profiles]
    return FollowStats(
        user_id=user_id,
        followers=followers,
        following=following,
        followers_count=len(follower_uids),
        following_count=len(followed_uids),
        is_following=is_following,
    )


__all__ = ["FollowStats", "get_follow_stats", "toggle_follow"]
