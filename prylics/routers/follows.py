"""Follow management API routes."""
from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends

from ..schemas import FollowActionResponse, FollowStatsResponse, UserProfile
from ..services import (
    EntityStore,
    get_current_user,
    get_entity_store,
    get_follow_stats,
    get_optional_user,
    toggle_follow,
    track_changes,
)
from ..services.realtime import broadcast_storage_change

router = APIRouter(prefix="/follows", tags=["follows"])


@router.post("/{target_id}", response_model=FollowActionResponse)
async def toggle_follow_endpoint(
    target_id: str,
    store: EntityStore = Depends(get_entity_store),
    current_user: UserProfile = Depends(get_current_user),
) -> FollowActionResponse:
    with track_changes(store) as changed:
        following = toggle_follow(store, follower_id=current_user.uid, target_id=target_id)
    await broadcast_storage_change(*changed)
    stats = get_follow_stats(store, user_id=target_id, viewer_id=current_user.uid)
    payload = asdict(stats)
    payload["status"] = "followed" if following else "unfollowed"
    return FollowActionResponse(**payload)


@router.get("/stats/{user_id}", response_model=FollowStatsResponse)
async def follow_stats_endpoint(
    user_id: str,
    store: EntityStore = Depends(get_entity_store),
    viewer: UserProfile | None = Depends(get_optional_user),
) -> FollowStatsResponse:
    stats = get_follow_stats(store, user_id=user_id, viewer_id=viewer.uid if viewer else None)
    return FollowStatsResponse(**asdict(stats))


__all__ = ["router"]
