"""Aggregated profile view: posts, projects and follow graph for one user."""
from __future__ import annotations

from fastapi import HTTPException, status

from ..schemas import ProfileOverviewResponse, UserProfile
from .entity_store import EntityStore
from .follow_service import get_follow_stats
from .post_service import list_posts_by_author
from .project_service import list_projects_for_user
from .user_directory import get_known_user


def get_profile_overview(store: EntityStore, *, user_id: str, viewer: UserProfile | None) -> ProfileOverviewResponse:
    is_own_profile = viewer is not None and viewer.uid == user_id
    profile = viewer if is_own_profile else get_known_user(store, user_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    stats = get_follow_stats(store, user_id=user_id, viewer_id=viewer.uid if viewer else None)
    return ProfileOverviewResponse(
        user=profile,
        posts=list_posts_by_author(store, user_id),
        projects=list_projects_for_user(store, user_id),
        followers=stats.followers,
        following=stats.following,
        is_own_profile=is_own_profile,
        is_following=stats.is_following,
    )


__all__ = ["get_profile_overview"]
