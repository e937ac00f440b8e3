"""User directory search and profile views."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..schemas import ProfileOverviewResponse, UserProfile, UserSearchResponse
from ..services import EntityStore, get_entity_store, get_optional_user, get_profile_overview, search_users

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/search", response_model=UserSearchResponse)
async def search_users_endpoint(
    q: str = Query(default="", max_length=100),
    store: EntityStore = Depends(get_entity_store),
) -> UserSearchResponse:
    return UserSearchResponse(items=search_users(store, q))


@router.get("/{user_id}", response_model=ProfileOverviewResponse)
async def profile_overview_endpoint(
    user_id: str,
    store: EntityStore = Depends(get_entity_store),
    viewer: UserProfile | None = Depends(get_optional_user),
) -> ProfileOverviewResponse:
    return get_profile_overview(store, user_id=user_id, viewer=viewer)


__all__ = ["router"]
