"""Session endpoints for users arriving from the identity provider."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..schemas import IdentityPayload, SessionResponse, UserProfile
from ..services import EntityStore, get_current_user, get_entity_store, sign_in, track_changes
from ..services.realtime import broadcast_storage_change

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/session", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session_endpoint(
    payload: IdentityPayload,
    store: EntityStore = Depends(get_entity_store),
) -> SessionResponse:
    with track_changes(store) as changed:
        profile, token = sign_in(store, payload)
    await broadcast_storage_change(*changed)
    return SessionResponse(access_token=token, user=profile)


@router.get("/me", response_model=UserProfile)
async def read_current_user(current_user: UserProfile = Depends(get_current_user)) -> UserProfile:
    return current_user


__all__ = ["router"]
