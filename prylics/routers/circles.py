"""Circle API routes: listing, membership toggles, chat and deletion."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from ..schemas import (
    Circle,
    CircleChat,
    CircleCreate,
    CircleDetailResponse,
    CircleListResponse,
    CircleToggleResponse,
    MessageSendRequest,
    UserProfile,
)
from ..services import (
    EntityStore,
    create_circle,
    delete_circle,
    get_circle,
    get_circle_chat,
    get_current_user,
    get_entity_store,
    get_optional_user,
    is_circle_member,
    list_circles,
    send_circle_message,
    toggle_circle_membership,
    track_changes,
)
from ..services.realtime import broadcast_storage_change

router = APIRouter(prefix="/circles", tags=["circles"])


@router.get("", response_model=CircleListResponse)
async def list_circles_endpoint(store: EntityStore = Depends(get_entity_store)) -> CircleListResponse:
    return CircleListResponse(items=list_circles(store))


@router.post("", response_model=Circle, status_code=status.HTTP_201_CREATED)
async def create_circle_endpoint(
    payload: CircleCreate,
    store: EntityStore = Depends(get_entity_store),
    current_user: UserProfile = Depends(get_current_user),
) -> Circle:
    with track_changes(store) as changed:
        circle = create_circle(store, creator=current_user, payload=payload)
    await broadcast_storage_change(*changed)
    return circle


@router.get("/{circle_id}", response_model=CircleDetailResponse)
async def read_circle(
    circle_id: str,
    store: EntityStore = Depends(get_entity_store),
    viewer: UserProfile | None = Depends(get_optional_user),
) -> CircleDetailResponse:
    circle = get_circle(store, circle_id)
    is_member = viewer is not None and is_circle_member(store, circle_id=circle_id, user_id=viewer.uid)
    return CircleDetailResponse(
        circle=circle,
        is_member=is_member,
        is_creator=viewer is not None and viewer.uid == circle.creator_id,
    )


@router.post("/{circle_id}/membership", response_model=CircleToggleResponse)
async def toggle_membership_endpoint(
    circle_id: str,
    store: EntityStore = Depends(get_entity_store),
    current_user: UserProfile = Depends(get_current_user),
) -> CircleToggleResponse:
    with track_changes(store) as changed:
        joined, circle = toggle_circle_membership(store, circle_id=circle_id, user_id=current_user.uid)
    await broadcast_storage_change(*changed)
    return CircleToggleResponse(
        joined=joined,
        navigate_to=f"/circles/{circle.id}" if joined else None,
        circle=circle,
    )


@router.get("/{circle_id}/chat", response_model=CircleChat)
async def read_circle_chat(
    circle_id: str,
    store: EntityStore = Depends(get_entity_store),
    current_user: UserProfile = Depends(get_current_user),
) -> CircleChat:
    return get_circle_chat(store, circle_id=circle_id, user_id=current_user.uid)


@router.post("/{circle_id}/chat", response_model=CircleChat, status_code=status.HTTP_201_CREATED)
async def send_circle_message_endpoint(
    circle_id: str,
    payload: MessageSendRequest,
    store: EntityStore = Depends(get_entity_store),
    current_user: UserProfile = Depends(get_current_user),
) -> CircleChat:
    with track_changes(store) as changed:
        chat = send_circle_message(store, circle_id=circle_id, sender=current_user, text=payload.text)
    await broadcast_storage_change(*changed)
    return chat


@router.delete("/{circle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_circle_endpoint(
    circle_id: str,
    store: EntityStore = Depends(get_entity_store),
    current_user: UserProfile = Depends(get_current_user),
) -> Response:
    with track_changes(store) as changed:
        delete_circle(store, circle_id=circle_id, requester_id=current_user.uid)
    await broadcast_storage_change(*changed)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
