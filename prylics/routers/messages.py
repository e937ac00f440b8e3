"""Direct conversation API routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..schemas import (
    Conversation,
    ConversationCreate,
    ConversationDetailResponse,
    ConversationListResponse,
    MessageSendRequest,
    UserProfile,
)
from ..services import (
    EntityStore,
    get_conversation,
    get_current_user,
    get_entity_store,
    get_or_create_conversation,
    list_conversations_for_user,
    send_direct_message,
    track_changes,
)
from ..services.realtime import broadcast_storage_change

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("/conversations", response_model=ConversationListResponse)
async def list_conversations(
    store: EntityStore = Depends(get_entity_store),
    current_user: UserProfile = Depends(get_current_user),
) -> ConversationListResponse:
    return ConversationListResponse(items=list_conversations_for_user(store, current_user.uid))


@router.post("/conversations", response_model=Conversation)
async def open_conversation(
    payload: ConversationCreate,
    store: EntityStore = Depends(get_entity_store),
    current_user: UserProfile = Depends(get_current_user),
) -> Conversation:
    with track_changes(store) as changed:
        conversation = get_or_create_conversation(store, current_user.uid, payload.participant_id)
    await broadcast_storage_change(*changed)
    return conversation


@router.get("/conversations/{conversation_id}", response_model=ConversationDetailResponse)
async def read_conversation(
    conversation_id: str,
    store: EntityStore = Depends(get_entity_store),
    current_user: UserProfile = Depends(get_current_user),
) -> ConversationDetailResponse:
    conversation, other_user = get_conversation(store, conversation_id=conversation_id, viewer_id=current_user.uid)
    return ConversationDetailResponse(conversation=conversation, other_user=other_user)


@router.post(
    "/conversations/{conversation_id}",
    response_model=Conversation,
    status_code=status.HTTP_201_CREATED,
)
async def send_message_endpoint(
    conversation_id: str,
    payload: MessageSendRequest,
    store: EntityStore = Depends(get_entity_store),
    current_user: UserProfile = Depends(get_current_user),
) -> Conversation:
    with track_changes(store) as changed:
        conversation = send_direct_message(
            store,
            conversation_id=conversation_id,
            sender=current_user,
            text=payload.text,
        )
    await broadcast_storage_change(*changed)
    return conversation


__all__ = ["router"]
