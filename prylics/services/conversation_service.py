"""Two-party conversations addressed by a participant-derived identifier."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import HTTPException, status

from ..schemas import Conversation, ConversationSummary, UserProfile
from .entity_store import CONVERSATIONS, EntityStore
from .message_service import build_message, last_message
from .user_directory import placeholder_profile, profile_index

logger = logging.getLogger(__name__)

CONVERSATION_ID_SEPARATOR = "--"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def resolve_conversation_id(user_id_a: str, user_id_b: str) -> str:
    """Order-independent identifier for the conversation between two distinct users."""

    if user_id_a == user_id_b:
        raise ValueError("A conversation needs two distinct participants")
    if CONVERSATION_ID_SEPARATOR in user_id_a or CONVERSATION_ID_SEPARATOR in user_id_b:
        raise ValueError(f"Participant ids cannot contain '{CONVERSATION_ID_SEPARATOR}'")
    return CONVERSATION_ID_SEPARATOR.join(sorted((user_id_a, user_id_b)))


def get_or_create_conversation(store: EntityStore, user_id_a: str, user_id_b: str) -> Conversation:
    if user_id_a == user_id_b:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot send a message to yourself")

    try:
        conversation_id = resolve_conversation_id(user_id_a, user_id_b)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    conversations = store.load(CONVERSATIONS)
    for conversation in conversations:
        if conversation.id == conversation_id:
            return conversation

    conversation = Conversation(id=conversation_id, participant_ids=[user_id_a, user_id_b], messages=[])
    conversations.append(conversation)
    store.save(CONVERSATIONS, conversations)
    logger.info("Created conversation id=%s", conversation_id)
    return conversation


def _get_conversation_or_404(conversations: list[Conversation], conversation_id: str) -> tuple[int, Conversation]:
    for index, conversation in enumerate(conversations):
        if conversation.id == conversation_id:
            return index, conversation
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Conversation not found")


def _require_participant(conversation: Conversation, user_id: str) -> None:
    if user_id not in conversation.participant_ids:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not a participant in this conversation")


def other_participant_id(conversation: Conversation, user_id: str) -> str:
    for participant_id in conversation.participant_ids:
        if participant_id != user_id:
            return participant_id
    return user_id


def get_conversation(store: EntityStore, *, conversation_id: str, viewer_id: str) -> tuple[Conversation, UserProfile]:
    _, conversation = _get_conversation_or_404(store.load(CONVERSATIONS), conversation_id)
    _require_participant(conversation, viewer_id)
    other_id = other_participant_id(conversation, viewer_id)
    profiles = profile_index(store)
    return conversation, profiles.get(other_id) or placeholder_profile(other_id)


def send_direct_message(store: EntityStore, *, conversation_id: str, sender: UserProfile, text: str) -> Conversation:
    message = build_message(sender, text, include_sender=False)
    conversations = store.load(CONVERSATIONS)
    index, conversation = _get_conversation_or_404(conversations, conversation_id)
    _require_participant(conversation, sender.uid)

    updated = conversation.model_copy(update={"messages": [*conversation.messages, message]})
    conversations[index] = updated
    store.save(CONVERSATIONS, conversations)
    return updated


def _last_activity(conversation: Conversation) -> datetime:
    latest = last_message(conversation.messages)
    if latest is None:
        return _EPOCH
    stamp = latest.timestamp
    return stamp if stamp.tzinfo else stamp.replace(tzinfo=timezone.utc)


def list_conversations_for_user(store: EntityStore, user_id: str) -> list[ConversationSummary]:
    """Conversations involving ``user_id``, most recent activity first, empty threads last."""

    mine = [conversation for conversation in store.load(CONVERSATIONS) if user_id in conversation.participant_ids]
    active = sorted((c for c in mine if c.messages), key=_last_activity, reverse=True)
    idle = [c for c in mine if not c.messages]

    profiles = profile_index(store)
    summaries: list[ConversationSummary] = []
    for conversation in [*active, *idle]:
        other_id = other_participant_id(conversation, user_id)
        summaries.append(
            ConversationSummary(
                id=conversation.id,
                participant_ids=conversation.participant_ids,
                other_user=profiles.get(other_id) or placeholder_profile(other_id),
                last_message=last_message(conversation.messages),
            )
        )
    return summaries


__all__ = [
    "CONVERSATION_ID_SEPARATOR",
    "get_conversation",
    "get_or_create_conversation",
    "list_conversations_for_user",
    "other_participant_id",
    "resolve_conversation_id",
    "send_direct_message",
]
