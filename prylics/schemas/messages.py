"""Schemas for direct conversations and the shared message shape."""
from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import EntityModel
from .users import UserProfile


class Message(EntityModel):
    id: str
    sender_id: str
    sender: UserProfile | None = None
    text: str
    timestamp: datetime


class Conversation(EntityModel):
    id: str
    participant_ids: list[str]
    messages: list[Message] = Field(default_factory=list)


class MessageSendRequest(EntityModel):
    text: str = Field(..., min_length=1, max_length=2000)


class ConversationCreate(EntityModel):
    participant_id: str = Field(..., min_length=1)


class ConversationSummary(EntityModel):
    id: str
    participant_ids: list[str]
    other_user: UserProfile
    last_message: Message | None = None


class ConversationListResponse(EntityModel):
    items: list[ConversationSummary]


class ConversationDetailResponse(EntityModel):
    conversation: Conversation
    other_user: UserProfile


__all__ = [
    "Message",
    "Conversation",
    "MessageSendRequest",
    "ConversationCreate",
    "ConversationSummary",
    "ConversationListResponse",
    "ConversationDetailResponse",
]
