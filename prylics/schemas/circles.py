"""Schemas for circles, their memberships and chats."""
from __future__ import annotations

from pydantic import Field

from .base import EntityModel
from .messages import Message


class Circle(EntityModel):
    id: str
    name: str
    description: str
    creator_id: str
    member_count: int = 0


class CircleMembership(EntityModel):
    user_id: str
    circle_ids: list[str] = Field(default_factory=list)


class CircleChat(EntityModel):
    id: str
    messages: list[Message] = Field(default_factory=list)


class CircleCreate(EntityModel):
    name: str = Field(..., min_length=3, max_length=50)
    description: str = Field(..., min_length=10, max_length=200)


class CircleDetailResponse(EntityModel):
    circle: Circle
    is_member: bool
    is_creator: bool


class CircleListResponse(EntityModel):
    items: list[Circle]


class CircleToggleResponse(EntityModel):
    joined: bool
    navigate_to: str | None = None
    circle: Circle


__all__ = [
    "Circle",
    "CircleMembership",
    "CircleChat",
    "CircleCreate",
    "CircleDetailResponse",
    "CircleListResponse",
    "CircleToggleResponse",
]
