"""Schemas for user profiles and the identity provider hand-off."""
from __future__ import annotations

from pydantic import BaseModel, Field

from .base import EntityModel


class UserProfile(EntityModel):
    uid: str
    name: str
    email: str | None = None
    avatar_url: str
    profile_url: str
    data_ai_hint: str | None = None


class IdentityPayload(EntityModel):
    """Shape supplied by the external identity provider after sign-in."""

    uid: str = Field(..., min_length=1, max_length=128)
    display_name: str | None = None
    email: str | None = None
    photo_url: str | None = Field(default=None, alias="photoURL")


class SessionResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserProfile


class UserSearchResponse(EntityModel):
    items: list[UserProfile]


__all__ = ["UserProfile", "IdentityPayload", "SessionResponse", "UserSearchResponse"]
