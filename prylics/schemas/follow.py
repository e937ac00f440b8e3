"""Schemas supporting follower APIs."""
from __future__ import annotations

from typing import Literal

from pydantic import Field

from .base import EntityModel
from .users import UserProfile


class Following(EntityModel):
    user_id: str
    following_ids: list[str] = Field(default_factory=list)


class FollowStatsResponse(EntityModel):
    user_id: str
    followers: list[UserProfile]
    following: list[UserProfile]
    followers_count: int
    following_count: int
    is_following: bool


class FollowActionResponse(FollowStatsResponse):
    status: Literal["followed", "unfollowed"]


__all__ = ["Following", "FollowStatsResponse", "FollowActionResponse"]
