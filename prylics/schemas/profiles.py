"""Schemas for the aggregated profile view."""
from __future__ import annotations

from .base import EntityModel
from .posts import Post
from .projects import Project
from .users import UserProfile


class ProfileOverviewResponse(EntityModel):
    user: UserProfile
    posts: list[Post]
    projects: list[Project]
    followers: list[UserProfile]
    following: list[UserProfile]
    is_own_profile: bool
    is_following: bool


__all__ = ["ProfileOverviewResponse"]
