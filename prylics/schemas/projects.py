"""Schemas for collaborative projects and their discussions."""
from __future__ import annotations

from pydantic import Field

from .base import EntityModel
from .messages import Message
from .users import UserProfile


class Project(EntityModel):
    id: str
    title: str
    description: str
    creator_id: str
    collaborators: list[UserProfile] = Field(default_factory=list)


class ProjectDiscussion(EntityModel):
    id: str
    messages: list[Message] = Field(default_factory=list)


class ProjectCreate(EntityModel):
    title: str = Field(..., min_length=3, max_length=50)
    description: str = Field(..., min_length=10, max_length=500)


class ProjectDetailResponse(EntityModel):
    project: Project
    is_collaborator: bool
    is_creator: bool


class ProjectListResponse(EntityModel):
    items: list[Project]


class CollaborationToggleResponse(EntityModel):
    joined: bool
    navigate_to: str | None = None
    project: Project


__all__ = [
    "Project",
    "ProjectDiscussion",
    "ProjectCreate",
    "ProjectDetailResponse",
    "ProjectListResponse",
    "CollaborationToggleResponse",
]
