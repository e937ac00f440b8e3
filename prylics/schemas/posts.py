"""Pydantic schemas for posts, comment trees and the crowdfunding display."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field, computed_field, field_validator

from .base import EntityModel
from .users import UserProfile

PostType = Literal["research", "idea", "question"]


class Funding(EntityModel):
    goal: float
    raised: float = 0


class Comment(EntityModel):
    id: str
    author: UserProfile
    text: str
    timestamp: datetime
    replies: list["Comment"] = Field(default_factory=list)


class Post(EntityModel):
    id: str
    author: UserProfile
    creator_id: str
    type: PostType
    timestamp: str
    created_at: datetime | None = None
    content: str
    tags: list[str] = Field(default_factory=list)
    likes: int = 0
    comments: list[Comment] = Field(default_factory=list)
    comment_count: int = 0
    image_url: str | None = None
    image_ai_hint: str | None = None
    funding: Funding | None = None


class PostCreate(EntityModel):
    """Payload used by clients when publishing a post."""

    type: PostType = "idea"
    content: str = Field(..., min_length=10, max_length=5000)
    tags: list[str] = Field(..., min_length=1)
    image_url: str | None = None
    funding_goal: float | None = Field(default=None, gt=0)

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, value: list[str]) -> list[str]:
        seen: set[str] = set()
        tags: list[str] = []
        for raw in value:
            tag = raw.strip()
            if tag and tag not in seen:
                seen.add(tag)
                tags.append(tag)
        if not tags:
            raise ValueError("Please add at least one tag.")
        return tags


class CommentCreate(EntityModel):
    text: str = Field(..., min_length=1, max_length=1000)
    parent_id: str | None = None


class CommentTreeResponse(EntityModel):
    post_id: str
    comment_count: int
    comments: list[Comment]


class PostFeedResponse(EntityModel):
    """Envelope used when returning a collection of posts."""

    items: list[Post]


class FundingCampaign(EntityModel):
    id: str
    title: str
    description: str
    image_url: str | None = None
    image_ai_hint: str | None = None
    funding_goal: float
    funding_raised: float
    circle_name: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def progress(self) -> float:
        if self.funding_goal <= 0:
            return 0.0
        return round(min(self.funding_raised / self.funding_goal, 1.0) * 100, 1)


class CrowdfundingResponse(EntityModel):
    campaigns: list[FundingCampaign]
    funded_posts: list[Post]


Comment.model_rebuild()


__all__ = [
    "PostType",
    "Funding",
    "Comment",
    "Post",
    "PostCreate",
    "CommentCreate",
    "CommentTreeResponse",
    "PostFeedResponse",
    "FundingCampaign",
    "CrowdfundingResponse",
]
