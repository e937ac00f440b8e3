"""Schemas for AI tag suggestions."""
from __future__ import annotations

from pydantic import Field

from .base import EntityModel


class TagSuggestionRequest(EntityModel):
    post_content: str = Field(default="", max_length=5000)


class TagSuggestionResponse(EntityModel):
    suggested_tags: list[str] = Field(default_factory=list)


__all__ = ["TagSuggestionRequest", "TagSuggestionResponse"]
