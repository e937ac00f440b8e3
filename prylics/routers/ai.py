"""AI-assisted drafting endpoints."""
from __future__ import annotations

from fastapi import APIRouter

from ..schemas import TagSuggestionRequest, TagSuggestionResponse
from ..services import suggest_tags

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/suggest-tags", response_model=TagSuggestionResponse)
def suggest_tags_endpoint(payload: TagSuggestionRequest) -> TagSuggestionResponse:
    return TagSuggestionResponse(suggested_tags=suggest_tags(payload.post_content))


__all__ = ["router"]
