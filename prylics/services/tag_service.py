"""AI tag suggestions for post drafts, backed by an external model service."""
from __future__ import annotations

import logging
from typing import Any, Protocol, Sequence, cast

import httpx

from ..config import get_settings

logger = logging.getLogger(__name__)


class TagSuggestionError(RuntimeError):
    """Raised by clients when the model service cannot produce suggestions."""


class TagSuggestionClient(Protocol):
    def suggest(self, *, post_content: str) -> Sequence[str]:
        """Return raw tag suggestions for ``post_content``."""
        ...


class HTTPTagSuggestionClient(TagSuggestionClient):
    """Posts ``{"postContent": ...}`` to the model service and reads ``suggestedTags``."""

    def __init__(self, *, endpoint: str, timeout: float) -> None:
        self._endpoint = endpoint.rstrip("/")
        self._timeout = timeout
        self._client = httpx.Client(timeout=timeout)

    def suggest(self, *, post_content: str) -> Sequence[str]:
        try:
            response = self._client.post(self._endpoint, json={"postContent": post_content})
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.error(
                "Tag suggestion timeout | endpoint=%s timeout=%s error=%s",
                self._endpoint,
                self._timeout,
                type(exc).__name__,
            )
            raise TagSuggestionError("Tag suggestion request timed out") from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Tag suggestion HTTP status error | endpoint=%s status=%s",
                self._endpoint,
                exc.response.status_code if exc.response is not None else "unknown",
            )
            raise TagSuggestionError("Tag suggestion request failed") from exc
        except httpx.HTTPError as exc:
            logger.error(
                "Tag suggestion transport error | endpoint=%s error=%s",
                self._endpoint,
                type(exc).__name__,
            )
            raise TagSuggestionError("Tag suggestion request failed") from exc

        try:
            data = cast(dict[str, Any], response.json())
        except ValueError as exc:
            raise TagSuggestionError("Tag suggestion response was not valid JSON") from exc

        tags = data.get("suggestedTags") if isinstance(data, dict) else None
        if not isinstance(tags, list):
            raise TagSuggestionError("Invalid tag suggestion response format")
        return [tag for tag in tags if isinstance(tag, str)]


_tag_client: TagSuggestionClient | None = None


def set_tag_client(client: TagSuggestionClient | None) -> None:
    """Override the suggestion client (useful for tests)."""

    global _tag_client
    _tag_client = client


def _get_tag_client() -> TagSuggestionClient | None:
    global _tag_client
    if _tag_client is None:
        settings = get_settings()
        if not settings.ai_tags_url:
            return None
        _tag_client = HTTPTagSuggestionClient(endpoint=settings.ai_tags_url, timeout=settings.ai_tags_timeout)
    return _tag_client


def _clean_tags(raw: Sequence[str]) -> list[str]:
    seen: set[str] = set()
    tags: list[str] = []
    for value in raw:
        tag = value.strip().lstrip("#").strip()
        if tag and tag not in seen:
            seen.add(tag)
            tags.append(tag)
    return tags


def suggest_tags(post_content: str) -> list[str]:
    """Suggest tags for a draft; short drafts and any failure yield no suggestions."""

    content = (post_content or "").strip()
    if len(content) < get_settings().ai_tags_min_chars:
        return []

    client = _get_tag_client()
    if client is None:
        return []

    try:
        raw = client.suggest(post_content=content)
    except Exception:
        logger.warning("Tag suggestions unavailable; continuing without them", exc_info=True)
        return []
    return _clean_tags(raw)


__all__ = [
    "HTTPTagSuggestionClient",
    "TagSuggestionClient",
    "TagSuggestionError",
    "set_tag_client",
    "suggest_tags",
]
