"""Tests for AI tag suggestions and their degraded paths."""
from __future__ import annotations

from prylics.services import set_tag_client, suggest_tags
from prylics.services.tag_service import TagSuggestionError

DRAFT = "We measured enzyme activity on PET plastics at room temperature."


class StubTagClient:
    def __init__(self, tags=None, error: Exception | None = None) -> None:
        self.calls = 0
        self.tags = tags or []
        self.error = error
        self.last_content = None

    def suggest(self, *, post_content: str):
        self.calls += 1
        self.last_content = post_content
        if self.error is not None:
            raise self.error
        return self.tags


def test_suggestions_are_cleaned(client):
    stub = StubTagClient(tags=["#Biotech", " Plastics ", "Biotech", ""])
    set_tag_client(stub)

    response = client.post("/ai/suggest-tags", json={"postContent": DRAFT})

    assert response.status_code == 200
    assert response.json() == {"suggestedTags": ["Biotech", "Plastics"]}
    assert stub.last_content == DRAFT


def test_short_drafts_skip_the_model(client):
    stub = StubTagClient(tags=["Unused"])
    set_tag_client(stub)

    response = client.post("/ai/suggest-tags", json={"postContent": "too short"})

    assert response.json() == {"suggestedTags": []}
    assert stub.calls == 0


def test_client_failure_degrades_to_empty(client):
    set_tag_client(StubTagClient(error=TagSuggestionError("model offline")))

    response = client.post("/ai/suggest-tags", json={"postContent": DRAFT})

    assert response.status_code == 200
    assert response.json() == {"suggestedTags": []}


def test_unconfigured_endpoint_returns_nothing():
    set_tag_client(None)

    assert suggest_tags(DRAFT) == []
