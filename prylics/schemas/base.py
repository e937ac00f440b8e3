"""Shared Pydantic configuration for persisted entities."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EntityModel(BaseModel):
    """Base for every stored shape; serialized in camelCase, accepted in either case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


__all__ = ["EntityModel"]
