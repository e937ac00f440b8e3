"""Utility mixins shared across ORM models."""
from __future__ import annotations

from sqlalchemy import Column, DateTime
from sqlalchemy.sql import func


class TimestampMixin:
    """Row timestamps with timezone-aware defaults; ``updated_at`` moves on every overwrite."""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


__all__ = ["TimestampMixin"]
