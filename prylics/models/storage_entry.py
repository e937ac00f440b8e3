"""SQLAlchemy ORM model holding one serialized collection per key."""
from __future__ import annotations

from sqlalchemy import Column, String, Text

from prylics.database import Base

from .base import TimestampMixin


class StorageEntry(TimestampMixin, Base):
    __tablename__ = "storage_entries"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False, default="[]")


__all__ = ["StorageEntry"]
