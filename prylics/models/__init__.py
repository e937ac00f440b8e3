"""Convenience exports for ORM models."""
from .base import TimestampMixin
from .storage_entry import StorageEntry

__all__ = [
    "StorageEntry",
    "TimestampMixin",
]
