"""Whole-collection persistence over a shared key-value namespace.

Every collection lives as one JSON array under a fixed key in the
``storage_entries`` table. Callers read the full collection, mutate it in
memory and write the full collection back; there are no partial updates and no
transactions spanning keys. Stored blobs are validated against the
collection's Pydantic model on read, and anything that does not parse is
rejected with :class:`MalformedCollectionError` instead of being treated as
empty.
"""
from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Generic, Iterator, Sequence, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..database import SessionLocal
from ..models import StorageEntry
from ..schemas import (
    Circle,
    CircleChat,
    CircleMembership,
    Conversation,
    Following,
    Post,
    Project,
    ProjectDiscussion,
    UserProfile,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

StoreListener = Callable[[str], None]


class EntityStoreError(RuntimeError):
    """Base class for storage failures."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message)
        self.key = key


class MalformedCollectionError(EntityStoreError):
    """Raised when a stored collection cannot be parsed into its entity shape."""

    def __init__(self, key: str) -> None:
        super().__init__(key, f"Stored collection '{key}' is malformed")


class StorageWriteError(EntityStoreError):
    """Raised when a collection could not be written back."""

    def __init__(self, key: str) -> None:
        super().__init__(key, f"Unable to persist collection '{key}'")


@dataclass(frozen=True, slots=True)
class Collection(Generic[T]):
    """A named key in the namespace and the entity model stored under it."""

    key: str
    model: type[T]

    @property
    def adapter(self) -> TypeAdapter[list[T]]:
        return _list_adapter(self.model)


@lru_cache(maxsize=None)
def _list_adapter(model: type[BaseModel]) -> TypeAdapter[Any]:
    return TypeAdapter(list[model])  # type: ignore[valid-type]


INITIAL_POSTS: Collection[Post] = Collection("initialPosts", Post)
USER_POSTS: Collection[Post] = Collection("userPosts", Post)
KNOWN_USERS: Collection[UserProfile] = Collection("knownUsers", UserProfile)
CONVERSATIONS: Collection[Conversation] = Collection("conversations", Conversation)
FOLLOWING: Collection[Following] = Collection("following", Following)
CIRCLES: Collection[Circle] = Collection("circles", Circle)
CIRCLE_MEMBERSHIPS: Collection[CircleMembership] = Collection("circleMemberships", CircleMembership)
CIRCLE_CHATS: Collection[CircleChat] = Collection("circleChats", CircleChat)
PROJECTS: Collection[Project] = Collection("projects", Project)
PROJECT_DISCUSSIONS: Collection[ProjectDiscussion] = Collection("projectDiscussions", ProjectDiscussion)

ALL_COLLECTIONS: tuple[Collection[Any], ...] = (
    INITIAL_POSTS,
    USER_POSTS,
    KNOWN_USERS,
    CONVERSATIONS,
    FOLLOWING,
    CIRCLES,
    CIRCLE_MEMBERSHIPS,
    CIRCLE_CHATS,
    PROJECTS,
    PROJECT_DISCUSSIONS,
)

# Probe order when addressing a post by id: user-generated content shadows seed data.
POST_COLLECTIONS: tuple[Collection[Post], ...] = (USER_POSTS, INITIAL_POSTS)


@dataclass(slots=True)
class PostLocation:
    collection: Collection[Post]
    posts: list[Post]
    index: int

    @property
    def post(self) -> Post:
        return self.posts[self.index]


class EntityStore:
    """Typed read/write access to the persisted collections."""

    def __init__(self, session_factory: sessionmaker[Session] | Callable[[], Session] = SessionLocal) -> None:
        self._session_factory = session_factory
        self._listeners: list[StoreListener] = []

    # -- change notification -------------------------------------------------

    def add_listener(self, listener: StoreListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: StoreListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, key: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(key)
            except Exception:  # pragma: no cover - the write has already committed
                logger.exception("Storage listener failed for key=%s", key)

    # -- raw access ----------------------------------------------------------

    def load_raw(self, key: str) -> list[Any] | None:
        """Return the decoded JSON array stored at ``key`` or ``None`` if never written."""

        with self._session_factory() as session:
            entry = session.get(StorageEntry, key)
            if entry is None:
                return None
            raw = entry.value
        try:
            decoded = json.loads(raw)
        except (TypeError, json.JSONDecodeError) as exc:
            logger.exception("Stored collection is not valid JSON | key=%s", key)
            raise MalformedCollectionError(key) from exc
        if not isinstance(decoded, list):
            logger.error("Stored collection is not a JSON array | key=%s type=%s", key, type(decoded).__name__)
            raise MalformedCollectionError(key)
        return decoded

    def save_raw(self, key: str, items: Sequence[Any]) -> None:
        payload = json.dumps(list(items), separators=(",", ":"))
        with self._session_factory() as session:
            try:
                entry = session.get(StorageEntry, key)
                if entry is None:
                    session.add(StorageEntry(key=key, value=payload))
                else:
                    entry.value = payload
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                logger.exception("Failed to persist collection | key=%s", key)
                raise StorageWriteError(key) from exc
        self._notify(key)

    def exists(self, key: str) -> bool:
        with self._session_factory() as session:
            return session.get(StorageEntry, key) is not None

    def keys(self) -> list[str]:
        with self._session_factory() as session:
            return list(session.scalars(select(StorageEntry.key).order_by(StorageEntry.key)))

    def clear(self, collection: Collection[Any]) -> None:
        with self._session_factory() as session:
            entry = session.get(StorageEntry, collection.key)
            if entry is None:
                return
            try:
                session.delete(entry)
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                raise StorageWriteError(collection.key) from exc
        self._notify(collection.key)

    # -- typed access --------------------------------------------------------

    def load(self, collection: Collection[T]) -> list[T]:
        """Return every entity in ``collection``; an absent key reads as empty."""

        raw = self.load_raw(collection.key)
        if raw is None:
            return []
        try:
            return collection.adapter.validate_python(raw)
        except ValidationError as exc:
            logger.exception("Stored collection failed validation | key=%s errors=%s", collection.key, exc.error_count())
            raise MalformedCollectionError(collection.key) from exc

    def save(self, collection: Collection[T], items: Sequence[T]) -> None:
        """Overwrite ``collection`` with ``items``."""

        payload = [item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in items]
        self.save_raw(collection.key, payload)

    # -- post addressing -----------------------------------------------------

    def locate_post(self, post_id: str) -> PostLocation | None:
        """Find the collection currently holding ``post_id``."""

        for collection in POST_COLLECTIONS:
            posts = self.load(collection)
            for index, post in enumerate(posts):
                if post.id == post_id:
                    return PostLocation(collection=collection, posts=posts, index=index)
        return None


@contextmanager
def track_changes(store: EntityStore) -> Iterator[list[str]]:
    """Collect the keys written through ``store`` while the block runs."""

    changed: list[str] = []
    listener = changed.append
    store.add_listener(listener)
    try:
        yield changed
    finally:
        store.remove_listener(listener)


_store: EntityStore | None = None


def get_entity_store() -> EntityStore:
    """FastAPI dependency returning the process-wide store."""

    global _store
    if _store is None:
        _store = EntityStore()
    return _store


def set_entity_store(store: EntityStore | None) -> None:
    """Replace the process-wide store (useful for tests)."""

    global _store
    _store = store


__all__ = [
    "ALL_COLLECTIONS",
    "CIRCLES",
    "CIRCLE_CHATS",
    "CIRCLE_MEMBERSHIPS",
    "CONVERSATIONS",
    "Collection",
    "EntityStore",
    "EntityStoreError",
    "FOLLOWING",
    "INITIAL_POSTS",
    "KNOWN_USERS",
    "MalformedCollectionError",
    "POST_COLLECTIONS",
    "PROJECTS",
    "PROJECT_DISCUSSIONS",
    "PostLocation",
    "StorageWriteError",
    "USER_POSTS",
    "get_entity_store",
    "set_entity_store",
    "track_changes",
]
