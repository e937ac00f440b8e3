"""Circles: creation, membership toggles, chats and deletion."""
from __future__ import annotations

import logging
import re
import time

from fastapi import HTTPException, status

from ..schemas import Circle, CircleChat, CircleCreate, CircleMembership, UserProfile
from .entity_store import CIRCLE_CHATS, CIRCLE_MEMBERSHIPS, CIRCLES, EntityStore
from .membership import adjust_count, toggle_member
from .message_service import build_message

logger = logging.getLogger(__name__)


def slugged_id(label: str) -> str:
    """Readable identifier built from a display label and the creation time in milliseconds."""

    slug = re.sub(r"[^a-z0-9]+", "-", label.lower()).strip("-") or "untitled"
    return f"{slug}-{int(time.time() * 1000)}"


def _find_circle(circles: list[Circle], circle_id: str) -> int | None:
    for index, circle in enumerate(circles):
        if circle.id == circle_id:
            return index
    return None


def _get_circle_or_404(store: EntityStore, circle_id: str) -> Circle:
    circles = store.load(CIRCLES)
    index = _find_circle(circles, circle_id)
    if index is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Circle not found")
    return circles[index]


def _membership_for(memberships: list[CircleMembership], user_id: str) -> CircleMembership:
    for membership in memberships:
        if membership.user_id == user_id:
            return membership
    membership = CircleMembership(user_id=user_id, circle_ids=[])
    memberships.append(membership)
    return membership


def list_circles(store: EntityStore) -> list[Circle]:
    return store.load(CIRCLES)


def is_circle_member(store: EntityStore, *, circle_id: str, user_id: str) -> bool:
    for membership in store.load(CIRCLE_MEMBERSHIPS):
        if membership.user_id == user_id:
            return circle_id in membership.circle_ids
    return False


def get_circle(store: EntityStore, circle_id: str) -> Circle:
    return _get_circle_or_404(store, circle_id)


def create_circle(store: EntityStore, *, creator: UserProfile, payload: CircleCreate) -> Circle:
    """Persist a circle with its creator as the first member and an empty chat."""

    circle = Circle(
        id=slugged_id(payload.name),
        name=payload.name.strip(),
        description=payload.description.strip(),
        creator_id=creator.uid,
        member_count=1,
    )
    circles = store.load(CIRCLES)
    circles.append(circle)
    store.save(CIRCLES, circles)

    memberships = store.load(CIRCLE_MEMBERSHIPS)
    membership = _membership_for(memberships, creator.uid)
    if circle.id not in membership.circle_ids:
        membership.circle_ids.append(circle.id)
    store.save(CIRCLE_MEMBERSHIPS, memberships)

    chats = store.load(CIRCLE_CHATS)
    chats.append(CircleChat(id=circle.id, messages=[]))
    store.save(CIRCLE_CHATS, chats)

    logger.info("Created circle id=%s creator=%s", circle.id, creator.uid)
    return circle


def toggle_circle_membership(store: EntityStore, *, circle_id: str, user_id: str) -> tuple[bool, Circle]:
    """Join or leave ``circle_id`` and keep ``member_count`` in step with the membership lists."""

    circles = store.load(CIRCLES)
    index = _find_circle(circles, circle_id)
    if index is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Circle not found")

    memberships = store.load(CIRCLE_MEMBERSHIPS)
    membership = _membership_for(memberships, user_id)
    result = toggle_member(membership.circle_ids, circle_id)
    membership.circle_ids = result.member_ids

    circle = circles[index]
    updated = circle.model_copy(update={"member_count": adjust_count(circle.member_count, result.joined)})
    circles[index] = updated

    store.save(CIRCLES, circles)
    store.save(CIRCLE_MEMBERSHIPS, memberships)
    logger.info("Circle membership toggled | circle=%s user=%s joined=%s", circle_id, user_id, result.joined)
    return result.joined, updated


def get_circle_chat(store: EntityStore, *, circle_id: str, user_id: str) -> CircleChat:
    _get_circle_or_404(store, circle_id)
    if not is_circle_member(store, circle_id=circle_id, user_id=user_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Join this circle to see the chat")
    for chat in store.load(CIRCLE_CHATS):
        if chat.id == circle_id:
            return chat
    return CircleChat(id=circle_id, messages=[])


def send_circle_message(store: EntityStore, *, circle_id: str, sender: UserProfile, text: str) -> CircleChat:
    message = build_message(sender, text)
    _get_circle_or_404(store, circle_id)
    if not is_circle_member(store, circle_id=circle_id, user_id=sender.uid):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Join this circle to chat")

    chats = store.load(CIRCLE_CHATS)
    for index, chat in enumerate(chats):
        if chat.id == circle_id:
            updated = chat.model_copy(update={"messages": [*chat.messages, message]})
            chats[index] = updated
            break
    else:
        updated = CircleChat(id=circle_id, messages=[message])
        chats.append(updated)
    store.save(CIRCLE_CHATS, chats)
    return updated


def delete_circle(store: EntityStore, *, circle_id: str, requester_id: str) -> Circle:
    """Remove the circle, its chat history and every membership reference to it."""

    circle = _get_circle_or_404(store, circle_id)
    if circle.creator_id != requester_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only the creator can delete this circle")

    store.save(CIRCLES, [c for c in store.load(CIRCLES) if c.id != circle_id])
    store.save(CIRCLE_CHATS, [chat for chat in store.load(CIRCLE_CHATS) if chat.id != circle_id])

    memberships = store.load(CIRCLE_MEMBERSHIPS)
    for membership in memberships:
        membership.circle_ids = [value for value in membership.circle_ids if value != circle_id]
    store.save(CIRCLE_MEMBERSHIPS, memberships)

    logger.info("Deleted circle id=%s", circle_id)
    return circle


__all__ = [
    "create_circle",
    "delete_circle",
    "get_circle",
    "get_circle_chat",
    "is_circle_member",
    "list_circles",
    "send_circle_message",
    "slugged_id",
    "toggle_circle_membership",
]
