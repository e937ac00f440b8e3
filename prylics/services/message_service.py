"""Message construction shared by conversations, circle chats and project discussions."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence
from uuid import uuid4

from fastapi import HTTPException, status

from ..schemas import Message, UserProfile


def _now() -> datetime:
    return datetime.now(timezone.utc)


def timestamp_id(moment: datetime | None = None) -> str:
    """Identifier derived from the creation time, suffixed to keep same-instant ids distinct."""

    moment = moment or _now()
    return f"{moment.isoformat()}-{uuid4().hex[:8]}"


def normalize_message_text(text: str) -> str:
    cleaned = (text or "").strip()
    if not cleaned:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Message text cannot be empty")
    return cleaned


def build_message(sender: UserProfile, text: str, *, include_sender: bool = True) -> Message:
    moment = _now()
    return Message(
        id=timestamp_id(moment),
        sender_id=sender.uid,
        sender=sender if include_sender else None,
        text=normalize_message_text(text),
        timestamp=moment,
    )


def last_message(messages: Sequence[Message]) -> Message | None:
    return messages[-1] if messages else None


__all__ = ["build_message", "last_message", "normalize_message_text", "timestamp_id"]
