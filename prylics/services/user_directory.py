"""The known-user directory: identity upserts, lookups and placeholders."""
from __future__ import annotations

import logging

from ..config import get_settings
from ..schemas import IdentityPayload, UserProfile
from .entity_store import KNOWN_USERS, EntityStore

logger = logging.getLogger(__name__)

UNKNOWN_USER_NAME = "Unknown User"
ANONYMOUS_NAME = "Anonymous"


def profile_url_for(uid: str) -> str:
    return f"/profile/{uid}"


def placeholder_profile(uid: str) -> UserProfile:
    """Stand-in for a referenced user missing from the directory."""

    return UserProfile(
        uid=uid,
        name=UNKNOWN_USER_NAME,
        avatar_url=get_settings().placeholder_avatar_url,
        profile_url=profile_url_for(uid),
    )


def profile_from_identity(identity: IdentityPayload) -> UserProfile:
    display_name = (identity.display_name or "").strip()
    return UserProfile(
        uid=identity.uid,
        name=display_name or ANONYMOUS_NAME,
        email=identity.email,
        avatar_url=identity.photo_url or get_settings().placeholder_avatar_url,
        profile_url=profile_url_for(identity.uid),
    )


def upsert_known_user(store: EntityStore, identity: IdentityPayload) -> UserProfile:
    """Add the signed-in user to the directory once per uid and return the stored profile."""

    known_users = store.load(KNOWN_USERS)
    for existing in known_users:
        if existing.uid == identity.uid:
            return existing

    profile = profile_from_identity(identity)
    known_users.append(profile)
    store.save(KNOWN_USERS, known_users)
    logger.info("Registered known user uid=%s", profile.uid)
    return profile


def get_known_user(store: EntityStore, uid: str) -> UserProfile | None:
    for profile in store.load(KNOWN_USERS):
        if profile.uid == uid:
            return profile
    return None


def resolve_profile(store: EntityStore, uid: str) -> UserProfile:
    profile = get_known_user(store, uid)
    if profile is None:
        logger.debug("Falling back to placeholder profile uid=%s", uid)
        return placeholder_profile(uid)
    return profile


def profile_index(store: EntityStore) -> dict[str, UserProfile]:
    return {profile.uid: profile for profile in store.load(KNOWN_USERS)}


def search_users(store: EntityStore, term: str) -> list[UserProfile]:
    needle = term.strip().lower()
    if not needle:
        return []
    return [profile for profile in store.load(KNOWN_USERS) if needle in profile.name.lower()]


__all__ = [
    "ANONYMOUS_NAME",
    "UNKNOWN_USER_NAME",
    "get_known_user",
    "placeholder_profile",
    "profile_from_identity",
    "profile_index",
    "profile_url_for",
    "resolve_profile",
    "search_users",
    "upsert_known_user",
]
