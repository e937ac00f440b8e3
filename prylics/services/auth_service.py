"""Session tokens for users signed in through the external identity provider."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from ..config import get_settings
from ..schemas import IdentityPayload, UserProfile
from .entity_store import EntityStore, get_entity_store
from .user_directory import resolve_profile, upsert_known_user

logger = logging.getLogger(__name__)

_security = HTTPBearer(auto_error=False)


def create_access_token(subject: str, *, expires_minutes: Optional[int] = None) -> str:
    """Create a signed JWT holding the provided ``subject`` uid."""

    settings = get_settings()
    expire_delta = timedelta(minutes=expires_minutes or settings.jwt_expires_minutes)
    now = datetime.now(timezone.utc)
    payload = {"sub": subject, "exp": now + expire_delta, "iat": now}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str:
    """Decode and validate a JWT, returning the embedded uid."""

    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from exc

    subject = payload.get("sub")
    if not subject or not isinstance(subject, str):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")
    return subject


def sign_in(store: EntityStore, identity: IdentityPayload) -> Tuple[UserProfile, str]:
    """Record the identity in the directory and issue a session token."""

    profile = upsert_known_user(store, identity)
    token = create_access_token(profile.uid)
    logger.info("Session issued for uid=%s", profile.uid)
    return profile, token


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_security),
    store: EntityStore = Depends(get_entity_store),
) -> UserProfile:
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Please sign in to continue")
    uid = decode_access_token(credentials.credentials)
    return resolve_profile(store, uid)


def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_security),
    store: EntityStore = Depends(get_entity_store),
) -> UserProfile | None:
    if credentials is None or not credentials.credentials:
        return None
    try:
        uid = decode_access_token(credentials.credentials)
    except HTTPException:
        return None
    return resolve_profile(store, uid)


__all__ = [
    "create_access_token",
    "decode_access_token",
    "get_current_user",
    "get_optional_user",
    "sign_in",
]
