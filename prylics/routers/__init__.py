"""Aggregate router exports."""
from .ai import router as ai_router
from .auth import router as auth_router
from .circles import router as circles_router
from .follows import router as follows_router
from .messages import router as messages_router
from .posts import router as posts_router
from .projects import router as projects_router
from .realtime import router as realtime_router
from .users import router as users_router

__all__ = [
    "ai_router",
    "auth_router",
    "circles_router",
    "follows_router",
    "messages_router",
    "posts_router",
    "projects_router",
    "realtime_router",
    "users_router",
]
