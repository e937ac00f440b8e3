"""Convenience exports for service layer."""
from .auth_service import create_access_token, decode_access_token, get_current_user, get_optional_user, sign_in
from .circle_service import (
    create_circle,
    delete_circle,
    get_circle,
    get_circle_chat,
    is_circle_member,
    list_circles,
    send_circle_message,
    toggle_circle_membership,
)
from .comment_tree import add_comment, count_comments
from .conversation_service import (
    get_conversation,
    get_or_create_conversation,
    list_conversations_for_user,
    resolve_conversation_id,
    send_direct_message,
)
from .entity_store import (
    EntityStore,
    EntityStoreError,
    MalformedCollectionError,
    StorageWriteError,
    get_entity_store,
    set_entity_store,
    track_changes,
)
from .follow_service import FollowStats, get_follow_stats, toggle_follow
from .membership import ToggleResult, adjust_count, toggle_member
from .post_service import (
    assemble_feed,
    create_post_comment,
    create_post_record,
    delete_post_record,
    filter_posts_by_type,
    get_post,
    list_feed_records,
    list_funded_posts,
)
from .profile_service import get_profile_overview
from .project_service import (
    create_project,
    delete_project,
    get_project,
    get_project_discussion,
    is_collaborator,
    list_projects,
    send_project_message,
    toggle_collaboration,
)
from .seed_service import FEATURED_CAMPAIGNS, seed_initial_data
from .tag_service import set_tag_client, suggest_tags
from .user_directory import placeholder_profile, resolve_profile, search_users, upsert_known_user

__all__ = [
    "create_access_token",
    "decode_access_token",
    "get_current_user",
    "get_optional_user",
    "sign_in",
    "create_circle",
    "delete_circle",
    "get_circle",
    "get_circle_chat",
    "is_circle_member",
    "list_circles",
    "send_circle_message",
    "toggle_circle_membership",
    "add_comment",
    "count_comments",
    "get_conversation",
    "get_or_create_conversation",
    "list_conversations_for_user",
    "resolve_conversation_id",
    "send_direct_message",
    "EntityStore",
    "EntityStoreError",
    "MalformedCollectionError",
    "StorageWriteError",
    "get_entity_store",
    "set_entity_store",
    "track_changes",
    "FollowStats",
    "get_follow_stats",
    "toggle_follow",
    "ToggleResult",
    "adjust_count",
    "toggle_member",
    "assemble_feed",
    "create_post_comment",
    "create_post_record",
    "delete_post_record",
    "filter_posts_by_type",
    "get_post",
    "list_feed_records",
    "list_funded_posts",
    "get_profile_overview",
    "create_project",
    "delete_project",
    "get_project",
    "get_project_discussion",
    "is_collaborator",
    "list_projects",
    "send_project_message",
    "toggle_collaboration",
    "FEATURED_CAMPAIGNS",
    "seed_initial_data",
    "set_tag_client",
    "suggest_tags",
    "placeholder_profile",
    "resolve_profile",
    "search_users",
    "upsert_known_user",
]
