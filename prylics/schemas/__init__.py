"""Convenience exports for schema layer."""
from .ai import TagSuggestionRequest, TagSuggestionResponse
from .base import EntityModel
from .circles import (
    Circle,
    CircleChat,
    CircleCreate,
    CircleDetailResponse,
    CircleListResponse,
    CircleMembership,
    CircleToggleResponse,
)
from .follow import FollowActionResponse, Following, FollowStatsResponse
from .messages import (
    Conversation,
    ConversationCreate,
    ConversationDetailResponse,
    ConversationListResponse,
    ConversationSummary,
    Message,
    MessageSendRequest,
)
from .posts import (
    Comment,
    CommentCreate,
    CommentTreeResponse,
    CrowdfundingResponse,
    Funding,
    FundingCampaign,
    Post,
    PostCreate,
    PostFeedResponse,
    PostType,
)
from .profiles import ProfileOverviewResponse
from .projects import (
    CollaborationToggleResponse,
    Project,
    ProjectCreate,
    ProjectDetailResponse,
    ProjectDiscussion,
    ProjectListResponse,
)
from .users import IdentityPayload, SessionResponse, UserProfile, UserSearchResponse

__all__ = [
    "EntityModel",
    "TagSuggestionRequest",
    "TagSuggestionResponse",
    "Circle",
    "CircleChat",
    "CircleCreate",
    "CircleDetailResponse",
    "CircleListResponse",
    "CircleMembership",
    "CircleToggleResponse",
    "Following",
    "FollowStatsResponse",
    "FollowActionResponse",
    "Conversation",
    "ConversationCreate",
    "ConversationDetailResponse",
    "ConversationListResponse",
    "ConversationSummary",
    "Message",
    "MessageSendRequest",
    "Comment",
    "CommentCreate",
    "CommentTreeResponse",
    "CrowdfundingResponse",
    "Funding",
    "FundingCampaign",
    "Post",
    "PostCreate",
    "PostFeedResponse",
    "PostType",
    "ProfileOverviewResponse",
    "CollaborationToggleResponse",
    "Project",
    "ProjectCreate",
    "ProjectDetailResponse",
    "ProjectDiscussion",
    "ProjectListResponse",
    "IdentityPayload",
    "SessionResponse",
    "UserProfile",
    "UserSearchResponse",
]
