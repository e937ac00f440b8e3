"""Post, feed and comment API routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from ..schemas import (
    CommentCreate,
    CommentTreeResponse,
    CrowdfundingResponse,
    Post,
    PostCreate,
    PostFeedResponse,
    PostType,
    UserProfile,
)
from ..services import (
    FEATURED_CAMPAIGNS,
    EntityStore,
    create_post_comment,
    create_post_record,
    delete_post_record,
    get_current_user,
    get_entity_store,
    get_post,
    list_feed_records,
    list_funded_posts,
    track_changes,
)
from ..services.realtime import broadcast_storage_change

router = APIRouter(tags=["posts"])


def _comment_tree(post: Post) -> CommentTreeResponse:
    return CommentTreeResponse(post_id=post.id, comment_count=post.comment_count, comments=post.comments)


@router.get("/posts/feed", response_model=PostFeedResponse)
async def list_feed(
    post_type: PostType | None = Query(default=None, alias="type"),
    store: EntityStore = Depends(get_entity_store),
) -> PostFeedResponse:
    return PostFeedResponse(items=list_feed_records(store, post_type=post_type))


@router.post("/posts", response_model=Post, status_code=status.HTTP_201_CREATED)
async def create_post(
    payload: PostCreate,
    store: EntityStore = Depends(get_entity_store),
    current_user: UserProfile = Depends(get_current_user),
) -> Post:
    with track_changes(store) as changed:
        post = create_post_record(store, author=current_user, payload=payload)
    await broadcast_storage_change(*changed)
    return post


@router.get("/posts/{post_id}", response_model=Post)
async def read_post(post_id: str, store: EntityStore = Depends(get_entity_store)) -> Post:
    return get_post(store, post_id)


@router.delete("/posts/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: str,
    store: EntityStore = Depends(get_entity_store),
    current_user: UserProfile = Depends(get_current_user),
) -> Response:
    with track_changes(store) as changed:
        delete_post_record(store, post_id=post_id, requester_id=current_user.uid)
    await broadcast_storage_change(*changed)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/posts/{post_id}/comments", response_model=CommentTreeResponse)
async def list_comments(post_id: str, store: EntityStore = Depends(get_entity_store)) -> CommentTreeResponse:
    return _comment_tree(get_post(store, post_id))


@router.post("/posts/{post_id}/comments", response_model=CommentTreeResponse, status_code=status.HTTP_201_CREATED)
async def add_comment_endpoint(
    post_id: str,
    payload: CommentCreate,
    response: Response,
    store: EntityStore = Depends(get_entity_store),
    current_user: UserProfile = Depends(get_current_user),
) -> CommentTreeResponse:
    with track_changes(store) as changed:
        post = create_post_comment(store, post_id=post_id, author=current_user, payload=payload)
    if not changed:
        # Reply to an unknown parent: nothing was stored.
        response.status_code = status.HTTP_200_OK
    await broadcast_storage_change(*changed)
    return _comment_tree(post)


@router.get("/crowdfunding", response_model=CrowdfundingResponse)
async def crowdfunding_overview(store: EntityStore = Depends(get_entity_store)) -> CrowdfundingResponse:
    return CrowdfundingResponse(campaigns=list(FEATURED_CAMPAIGNS), funded_posts=list_funded_posts(store))


__all__ = ["router"]
