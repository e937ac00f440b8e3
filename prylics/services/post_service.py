"""Business logic for posts, the assembled feed and comment threads."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, Sequence

from fastapi import HTTPException, status

from ..schemas import Comment, CommentCreate, Funding, Post, PostCreate, PostType, UserProfile
from .comment_tree import add_comment, count_comments, find_comment
from .entity_store import INITIAL_POSTS, POST_COLLECTIONS, USER_POSTS, EntityStore
from .message_service import timestamp_id

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _created_at_key(post: Post) -> datetime:
    created_at = post.created_at
    if created_at is None:
        return _EPOCH
    if created_at.tzinfo is None:
        return created_at.replace(tzinfo=timezone.utc)
    return created_at


def assemble_feed(seed_posts: Iterable[Post], user_posts: Iterable[Post]) -> list[Post]:
    """Merge both sources into one newest-first feed.

    User posts come first so they win identifier collisions and timestamp ties;
    posts without ``created_at`` sort as the oldest.
    """

    unique: dict[str, Post] = {}
    for post in [*user_posts, *seed_posts]:
        if post.id not in unique:
            unique[post.id] = post
    return sorted(unique.values(), key=_created_at_key, reverse=True)


def filter_posts_by_type(posts: Sequence[Post], post_type: PostType | None) -> list[Post]:
    if post_type is None:
        return list(posts)
    return [post for post in posts if post.type == post_type]


def list_feed_records(store: EntityStore, *, post_type: PostType | None = None) -> list[Post]:
    feed = assemble_feed(store.load(INITIAL_POSTS), store.load(USER_POSTS))
    return filter_posts_by_type(feed, post_type)


def list_posts_by_author(store: EntityStore, author_id: str) -> list[Post]:
    return [post for post in list_feed_records(store) if post.author.uid == author_id]


def list_funded_posts(store: EntityStore) -> list[Post]:
    return [post for post in list_feed_records(store) if post.funding is not None]


def get_post(store: EntityStore, post_id: str) -> Post:
    location = store.locate_post(post_id)
    if location is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return location.post


def create_post_record(store: EntityStore, *, author: UserProfile, payload: PostCreate) -> Post:
    """Create and persist a new post at the front of the user collection."""

    moment = _now()
    funding = Funding(goal=payload.funding_goal, raised=0) if payload.funding_goal else None
    post = Post(
        id=timestamp_id(moment),
        author=author,
        creator_id=author.uid,
        type=payload.type,
        timestamp=moment.strftime("%Y-%m-%d %H:%M"),
        created_at=moment,
        content=payload.content.strip(),
        tags=list(payload.tags),
        likes=0,
        comments=[],
        comment_count=0,
        image_url=payload.image_url or None,
        funding=funding,
    )
    existing = store.load(USER_POSTS)
    store.save(USER_POSTS, [post, *existing])
    logger.info("Created post id=%s author=%s type=%s", post.id, author.uid, post.type)
    return post


def delete_post_record(store: EntityStore, *, post_id: str, requester_id: str) -> None:
    """Remove the post from whichever collections hold it; only the author may delete."""

    post = get_post(store, post_id)
    if post.creator_id != requester_id and post.author.uid != requester_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to delete this post")

    for collection in POST_COLLECTIONS:
        posts = store.load(collection)
        remaining = [candidate for candidate in posts if candidate.id != post_id]
        if len(remaining) != len(posts):
            store.save(collection, remaining)
    logger.info("Deleted post id=%s", post_id)


def create_post_comment(
    store: EntityStore,
    *,
    post_id: str,
    author: UserProfile,
    payload: CommentCreate,
) -> Post:
    """Merge a comment or reply into the post's tree and rewrite the owning collection."""

    text = payload.text.strip()
    if not text:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Comment text cannot be empty")

    location = store.locate_post(post_id)
    if location is None:
        logger.warning("Dropping comment for unknown post id=%s", post_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")

    moment = _now()
    comment = Comment(
        id=timestamp_id(moment),
        author=author,
        text=text,
        timestamp=moment,
        replies=[],
    )
    post = location.post
    if payload.parent_id is not None and find_comment(post.comments, payload.parent_id) is None:
        logger.info("Reply target not found | post=%s parent=%s", post_id, payload.parent_id)
        return post

    comments = add_comment(post.comments, comment, payload.parent_id)
    updated = post.model_copy(update={"comments": comments, "comment_count": count_comments(comments)})
    location.posts[location.index] = updated
    store.save(location.collection, location.posts)
    return updated


__all__ = [
    "assemble_feed",
    "create_post_comment",
    "create_post_record",
    "delete_post_record",
    "filter_posts_by_type",
    "get_post",
    "list_feed_records",
    "list_funded_posts",
    "list_posts_by_author",
]
