"""Pure helpers for merging comments into a post's comment forest."""
from __future__ import annotations

from typing import Sequence

from ..schemas import Comment


def add_comment(tree: Sequence[Comment], new_comment: Comment, parent_id: str | None = None) -> list[Comment]:
    """Return a new forest with ``new_comment`` appended at the root or under ``parent_id``.

    The search recurses into every node's replies with no depth limit. An
    unknown ``parent_id`` yields a forest structurally identical to ``tree``.
    Nodes on the path to the parent are copied; untouched subtrees are shared.
    """

    if parent_id is None:
        return [*tree, new_comment]
    return [_insert_reply(comment, parent_id, new_comment) for comment in tree]


def _insert_reply(node: Comment, parent_id: str, reply: Comment) -> Comment:
    if node.id == parent_id:
        return node.model_copy(update={"replies": [*node.replies, reply]})
    if not node.replies:
        return node
    return node.model_copy(update={"replies": [_insert_reply(child, parent_id, reply) for child in node.replies]})


def count_comments(tree: Sequence[Comment]) -> int:
    """Total number of nodes in the forest, nested replies included."""

    return sum(1 + count_comments(comment.replies) for comment in tree)


def find_comment(tree: Sequence[Comment], comment_id: str) -> Comment | None:
    for comment in tree:
        if comment.id == comment_id:
            return comment
        found = find_comment(comment.replies, comment_id)
        if found is not None:
            return found
    return None


__all__ = ["add_comment", "count_comments", "find_comment"]
