"""Unit tests for merging comments into a comment forest."""
from __future__ import annotations

from datetime import datetime, timezone

from prylics.schemas import Comment, UserProfile
from prylics.services.comment_tree import add_comment, count_comments, find_comment

AUTHOR = UserProfile(uid="u1", name="Ada", avatar_url="https://placehold.co/40x40.png", profile_url="/profile/u1")


def _comment(comment_id: str) -> Comment:
    return Comment(id=comment_id, author=AUTHOR, text=f"comment {comment_id}", timestamp=datetime.now(timezone.utc))


def test_root_comment_is_appended_in_order():
    tree = add_comment([], _comment("a"))
    tree = add_comment(tree, _comment("b"))

    assert [comment.id for comment in tree] == ["a", "b"]
    assert count_comments(tree) == 2


def test_replies_nest_at_any_depth_and_count_every_node():
    tree = add_comment([], _comment("root"))
    tree = add_comment(tree, _comment("d1"), "root")
    tree = add_comment(tree, _comment("d2"), "d1")
    tree = add_comment(tree, _comment("d3"), "d2")
    tree = add_comment(tree, _comment("d3-sibling"), "d2")

    assert count_comments(tree) == 5
    depth_two = find_comment(tree, "d2")
    assert depth_two is not None
    assert [reply.id for reply in depth_two.replies] == ["d3", "d3-sibling"]


def test_unknown_parent_leaves_tree_unchanged():
    tree = add_comment([], _comment("root"))
    tree = add_comment(tree, _comment("child"), "root")

    result = add_comment(tree, _comment("orphan"), "missing")

    assert result == tree
    assert count_comments(result) == 2
    assert find_comment(result, "orphan") is None


def test_merge_does_not_mutate_input():
    before = add_comment([], _comment("root"))
    add_comment(before, _comment("child"), "root")

    assert before[0].replies == []
