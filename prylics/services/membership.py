"""The shared join/leave toggle behind circles, projects and follows."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(slots=True)
class ToggleResult:
    joined: bool
    member_ids: list[str]


def toggle_member(member_ids: Sequence[str], target_id: str) -> ToggleResult:
    """Remove ``target_id`` if present, otherwise append it; order is preserved."""

    if target_id in member_ids:
        return ToggleResult(joined=False, member_ids=[value for value in member_ids if value != target_id])
    return ToggleResult(joined=True, member_ids=[*member_ids, target_id])


def adjust_count(count: int, joined: bool) -> int:
    """Apply one join (+1) or leave (-1) to a denormalized count, never below zero."""

    if joined:
        return count + 1
    return max(0, count - 1)


__all__ = ["ToggleResult", "toggle_member", "adjust_count"]
