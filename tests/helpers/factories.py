"""Record factories for Reward Momentum tests.

Build raw input documents the way a data-access layer would hand them to
the engine. Keyword-only, with sensible defaults, so each test states only
what it cares about.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from dateutil.relativedelta import relativedelta

# Fixed evaluation day used across the suite
TODAY = date(2026, 1, 19)
TODAY_ISO = TODAY.isoformat()


def days_ago(days: int, reference: date = TODAY) -> str:
    """Return the ISO day `days` calendar days before reference."""
    return (reference + relativedelta(days=-days)).isoformat()


def make_habit(
    *,
    habit_id: str = "habit-1",
    name: str | None = None,
    emoji: str = "⭐",
    assigned_members: list[str] | None = None,
    is_active: bool = True,
    is_archived: bool = False,
    **extra: Any,
) -> dict[str, Any]:
    """Build a habit document (assigned to member-1 by default)."""
    return {
        "id": habit_id,
        "name": name if name is not None else f"Habit {habit_id}",
        "emoji": emoji,
        "assigned_members": (
            assigned_members if assigned_members is not None else ["member-1"]
        ),
        "is_active": is_active,
        "is_archived": is_archived,
        **extra,
    }


def make_member(
    *,
    member_id: str = "member-1",
    name: str | None = None,
    is_active: bool = True,
    focus_habit_ids: list[str] | None = None,
    weekly_goal: int | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build a member document; a reward profile is added only when asked."""
    member: dict[str, Any] = {
        "id": member_id,
        "name": name if name is not None else member_id.title(),
        "is_active": is_active,
        **extra,
    }
    if focus_habit_ids is not None or weekly_goal is not None:
        profile: dict[str, Any] = {"daily_focus_habit_ids": focus_habit_ids or []}
        if weekly_goal is not None:
            profile["weekly_goal"] = weekly_goal
        member["reward_profile"] = profile
    return member


def make_completion(
    *,
    habit_id: str = "habit-1",
    member_id: str = "member-1",
    day: str = TODAY_ISO,
    completed: bool = True,
) -> dict[str, Any]:
    """Build a completion record."""
    return {
        "habit_id": habit_id,
        "member_id": member_id,
        "date": day,
        "completed": completed,
    }


def complete_all(
    habit_ids: list[str],
    *,
    member_id: str = "member-1",
    offsets: list[int],
) -> list[dict[str, Any]]:
    """Build completions for every habit on every day offset (days ago)."""
    return [
        make_completion(habit_id=habit_id, member_id=member_id, day=days_ago(offset))
        for offset in offsets
        for habit_id in habit_ids
    ]
