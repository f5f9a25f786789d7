"""Shared fixtures for Reward Momentum tests."""

from collections.abc import Generator
from typing import Any

import pytest

from reward_momentum.utils import dt_utils
from tests.helpers import complete_all, make_habit, make_member


@pytest.fixture(autouse=True)
def reset_default_timezone() -> Generator[None, None, None]:
    """Restore the system-local default timezone after each test."""
    original = dt_utils.get_default_timezone()
    yield
    dt_utils.set_default_timezone(original)


@pytest.fixture
def focus_household() -> dict[str, Any]:
    """Return the end-to-end household: one member, two focus habits.

    Both focus habits done today and the three previous days, only the first
    one done four days ago, nothing before that.
    """
    habits = [
        make_habit(habit_id="h1", name="Brush Teeth"),
        make_habit(habit_id="h2", name="Read"),
    ]
    completions = complete_all(["h1", "h2"], offsets=[0, 1, 2, 3])
    completions.extend(complete_all(["h1"], offsets=[4]))
    return {
        "members": [
            make_member(
                member_id="member-1", focus_habit_ids=["h1", "h2"], weekly_goal=4
            )
        ],
        "habits": habits,
        "completions": completions,
    }
