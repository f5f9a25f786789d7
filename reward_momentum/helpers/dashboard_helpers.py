# File: helpers/dashboard_helpers.py
"""Dashboard card helpers for Reward Momentum.

Turns MemberRewardProgress records into plain card data (labels, chips,
history markers, progress percent) for a momentum strip. No rendering here;
a presentation layer reads these dicts as-is.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from .. import const
from ..data_builders import normalize_collection, normalize_member
from ..utils.math_utils import calculate_percentage

if TYPE_CHECKING:
    from ..type_defs import (
        FocusHabitChip,
        HistoryMarker,
        MemberData,
        MemberMomentumCard,
        MemberRewardProgress,
    )


def build_today_status_label(progress: MemberRewardProgress) -> str:
    """Return e.g. "Daily focus 1/2 · Needs Read" or "... · Boost earned"."""
    today = progress[const.PROGRESS_TODAY]
    label = (
        f"{const.LABEL_DAILY_FOCUS} "
        f"{today[const.PROGRESS_TODAY_COMPLETED]}/{today[const.PROGRESS_TODAY_TOTAL]}"
    )
    missing = today[const.PROGRESS_TODAY_MISSING_HABIT_NAMES]

    if today[const.PROGRESS_TODAY_TOKEN_EARNED]:
        return f"{label}{const.LABEL_SEPARATOR}{const.LABEL_BOOST_EARNED}"
    if missing:
        return f"{label}{const.LABEL_SEPARATOR}{const.LABEL_NEEDS} {missing[0]}"
    return label


def build_weekly_label(progress: MemberRewardProgress) -> str:
    """Return e.g. "3/4" or "4/4 · Ready!"."""
    weekly = progress[const.PROGRESS_WEEKLY]
    tokens = weekly[const.PROGRESS_WEEKLY_TOKENS]
    label = f"{tokens}/{weekly[const.PROGRESS_WEEKLY_GOAL]}"
    if weekly[const.PROGRESS_WEEKLY_READY_FOR_REWARD]:
        return f"{label}{const.LABEL_SEPARATOR}{const.LABEL_READY}"
    return label


def build_focus_habit_chips(progress: MemberRewardProgress) -> list[FocusHabitChip]:
    """Return emoji/name chips for the resolved focus habits."""
    return [
        {
            "id": habit[const.DATA_HABIT_ID],
            "emoji": habit.get(const.DATA_HABIT_EMOJI, ""),
            "name": habit.get(const.DATA_HABIT_NAME, ""),
        }
        for habit in progress[const.PROGRESS_FOCUS_HABITS]
    ]


def build_history_markers(progress: MemberRewardProgress) -> list[HistoryMarker]:
    """Return one marker per weekly history day, oldest first."""
    return [
        {
            "date": day[const.SNAPSHOT_DATE],
            "earned": day[const.SNAPSHOT_EARNED],
            "marker": (
                const.HISTORY_MARKER_EARNED
                if day[const.SNAPSHOT_EARNED]
                else const.HISTORY_MARKER_MISSED
            ),
        }
        for day in progress[const.PROGRESS_WEEKLY][const.PROGRESS_WEEKLY_HISTORY]
    ]


def _member_display_name(member: MemberData) -> str:
    """Prefer display_name, then name, then the id."""
    return (
        member.get(const.DATA_MEMBER_DISPLAY_NAME)
        or member.get(const.DATA_MEMBER_NAME)
        or member[const.DATA_MEMBER_ID]
    )


def build_member_card(
    member: MemberData, progress: MemberRewardProgress
) -> MemberMomentumCard:
    """Build the dashboard card for one member."""
    weekly = progress[const.PROGRESS_WEEKLY]
    chips = build_focus_habit_chips(progress)
    return {
        "member_id": progress[const.PROGRESS_MEMBER_ID],
        "display_name": _member_display_name(member),
        "today_label": build_today_status_label(progress),
        "available_tokens": progress[const.PROGRESS_AVAILABLE_TOKENS],
        "focus_habits": chips,
        "focus_placeholder": "" if chips else const.LABEL_NO_FOCUS_HABITS,
        "weekly_label": build_weekly_label(progress),
        "weekly_percent": calculate_percentage(
            weekly[const.PROGRESS_WEEKLY_TOKENS], weekly[const.PROGRESS_WEEKLY_GOAL]
        ),
        "history": build_history_markers(progress),
        "monthly_tokens": progress[const.PROGRESS_MONTHLY_TOKENS],
    }


def build_momentum_strip(
    members: Iterable[Any] | None,
    progress_map: Mapping[str, MemberRewardProgress],
) -> list[MemberMomentumCard]:
    """Build cards in member order, skipping members without progress."""
    cards: list[MemberMomentumCard] = []
    for member in normalize_collection(members, normalize_member):
        progress = progress_map.get(member[const.DATA_MEMBER_ID])
        if progress is None:
            continue
        cards.append(build_member_card(member, progress))
    return cards
