"""Type definitions for Reward Momentum data structures.

TypedDict is used for structures whose keys are fixed at design time (input
documents after normalization and the derived progress records). Lookup
structures keyed by runtime values (member ids, dates) use plain
``dict[str, ...]``.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Input documents arrive from an
external data-access layer and may be incomplete; runtime defaults and
skip-on-error handling live in data_builders.py and the engine.

IMPORTANT: This file must NOT import from engines, managers or helpers to
avoid circular dependencies. Only typing machinery is imported here.
"""

from typing import NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

MemberId = str
HabitId = str
ISODate = str  # "2026-01-18", local calendar day
ISODatetime = str  # "2026-01-18T12:30:00+00:00"


# =============================================================================
# Input Entities (normalized)
# =============================================================================


class HabitData(TypedDict):
    """A habit as read by the engine.

    name and emoji are display-only and carried through to focus_habits.
    """

    id: HabitId
    name: str
    emoji: str
    assigned_members: list[MemberId]
    is_active: bool
    is_archived: bool
    created_at: NotRequired[str | None]
    sort_order: NotRequired[int | None]


class RewardProfile(TypedDict, total=False):
    """Per-member reward configuration."""

    daily_focus_habit_ids: list[HabitId]
    weekly_goal: int
    last_updated: ISODatetime


class MemberData(TypedDict):
    """A group member as read by the engine."""

    id: MemberId
    name: str
    display_name: str
    is_active: bool
    reward_profile: NotRequired[RewardProfile | None]


class CompletionData(TypedDict):
    """A single habit-completion event for one member and one day."""

    habit_id: HabitId
    member_id: MemberId
    date: ISODate
    completed: bool


# =============================================================================
# Derived Progress (engine output, never persisted)
# =============================================================================


class RewardDaySnapshot(TypedDict):
    """Token status for one calendar day."""

    date: ISODate
    earned: bool


class TodayProgress(TypedDict):
    """Focus completion for the current day."""

    completed: int
    total: int
    token_earned: bool
    missing_habit_names: list[str]


class WeeklyProgress(TypedDict):
    """Trailing 7-day token summary."""

    tokens: int
    goal: int
    history: list[RewardDaySnapshot]
    ready_for_reward: bool


class MemberRewardProgress(TypedDict):
    """Complete momentum record for one active member."""

    member_id: MemberId
    focus_habit_ids: list[HabitId]
    focus_habits: list[HabitData]
    today: TodayProgress
    weekly: WeeklyProgress
    monthly_tokens: int
    available_tokens: int


ProgressMap = dict[MemberId, MemberRewardProgress]
DefaultFocusMap = dict[MemberId, list[HabitId]]


# =============================================================================
# Presentation
# =============================================================================


class FocusHabitChip(TypedDict):
    """Emoji/name pair shown for each focus habit."""

    id: HabitId
    emoji: str
    name: str


class HistoryMarker(TypedDict):
    """One day marker in the weekly history row."""

    date: ISODate
    earned: bool
    marker: str


class MemberMomentumCard(TypedDict):
    """Dashboard card data for one member."""

    member_id: MemberId
    display_name: str
    today_label: str
    available_tokens: int
    focus_habits: list[FocusHabitChip]
    focus_placeholder: str
    weekly_label: str
    weekly_percent: float
    history: list[HistoryMarker]
    monthly_tokens: int
