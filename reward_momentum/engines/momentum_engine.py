"""Momentum Engine - Pure logic for daily focus tokens and reward readiness.

This engine provides stateless, pure Python functions for:
- Completion indexing (member → day → completed habit ids)
- Focus habit resolution (explicit configuration or first eligible habits)
- Token evaluation for a single day and for trailing day windows
- Assembly of one MemberRewardProgress record per active member

ARCHITECTURE: This is a pure logic engine. All functions are static/class
methods that operate on passed-in collections. It never persists, never
mutates its inputs, and never raises for malformed or missing data: bad
records are skipped and logged at DEBUG level.

"Today" is an explicit argument. When omitted, the local calendar date from
dt_utils is used, which is the only wall-clock read in this module.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import copy
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from .. import const
from ..data_builders import (
    get_member_focus_habit_ids,
    get_member_weekly_goal,
    is_habit_eligible,
    normalize_collection,
    normalize_completion,
    normalize_habit,
    normalize_member,
)
from ..utils.dt_utils import dt_date_range, dt_normalize_day, dt_today_local

if TYPE_CHECKING:
    from ..type_defs import (
        DefaultFocusMap,
        HabitData,
        MemberData,
        MemberRewardProgress,
        ProgressMap,
        RewardDaySnapshot,
        TodayProgress,
    )


_NO_COMPLETIONS: frozenset[str] = frozenset()


# =============================================================================
# COMPLETION INDEX
# =============================================================================


class CompletionIndex:
    """Lookup of completed habit ids per member and calendar day.

    Built once per recomputation and shared read-only by every member's
    evaluation. Duplicate records collapse because each day holds a set.
    """

    def __init__(self) -> None:
        """Initialize an empty index."""
        self._data: dict[str, dict[str, set[str]]] = {}

    def add(self, member_id: str, day: str, habit_id: str) -> None:
        """Record habit_id as completed by member_id on day (ISO string)."""
        self._data.setdefault(member_id, {}).setdefault(day, set()).add(habit_id)

    def completed_habits(self, member_id: str, day: str | date) -> frozenset[str]:
        """Return the habit ids member_id completed on day (empty if none).

        A datetime is looked up under its own calendar day.
        """
        day_key = dt_normalize_day(day)
        if day_key is None:
            return _NO_COMPLETIONS
        habits = self._data.get(member_id, {}).get(day_key)
        if not habits:
            return _NO_COMPLETIONS
        return frozenset(habits)

    def is_completed(self, member_id: str, habit_id: str, day: str | date) -> bool:
        """Return True if member_id completed habit_id on day."""
        return habit_id in self.completed_habits(member_id, day)

    def member_ids(self) -> list[str]:
        """Return ids of members with at least one indexed completion."""
        return list(self._data)

    def __len__(self) -> int:
        """Return the number of distinct (member, day, habit) entries."""
        return sum(
            len(habits)
            for member_days in self._data.values()
            for habits in member_days.values()
        )


# =============================================================================
# MOMENTUM ENGINE
# =============================================================================


class MomentumEngine:
    """Pure logic engine for reward momentum evaluation.

    All methods are static - no instance state. Inputs are raw documents
    (mappings) or already-normalized records; both are accepted because
    normalization is idempotent.

    Evaluation Flow:
        1. build_completion_index() once for the whole group
        2. Per active member: eligible habits → focus habits → today,
           7-day window, 30-day window
        3. build_progress_map() returns {member_id: MemberRewardProgress}
    """

    # =========================================================================
    # TODAY
    # =========================================================================

    @staticmethod
    def resolve_today(today: date | datetime | str | None = None) -> date:
        """Return the evaluation day as a `datetime.date`.

        None means the current local date. An unparseable value is logged
        and replaced by the current local date.
        """
        if today is None:
            return dt_today_local()

        day_key = dt_normalize_day(today)
        if day_key is None:
            const.LOGGER.warning(
                "Invalid 'today' value %r, using current local date", today
            )
            return dt_today_local()
        return date.fromisoformat(day_key)

    # =========================================================================
    # COMPLETION INDEXER
    # =========================================================================

    @staticmethod
    def build_completion_index(
        completions: Iterable[Any] | None,
    ) -> CompletionIndex:
        """Build the member → day → habit-set index from a completion log.

        Records whose `completed` flag is not True are skipped, as are
        malformed records. An absent log yields an empty index.
        """
        index = CompletionIndex()
        skipped = 0

        for record in normalize_collection(completions, normalize_completion):
            if record[const.DATA_COMPLETION_COMPLETED] is not True:
                skipped += 1
                continue
            index.add(
                record[const.DATA_COMPLETION_MEMBER_ID],
                record[const.DATA_COMPLETION_DATE],
                record[const.DATA_COMPLETION_HABIT_ID],
            )

        const.LOGGER.debug(
            "Indexed %s completions (%s not completed)", len(index), skipped
        )
        return index

    # =========================================================================
    # FOCUS RESOLVER
    # =========================================================================

    @staticmethod
    def order_habits(habits: list[HabitData]) -> list[HabitData]:
        """Return habits in stable display order.

        Explicit sort_order first, then created_at, then input order. Habits
        without either field keep the order they were supplied in.
        """

        def _sort_key(habit: HabitData) -> tuple[bool, int, bool, str]:
            sort_order = habit.get(const.DATA_HABIT_SORT_ORDER)
            created_at = habit.get(const.DATA_HABIT_CREATED_AT)
            return (
                sort_order is None,
                sort_order if sort_order is not None else 0,
                created_at is None,
                created_at or "",
            )

        return sorted(habits, key=_sort_key)

    @classmethod
    def eligible_habits(
        cls, habits: list[HabitData], member_id: str
    ) -> list[HabitData]:
        """Return the member's active, unarchived habits in stable order."""
        return cls.order_habits(
            [habit for habit in habits if is_habit_eligible(habit, member_id)]
        )

    @staticmethod
    def default_focus_habit_ids(eligible: list[HabitData]) -> list[str]:
        """Return the first DEFAULT_FOCUS_HABIT_COUNT eligible habit ids."""
        return [
            habit[const.DATA_HABIT_ID]
            for habit in eligible[: const.DEFAULT_FOCUS_HABIT_COUNT]
        ]

    @classmethod
    def resolve_focus_habit_ids(
        cls, member: MemberData, eligible: list[HabitData]
    ) -> list[str]:
        """Return the member's focus ids: configured list or the default.

        A non-empty configured list is used verbatim, including ids that no
        longer resolve to an eligible habit.
        """
        configured = get_member_focus_habit_ids(member)
        if configured:
            return configured
        return cls.default_focus_habit_ids(eligible)

    @staticmethod
    def resolve_focus_habits(
        focus_habit_ids: list[str], eligible: list[HabitData]
    ) -> list[HabitData]:
        """Map focus ids to eligible habits, dropping ids that don't resolve.

        Each returned habit is a copy owned by the caller.
        """
        by_id = {habit[const.DATA_HABIT_ID]: habit for habit in eligible}
        return [
            copy.deepcopy(by_id[habit_id])
            for habit_id in focus_habit_ids
            if habit_id in by_id
        ]

    # =========================================================================
    # WINDOW AGGREGATOR
    # =========================================================================

    @staticmethod
    def is_token_earned(
        index: CompletionIndex,
        member_id: str,
        focus_habits: list[HabitData],
        day: date | str,
    ) -> bool:
        """Return True if every focus habit was completed on day.

        An empty focus list never earns a token.
        """
        if not focus_habits:
            return False
        completed = index.completed_habits(member_id, day)
        return all(habit[const.DATA_HABIT_ID] in completed for habit in focus_habits)

    @classmethod
    def build_window_history(
        cls,
        index: CompletionIndex,
        member_id: str,
        focus_habits: list[HabitData],
        today: date,
        days: int = const.WEEKLY_WINDOW_DAYS,
    ) -> list[RewardDaySnapshot]:
        """Return one snapshot per day of the trailing window, oldest first."""
        return [
            {
                const.SNAPSHOT_DATE: day.isoformat(),
                const.SNAPSHOT_EARNED: cls.is_token_earned(
                    index, member_id, focus_habits, day
                ),
            }
            for day in dt_date_range(today, days)
        ]

    @classmethod
    def count_window_tokens(
        cls,
        index: CompletionIndex,
        member_id: str,
        focus_habits: list[HabitData],
        today: date,
        days: int = const.MONTHLY_WINDOW_DAYS,
    ) -> int:
        """Return how many days of the trailing window earned a token."""
        return sum(
            1
            for day in dt_date_range(today, days)
            if cls.is_token_earned(index, member_id, focus_habits, day)
        )

    # =========================================================================
    # PROGRESS ASSEMBLER
    # =========================================================================

    @staticmethod
    def build_today_progress(
        index: CompletionIndex,
        member_id: str,
        focus_habits: list[HabitData],
        today: date,
    ) -> TodayProgress:
        """Return today's focus completion, with missing names in focus order."""
        completed = index.completed_habits(member_id, today)
        missing = [
            habit[const.DATA_HABIT_NAME]
            for habit in focus_habits
            if habit[const.DATA_HABIT_ID] not in completed
        ]
        total = len(focus_habits)
        done = total - len(missing)
        return {
            const.PROGRESS_TODAY_COMPLETED: done,
            const.PROGRESS_TODAY_TOTAL: total,
            const.PROGRESS_TODAY_TOKEN_EARNED: total > 0 and done == total,
            const.PROGRESS_TODAY_MISSING_HABIT_NAMES: missing,
        }

    @classmethod
    def build_member_progress(
        cls,
        member: MemberData,
        habits: list[HabitData],
        index: CompletionIndex,
        today: date,
    ) -> MemberRewardProgress:
        """Assemble the full momentum record for one (normalized) member."""
        member_id = member[const.DATA_MEMBER_ID]
        eligible = cls.eligible_habits(habits, member_id)
        focus_habit_ids = cls.resolve_focus_habit_ids(member, eligible)
        focus_habits = cls.resolve_focus_habits(focus_habit_ids, eligible)

        history = cls.build_window_history(
            index, member_id, focus_habits, today, const.WEEKLY_WINDOW_DAYS
        )
        weekly_tokens = sum(1 for day in history if day[const.SNAPSHOT_EARNED])
        weekly_goal = get_member_weekly_goal(member)

        return {
            const.PROGRESS_MEMBER_ID: member_id,
            const.PROGRESS_FOCUS_HABIT_IDS: focus_habit_ids,
            const.PROGRESS_FOCUS_HABITS: focus_habits,
            const.PROGRESS_TODAY: cls.build_today_progress(
                index, member_id, focus_habits, today
            ),
            const.PROGRESS_WEEKLY: {
                const.PROGRESS_WEEKLY_TOKENS: weekly_tokens,
                const.PROGRESS_WEEKLY_GOAL: weekly_goal,
                const.PROGRESS_WEEKLY_HISTORY: history,
                const.PROGRESS_WEEKLY_READY_FOR_REWARD: (
                    weekly_goal > 0 and weekly_tokens >= weekly_goal
                ),
            },
            const.PROGRESS_MONTHLY_TOKENS: cls.count_window_tokens(
                index, member_id, focus_habits, today, const.MONTHLY_WINDOW_DAYS
            ),
            # Rolling weekly count; redemption is tracked outside this engine.
            const.PROGRESS_AVAILABLE_TOKENS: weekly_tokens,
        }

    @staticmethod
    def _active_members(
        members: Iterable[Any] | Mapping[str, Any] | None,
    ) -> list[MemberData]:
        """Normalize members and keep the active ones (first record per id)."""
        active: list[MemberData] = []
        seen: set[str] = set()
        for member in normalize_collection(members, normalize_member):
            member_id = member[const.DATA_MEMBER_ID]
            if not member[const.DATA_MEMBER_IS_ACTIVE] or member_id in seen:
                continue
            seen.add(member_id)
            active.append(member)
        return active

    @classmethod
    def build_progress_map(
        cls,
        members: Iterable[Any] | Mapping[str, Any] | None,
        habits: Iterable[Any] | Mapping[str, Any] | None,
        completions: Iterable[Any] | None,
        today: date | datetime | str | None = None,
    ) -> ProgressMap:
        """Compute {member_id: MemberRewardProgress} for every active member.

        Pure function of its inputs and `today`. Absent collections are
        treated as empty; inactive members are omitted.
        """
        active = cls._active_members(members)
        if not active:
            return {}

        day = cls.resolve_today(today)
        normalized_habits: list[HabitData] = normalize_collection(
            habits, normalize_habit
        )
        index = cls.build_completion_index(completions)

        progress: ProgressMap = {
            member[const.DATA_MEMBER_ID]: cls.build_member_progress(
                member, normalized_habits, index, day
            )
            for member in active
        }
        const.LOGGER.debug(
            "Built reward momentum for %s members on %s", len(progress), day
        )
        return progress

    @classmethod
    def build_default_focus_map(
        cls,
        members: Iterable[Any] | Mapping[str, Any] | None,
        habits: Iterable[Any] | Mapping[str, Any] | None,
    ) -> DefaultFocusMap:
        """Return {member_id: default focus ids} for every active member.

        Computed regardless of any explicit configuration, so configuration
        screens can show what the default would be.
        """
        normalized_habits: list[HabitData] = normalize_collection(
            habits, normalize_habit
        )
        return {
            member[const.DATA_MEMBER_ID]: cls.default_focus_habit_ids(
                cls.eligible_habits(normalized_habits, member[const.DATA_MEMBER_ID])
            )
            for member in cls._active_members(members)
        }
