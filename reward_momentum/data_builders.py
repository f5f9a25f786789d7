"""Record normalization and reward-profile building.

This module is the SINGLE SOURCE OF TRUTH for:
- Input record schemas (habits, members, completions, reward profiles)
- Field defaults and document-store key aliases
- Habit eligibility for a member
- Reward profile validation and building (focus selection, weekly goal)

## Normalize Functions
Each input entity has a `normalize_<entity>()` function that:
- Accepts a raw mapping as delivered by the data-access layer
- Maps camelCase document keys to canonical DATA_* keys
- Applies field defaults through a voluptuous schema
- Returns the normalized dict, or None when the record is unusable

Normalize functions NEVER raise; the engine relies on that to stay crash-free
over partial data.

## Profile Functions
Used by configuration screens when a parent edits focus habits:
- `validate_reward_profile_data()` returns {field: translation_key}
- `build_reward_profile()` raises EntityValidationError on invalid input
- `collect_reward_profile_updates()` returns only the changed profiles

See Also:
- engines/momentum_engine.py: consumer of normalized records
- type_defs.py: TypedDict definitions for type safety
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import math
from typing import Any, cast

import voluptuous as vol

from . import const
from .type_defs import CompletionData, HabitData, MemberData, RewardProfile
from .utils.dt_utils import dt_normalize_day, dt_now_iso

# ==============================================================================
# HELPER FUNCTIONS FOR FIELD NORMALIZATION
# ==============================================================================


def _apply_key_aliases(record: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of record with document-store keys mapped to DATA_* keys.

    Canonical keys win when a record carries both spellings.
    """
    normalized: dict[str, Any] = {}
    for key, value in record.items():
        canonical = const.DATA_KEY_ALIASES.get(key, key)
        if canonical != key and canonical in record:
            continue
        normalized[canonical] = value
    return normalized


def _required_id(value: Any) -> str:
    """Validate a non-empty string identifier."""
    if not isinstance(value, str) or not value:
        raise vol.Invalid("expected a non-empty string id")
    return value


def _display_string(value: Any) -> str:
    """Normalize a display-only field; None becomes an empty string."""
    if value is None:
        return ""
    return str(value)


def _flag(value: Any) -> bool:
    """Normalize a boolean-ish flag by truthiness."""
    return bool(value)


def _id_list(value: Any) -> list[str]:
    """Normalize a field that should be a list of ids.

    Handles cases where the value might be:
    - Already a list/tuple/set → keep string items, in order
    - None → empty list
    - A single string → one-item list

    This prevents bugs like list("habit-1") → ['h', 'a', ...]
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, (list, tuple, set, frozenset)):
        return [item for item in value if isinstance(item, str)]
    return []


def _finite_int(value: Any) -> int | None:
    """Convert value to int; None for bools, non-numbers and inf/nan."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _weekly_goal(value: Any) -> int:
    """Normalize a stored weekly goal; falsy or non-numeric → default."""
    if not value:
        return const.DEFAULT_WEEKLY_GOAL
    goal = _finite_int(value)
    return const.DEFAULT_WEEKLY_GOAL if goal is None else goal


def _day_key(value: Any) -> str:
    """Validate a completion date, returning its ISO day key."""
    day = dt_normalize_day(value)
    if day is None:
        raise vol.Invalid(f"invalid completion date: {value!r}")
    return day


def _optional_sort_key(value: Any) -> str | None:
    """Normalize created_at-like values into a sortable string."""
    if value is None:
        return None
    if hasattr(value, "isoformat"):
        return str(value.isoformat())
    return str(value)


def _optional_int(value: Any) -> int | None:
    """Normalize an optional integer; anything unusable becomes None."""
    return _finite_int(value)


# ==============================================================================
# EXCEPTIONS
# ==============================================================================


class EntityValidationError(Exception):
    """Validation error with field-specific information for form highlighting.

    Attributes:
        field: The CFOP_ERROR_* constant identifying the field that failed
        translation_key: The TRANS_KEY_* constant for the error message
        placeholders: Optional dict for translation string placeholders

    Example:
        raise EntityValidationError(
            field=const.CFOP_ERROR_WEEKLY_GOAL,
            translation_key=const.TRANS_KEY_INVALID_WEEKLY_GOAL,
            placeholders={"value": "20"},
        )
    """

    def __init__(
        self,
        field: str,
        translation_key: str,
        placeholders: dict[str, str] | None = None,
    ) -> None:
        """Initialize EntityValidationError."""
        self.field = field
        self.translation_key = translation_key
        self.placeholders = placeholders or {}
        super().__init__(translation_key)


# ==============================================================================
# SCHEMAS
# ==============================================================================

REWARD_PROFILE_SCHEMA = vol.Schema(
    {
        vol.Optional(
            const.DATA_REWARD_PROFILE_FOCUS_HABIT_IDS, default=list
        ): _id_list,
        vol.Optional(
            const.DATA_REWARD_PROFILE_WEEKLY_GOAL, default=const.DEFAULT_WEEKLY_GOAL
        ): _weekly_goal,
        vol.Optional(const.DATA_REWARD_PROFILE_LAST_UPDATED): vol.Any(None, str),
    },
    extra=vol.REMOVE_EXTRA,
)

HABIT_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_HABIT_ID): _required_id,
        vol.Optional(const.DATA_HABIT_NAME, default=""): _display_string,
        vol.Optional(const.DATA_HABIT_EMOJI, default=""): _display_string,
        vol.Optional(const.DATA_HABIT_ASSIGNED_MEMBERS, default=list): _id_list,
        vol.Optional(const.DATA_HABIT_IS_ACTIVE, default=False): _flag,
        vol.Optional(const.DATA_HABIT_IS_ARCHIVED, default=False): _flag,
        vol.Optional(const.DATA_HABIT_CREATED_AT, default=None): _optional_sort_key,
        vol.Optional(const.DATA_HABIT_SORT_ORDER, default=None): _optional_int,
    },
    extra=vol.ALLOW_EXTRA,
)

MEMBER_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_MEMBER_ID): _required_id,
        vol.Optional(const.DATA_MEMBER_NAME, default=""): _display_string,
        vol.Optional(const.DATA_MEMBER_DISPLAY_NAME, default=""): _display_string,
        vol.Optional(const.DATA_MEMBER_IS_ACTIVE, default=False): _flag,
        vol.Optional(const.DATA_MEMBER_REWARD_PROFILE, default=None): vol.Any(
            None, lambda value: normalize_reward_profile(value)
        ),
    },
    extra=vol.ALLOW_EXTRA,
)

COMPLETION_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_COMPLETION_HABIT_ID): _required_id,
        vol.Required(const.DATA_COMPLETION_MEMBER_ID): _required_id,
        vol.Required(const.DATA_COMPLETION_DATE): _day_key,
        vol.Optional(const.DATA_COMPLETION_COMPLETED, default=False): bool,
    },
    extra=vol.REMOVE_EXTRA,
)


# ==============================================================================
# NORMALIZATION
# ==============================================================================


def _normalize(
    schema: vol.Schema, record: Any, entity: str
) -> dict[str, Any] | None:
    """Run record through schema, returning None (and logging) on failure."""
    if not isinstance(record, Mapping):
        const.LOGGER.debug("Skipping %s record of type %s", entity, type(record))
        return None
    try:
        return cast("dict[str, Any]", schema(_apply_key_aliases(record)))
    except vol.Invalid as err:
        const.LOGGER.debug("Skipping malformed %s record: %s", entity, err)
        return None


def normalize_reward_profile(value: Any) -> RewardProfile:
    """Normalize a stored reward profile; unusable input → defaults."""
    if not isinstance(value, Mapping):
        return cast(
            "RewardProfile",
            {
                const.DATA_REWARD_PROFILE_FOCUS_HABIT_IDS: [],
                const.DATA_REWARD_PROFILE_WEEKLY_GOAL: const.DEFAULT_WEEKLY_GOAL,
            },
        )
    profile = _normalize(REWARD_PROFILE_SCHEMA, value, "reward profile")
    if profile is None:
        return normalize_reward_profile(None)
    return cast("RewardProfile", profile)


def normalize_habit(record: Any) -> HabitData | None:
    """Normalize a habit document, or None if it has no usable id."""
    return cast("HabitData | None", _normalize(HABIT_SCHEMA, record, "habit"))


def normalize_member(record: Any) -> MemberData | None:
    """Normalize a member document, or None if it has no usable id."""
    return cast("MemberData | None", _normalize(MEMBER_SCHEMA, record, "member"))


def normalize_completion(record: Any) -> CompletionData | None:
    """Normalize a completion record.

    Returns None for records missing an id or carrying an unparseable date.
    A `completed` value that is not a real bool is treated as malformed.
    """
    return cast(
        "CompletionData | None",
        _normalize(COMPLETION_SCHEMA, record, "completion"),
    )


def normalize_collection(records: Iterable[Any] | None, normalizer: Any) -> list[Any]:
    """Normalize every record of a collection, dropping unusable ones.

    None (an absent collection) is treated as empty.
    """
    if records is None:
        return []
    if isinstance(records, Mapping):
        records = records.values()
    normalized = []
    for record in records:
        item = normalizer(record)
        if item is not None:
            normalized.append(item)
    return normalized


# ==============================================================================
# ELIGIBILITY
# ==============================================================================


def is_habit_eligible(habit: HabitData, member_id: str) -> bool:
    """Return True if a normalized habit counts for member_id.

    Eligible means: assigned to the member, active, and not archived.
    """
    return (
        member_id in habit[const.DATA_HABIT_ASSIGNED_MEMBERS]
        and habit[const.DATA_HABIT_IS_ACTIVE]
        and not habit[const.DATA_HABIT_IS_ARCHIVED]
    )


def get_member_weekly_goal(member: MemberData) -> int:
    """Return the member's weekly goal, defaulting when unset or falsy."""
    profile = member.get(const.DATA_MEMBER_REWARD_PROFILE) or {}
    return _weekly_goal(profile.get(const.DATA_REWARD_PROFILE_WEEKLY_GOAL))


def get_member_focus_habit_ids(member: MemberData) -> list[str]:
    """Return the member's explicitly configured focus ids (may be empty)."""
    profile = member.get(const.DATA_MEMBER_REWARD_PROFILE) or {}
    return list(profile.get(const.DATA_REWARD_PROFILE_FOCUS_HABIT_IDS) or [])


# ==============================================================================
# REWARD PROFILES
# ==============================================================================


def sanitize_weekly_goal(value: Any, current: int = const.DEFAULT_WEEKLY_GOAL) -> int:
    """Round and clamp a weekly goal entered in a form.

    Finite numbers (or numeric strings) are rounded half-up and clamped to
    [WEEKLY_GOAL_MIN, WEEKLY_GOAL_MAX]. Anything else keeps `current`.

    Examples:
        sanitize_weekly_goal(5.6) → 6
        sanitize_weekly_goal(40) → 14
        sanitize_weekly_goal("abc", current=5) → 5
    """
    if isinstance(value, bool):
        return current
    try:
        number = float(value)
    except (TypeError, ValueError):
        return current
    if not math.isfinite(number):
        return current
    rounded = math.floor(number + 0.5)
    return max(const.WEEKLY_GOAL_MIN, min(const.WEEKLY_GOAL_MAX, rounded))


def toggle_focus_habit(focus_habit_ids: list[str], habit_id: str) -> list[str]:
    """Toggle habit_id in a focus selection, returning a new list.

    Selected ids are removed. Unselected ids are appended; when the selection
    is already at MAX_FOCUS_HABITS the oldest selection is dropped first.
    """
    if habit_id in focus_habit_ids:
        return [item for item in focus_habit_ids if item != habit_id]
    if len(focus_habit_ids) >= const.MAX_FOCUS_HABITS:
        return [*focus_habit_ids[1:], habit_id]
    return [*focus_habit_ids, habit_id]


def initial_reward_profile(
    member: Mapping[str, Any], default_focus_ids: list[str]
) -> RewardProfile:
    """Return the editing seed for a member's focus selection.

    Uses the member's configured focus ids when non-empty, otherwise the
    default focus ids; weekly goal falls back to DEFAULT_WEEKLY_GOAL.
    """
    normalized = normalize_member(member)
    configured = get_member_focus_habit_ids(normalized) if normalized else []
    goal = (
        get_member_weekly_goal(normalized)
        if normalized
        else const.DEFAULT_WEEKLY_GOAL
    )
    focus_ids = configured or list(default_focus_ids)
    return {
        const.DATA_REWARD_PROFILE_FOCUS_HABIT_IDS: focus_ids,
        const.DATA_REWARD_PROFILE_WEEKLY_GOAL: goal,
    }


def reward_profile_changed(
    member: Mapping[str, Any], profile: Mapping[str, Any]
) -> bool:
    """Return True if profile differs from the member's stored profile.

    Focus ids are compared as a set, so reordering alone is not a change.
    """
    normalized = normalize_member(member)
    existing_ids = get_member_focus_habit_ids(normalized) if normalized else []
    existing_goal = (
        get_member_weekly_goal(normalized)
        if normalized
        else const.DEFAULT_WEEKLY_GOAL
    )
    new_ids = _id_list(profile.get(const.DATA_REWARD_PROFILE_FOCUS_HABIT_IDS))
    new_goal = profile.get(
        const.DATA_REWARD_PROFILE_WEEKLY_GOAL, const.DEFAULT_WEEKLY_GOAL
    )
    return sorted(new_ids) != sorted(existing_ids) or new_goal != existing_goal


def _dedupe_focus_ids(value: Any) -> list[str]:
    """Drop empty and repeated ids, keeping first-seen order."""
    seen: set[str] = set()
    result: list[str] = []
    for habit_id in _id_list(value):
        if habit_id and habit_id not in seen:
            seen.add(habit_id)
            result.append(habit_id)
    return result


def validate_reward_profile_data(
    data: Mapping[str, Any],
    eligible_habit_ids: Iterable[str],
) -> dict[str, str]:
    """Validate reward profile business rules.

    Args:
        data: Profile data with DATA_REWARD_PROFILE_* keys
        eligible_habit_ids: Habit ids the member may focus on

    Returns:
        Dict of errors: {error_field: translation_key}
        Empty dict means validation passed.

    Validation Rules:
        1. At most MAX_FOCUS_HABITS focus ids
        2. Every focus id is an eligible habit for the member
        3. Weekly goal (if provided) is an int in [WEEKLY_GOAL_MIN, WEEKLY_GOAL_MAX]
    """
    errors: dict[str, str] = {}
    eligible = set(eligible_habit_ids)

    focus_ids = _dedupe_focus_ids(data.get(const.DATA_REWARD_PROFILE_FOCUS_HABIT_IDS))
    if len(focus_ids) > const.MAX_FOCUS_HABITS:
        errors[const.CFOP_ERROR_FOCUS_HABITS] = const.TRANS_KEY_TOO_MANY_FOCUS_HABITS
    elif any(habit_id not in eligible for habit_id in focus_ids):
        errors[const.CFOP_ERROR_FOCUS_HABITS] = const.TRANS_KEY_UNKNOWN_FOCUS_HABIT

    if const.DATA_REWARD_PROFILE_WEEKLY_GOAL in data:
        goal = data[const.DATA_REWARD_PROFILE_WEEKLY_GOAL]
        if (
            isinstance(goal, bool)
            or not isinstance(goal, int)
            or not const.WEEKLY_GOAL_MIN <= goal <= const.WEEKLY_GOAL_MAX
        ):
            errors[const.CFOP_ERROR_WEEKLY_GOAL] = const.TRANS_KEY_INVALID_WEEKLY_GOAL

    return errors


def build_reward_profile(
    data: Mapping[str, Any],
    eligible_habit_ids: Iterable[str],
    existing: Mapping[str, Any] | None = None,
) -> RewardProfile:
    """Build a complete reward profile ready for the caller to persist.

    Fields missing from `data` are taken from `existing` (update) or from the
    defaults (create). Focus ids are de-duplicated with empty ids dropped.

    Raises:
        EntityValidationError: first validation error found
    """
    base = normalize_reward_profile(existing)
    merged: dict[str, Any] = {
        const.DATA_REWARD_PROFILE_FOCUS_HABIT_IDS: base[
            const.DATA_REWARD_PROFILE_FOCUS_HABIT_IDS
        ],
        const.DATA_REWARD_PROFILE_WEEKLY_GOAL: base[
            const.DATA_REWARD_PROFILE_WEEKLY_GOAL
        ],
    }
    merged.update(_apply_key_aliases(data))
    merged[const.DATA_REWARD_PROFILE_FOCUS_HABIT_IDS] = _dedupe_focus_ids(
        merged.get(const.DATA_REWARD_PROFILE_FOCUS_HABIT_IDS)
    )

    errors = validate_reward_profile_data(merged, eligible_habit_ids)
    if errors:
        field, translation_key = next(iter(errors.items()))
        raise EntityValidationError(
            field=field,
            translation_key=translation_key,
            placeholders={"value": str(merged.get(field, ""))},
        )

    return {
        const.DATA_REWARD_PROFILE_FOCUS_HABIT_IDS: merged[
            const.DATA_REWARD_PROFILE_FOCUS_HABIT_IDS
        ],
        const.DATA_REWARD_PROFILE_WEEKLY_GOAL: merged[
            const.DATA_REWARD_PROFILE_WEEKLY_GOAL
        ],
        const.DATA_REWARD_PROFILE_LAST_UPDATED: dt_now_iso(),
    }


def collect_reward_profile_updates(
    members: Iterable[Any] | None,
    habits: Iterable[Any] | None,
    selections: Mapping[str, Mapping[str, Any]],
) -> dict[str, RewardProfile]:
    """Build profiles for active members whose selection changed.

    Members without an entry in `selections` are left untouched.

    Raises:
        EntityValidationError: a changed selection failed validation
    """
    normalized_habits: list[HabitData] = normalize_collection(habits, normalize_habit)
    updates: dict[str, RewardProfile] = {}

    for member in normalize_collection(members, normalize_member):
        member_id = member[const.DATA_MEMBER_ID]
        if not member[const.DATA_MEMBER_IS_ACTIVE] or member_id not in selections:
            continue

        selection = selections[member_id]
        if not reward_profile_changed(member, selection):
            continue

        eligible_ids = [
            habit[const.DATA_HABIT_ID]
            for habit in normalized_habits
            if is_habit_eligible(habit, member_id)
        ]
        updates[member_id] = build_reward_profile(
            selection,
            eligible_ids,
            existing=member.get(const.DATA_MEMBER_REWARD_PROFILE),
        )
        const.LOGGER.debug("Reward profile changed for member %s", member_id)

    return updates
