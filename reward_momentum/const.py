# File: const.py
"""Constants for the Reward Momentum engine.

This file centralizes data keys, defaults, window sizes, validation bounds
and error keys for consistency across the package. Input documents may use
either the canonical snake_case keys below or the camelCase spellings of the
document store (see DATA_KEY_ALIASES).
"""

import logging

# ------------------------------------------------------------------------------------------------
# Logging
# ------------------------------------------------------------------------------------------------
LOGGER = logging.getLogger(__package__)

# ------------------------------------------------------------------------------------------------
# Defaults / Windows
# ------------------------------------------------------------------------------------------------
DEFAULT_WEEKLY_GOAL = 4
DEFAULT_FOCUS_HABIT_COUNT = 3

WEEKLY_WINDOW_DAYS = 7
MONTHLY_WINDOW_DAYS = 30

# Focus selection / goal bounds (profile editing)
MAX_FOCUS_HABITS = 3
WEEKLY_GOAL_MIN = 1
WEEKLY_GOAL_MAX = 14

# ------------------------------------------------------------------------------------------------
# Data Keys - Habits
# ------------------------------------------------------------------------------------------------
DATA_HABIT_ID = "id"
DATA_HABIT_NAME = "name"
DATA_HABIT_EMOJI = "emoji"
DATA_HABIT_ASSIGNED_MEMBERS = "assigned_members"
DATA_HABIT_IS_ACTIVE = "is_active"
DATA_HABIT_IS_ARCHIVED = "is_archived"
DATA_HABIT_CREATED_AT = "created_at"
DATA_HABIT_SORT_ORDER = "sort_order"

# ------------------------------------------------------------------------------------------------
# Data Keys - Members
# ------------------------------------------------------------------------------------------------
DATA_MEMBER_ID = "id"
DATA_MEMBER_NAME = "name"
DATA_MEMBER_DISPLAY_NAME = "display_name"
DATA_MEMBER_IS_ACTIVE = "is_active"
DATA_MEMBER_REWARD_PROFILE = "reward_profile"

DATA_REWARD_PROFILE_FOCUS_HABIT_IDS = "daily_focus_habit_ids"
DATA_REWARD_PROFILE_WEEKLY_GOAL = "weekly_goal"
DATA_REWARD_PROFILE_LAST_UPDATED = "last_updated"

# ------------------------------------------------------------------------------------------------
# Data Keys - Completions
# ------------------------------------------------------------------------------------------------
DATA_COMPLETION_HABIT_ID = "habit_id"
DATA_COMPLETION_MEMBER_ID = "member_id"
DATA_COMPLETION_DATE = "date"
DATA_COMPLETION_COMPLETED = "completed"

# Document-store spellings accepted on read, mapped to canonical keys
DATA_KEY_ALIASES = {
    "assignedMembers": DATA_HABIT_ASSIGNED_MEMBERS,
    "isActive": DATA_HABIT_IS_ACTIVE,
    "isArchived": DATA_HABIT_IS_ARCHIVED,
    "createdAt": DATA_HABIT_CREATED_AT,
    "sortOrder": DATA_HABIT_SORT_ORDER,
    "displayName": DATA_MEMBER_DISPLAY_NAME,
    "rewardProfile": DATA_MEMBER_REWARD_PROFILE,
    "dailyFocusHabitIds": DATA_REWARD_PROFILE_FOCUS_HABIT_IDS,
    "weeklyGoal": DATA_REWARD_PROFILE_WEEKLY_GOAL,
    "lastUpdated": DATA_REWARD_PROFILE_LAST_UPDATED,
    "habitId": DATA_COMPLETION_HABIT_ID,
    "memberId": DATA_COMPLETION_MEMBER_ID,
}

# ------------------------------------------------------------------------------------------------
# Progress Keys (derived output)
# ------------------------------------------------------------------------------------------------
PROGRESS_MEMBER_ID = "member_id"
PROGRESS_FOCUS_HABIT_IDS = "focus_habit_ids"
PROGRESS_FOCUS_HABITS = "focus_habits"
PROGRESS_TODAY = "today"
PROGRESS_WEEKLY = "weekly"
PROGRESS_MONTHLY_TOKENS = "monthly_tokens"
PROGRESS_AVAILABLE_TOKENS = "available_tokens"

PROGRESS_TODAY_COMPLETED = "completed"
PROGRESS_TODAY_TOTAL = "total"
PROGRESS_TODAY_TOKEN_EARNED = "token_earned"
PROGRESS_TODAY_MISSING_HABIT_NAMES = "missing_habit_names"

PROGRESS_WEEKLY_TOKENS = "tokens"
PROGRESS_WEEKLY_GOAL = "goal"
PROGRESS_WEEKLY_HISTORY = "history"
PROGRESS_WEEKLY_READY_FOR_REWARD = "ready_for_reward"

SNAPSHOT_DATE = "date"
SNAPSHOT_EARNED = "earned"

# ------------------------------------------------------------------------------------------------
# Dashboard / Presentation
# ------------------------------------------------------------------------------------------------
LABEL_DAILY_FOCUS = "Daily focus"
LABEL_BOOST_EARNED = "Boost earned"
LABEL_NEEDS = "Needs"
LABEL_READY = "Ready!"
LABEL_NO_FOCUS_HABITS = "No focus habits selected."
LABEL_SEPARATOR = " · "

HISTORY_MARKER_EARNED = "★"
HISTORY_MARKER_MISSED = "·"

# ------------------------------------------------------------------------------------------------
# Validation Error Fields / Translation Keys
# ------------------------------------------------------------------------------------------------
CFOP_ERROR_FOCUS_HABITS = "focus_habits"
CFOP_ERROR_WEEKLY_GOAL = "weekly_goal"

TRANS_KEY_TOO_MANY_FOCUS_HABITS = "too_many_focus_habits"
TRANS_KEY_UNKNOWN_FOCUS_HABIT = "unknown_focus_habit"
TRANS_KEY_INVALID_WEEKLY_GOAL = "invalid_weekly_goal"
