# File: utils/dt_utils.py
"""Date and time utilities for Reward Momentum.

Pure Python date functions. Completion dates are local calendar-day strings
(YYYY-MM-DD) with no timezone component, so everything here works on
`datetime.date` values and never converts a day to a UTC instant.

Functions:
    - set_default_timezone / get_default_timezone: Configure "local"
    - dt_today_local: Get today's date in local timezone
    - dt_today_iso: Get today's date as ISO string
    - dt_now_utc: Get current datetime in UTC
    - dt_now_iso: Get current UTC datetime as ISO string
    - dt_parse_date: Parse ISO date strings
    - dt_normalize_day: Coerce date/datetime/string input to an ISO day key
    - dt_days_ago: Calendar-day subtraction
    - dt_date_range: Trailing window of days, oldest first
"""

from __future__ import annotations

from datetime import UTC, date, datetime
import logging
from typing import TYPE_CHECKING

# Third-party date utilities
from dateutil.relativedelta import relativedelta

if TYPE_CHECKING:
    from datetime import tzinfo

# Module-level logger
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Timezone Configuration
# ==============================================================================

# None means the execution environment's local time zone.
DEFAULT_TIME_ZONE: tzinfo | None = None


def set_default_timezone(tz: tzinfo | None) -> None:
    """Set the default timezone used to decide what "today" is.

    Args:
        tz: tzinfo (usually a ZoneInfo) for the household, or None to fall
            back to the system local time zone.
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz


def get_default_timezone() -> tzinfo | None:
    """Get the configured default timezone (None = system local)."""
    return DEFAULT_TIME_ZONE


# ==============================================================================
# Current Date/Time Functions
# ==============================================================================


def dt_today_local(tz: tzinfo | None = None) -> date:
    """Return today's date in local timezone as a `datetime.date`.

    Args:
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Today's date in the specified timezone.

    Example:
        datetime.date(2025, 4, 7)
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.now(tz_info).date()


def dt_today_iso(tz: tzinfo | None = None) -> str:
    """Return today's date in local timezone as ISO string (YYYY-MM-DD).

    Example:
        "2025-04-07"
    """
    return dt_today_local(tz).isoformat()


def dt_now_utc() -> datetime:
    """Return the current datetime in UTC (timezone-aware)."""
    return datetime.now(UTC)


def dt_now_iso() -> str:
    """Return the current UTC datetime as an ISO 8601 string."""
    return dt_now_utc().isoformat()


# ==============================================================================
# Parsing / Normalization
# ==============================================================================


def dt_parse_date(date_str: str | None) -> date | None:
    """Safely parse an ISO date string into a `datetime.date`.

    Args:
        date_str: Date string to parse ("2025-04-07"), or None

    Returns:
        datetime.date or None if parsing fails.
    """
    if not date_str or not isinstance(date_str, str):
        return None

    try:
        return date.fromisoformat(date_str.strip())
    except ValueError:
        return None


def dt_normalize_day(day_input: str | date | datetime | None) -> str | None:
    """Normalize a calendar-day input to its ISO key.

    Datetimes are truncated to their own calendar date without any timezone
    conversion; a completion logged at 23:30 local stays on that day.

    Args:
        day_input: ISO string, date, datetime, or None

    Returns:
        "YYYY-MM-DD" string, or None if the input is not a recognizable day.
    """
    if isinstance(day_input, datetime):
        return day_input.date().isoformat()
    if isinstance(day_input, date):
        return day_input.isoformat()

    parsed = dt_parse_date(day_input)
    if parsed is None:
        return None
    return parsed.isoformat()


# ==============================================================================
# Calendar Arithmetic
# ==============================================================================


def dt_days_ago(reference: date, days: int) -> date:
    """Return the calendar date `days` days before `reference`.

    Calendar-day subtraction, independent of time of day and DST.

    Example:
        dt_days_ago(date(2026, 3, 1), 1) → date(2026, 2, 28)
    """
    return reference + relativedelta(days=-days)


def dt_date_range(end: date, days: int) -> list[date]:
    """Return the `days` calendar dates ending at `end`, oldest first.

    Args:
        end: Last (most recent) day of the window, included
        days: Window length; values below 1 yield an empty list

    Example:
        dt_date_range(date(2026, 1, 3), 3)
        → [date(2026, 1, 1), date(2026, 1, 2), date(2026, 1, 3)]
    """
    if days < 1:
        _LOGGER.debug("Empty date range requested (days=%s)", days)
        return []
    return [dt_days_ago(end, offset) for offset in range(days - 1, -1, -1)]
