"""Test helpers for Reward Momentum tests.

This module re-exports all helpers for convenient imports:

    from tests.helpers import (
        # Factories
        make_habit, make_member, make_completion, complete_all,
        TODAY, TODAY_ISO, days_ago,

        # Scenarios
        load_scenario,
    )

See individual modules for full documentation:
- factories.py: Raw input document builders
- scenarios.py: YAML household scenarios with relative day offsets
"""

from tests.helpers.factories import (
    TODAY,
    TODAY_ISO,
    complete_all,
    days_ago,
    make_completion,
    make_habit,
    make_member,
)
from tests.helpers.scenarios import SCENARIO_DIR, load_scenario

__all__ = [
    "SCENARIO_DIR",
    "TODAY",
    "TODAY_ISO",
    "complete_all",
    "days_ago",
    "load_scenario",
    "make_completion",
    "make_habit",
    "make_member",
]
