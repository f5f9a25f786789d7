"""Baseline tests for the household YAML scenario.

Loads tests/scenarios/scenario_household.yaml and checks every member's
progress against the scenario's `expected` block, then runs the same
household through the manager and the dashboard strip.
"""

from __future__ import annotations

from typing import Any

import pytest

from reward_momentum import MomentumEngine, MomentumManager
from reward_momentum.helpers import dashboard_helpers
from tests.helpers import load_scenario


@pytest.fixture(scope="module")
def scenario() -> dict[str, Any]:
    """Household scenario inputs and expectations."""
    return load_scenario("scenario_household")


@pytest.fixture(scope="module")
def progress(scenario: dict[str, Any]) -> dict[str, Any]:
    """Engine output for the scenario day."""
    return MomentumEngine.build_progress_map(
        scenario["members"],
        scenario["habits"],
        scenario["completions"],
        scenario["today"],
    )


MEMBER_IDS = ["zoe", "max", "sam", "lee"]


class TestScenarioHousehold:
    """Scenario expectations, member by member."""

    def test_active_members_only(self, progress: dict[str, Any]) -> None:
        """Inactive Ana has no entry."""
        assert sorted(progress) == sorted(MEMBER_IDS)

    @pytest.mark.parametrize("member_id", MEMBER_IDS)
    def test_member_matches_expected(
        self, scenario: dict[str, Any], progress: dict[str, Any], member_id: str
    ) -> None:
        """Focus, today, weekly and monthly values match the scenario."""
        expected = scenario["expected"][member_id]
        member = progress[member_id]

        assert member["member_id"] == member_id
        assert member["focus_habit_ids"] == expected["focus_habit_ids"]
        assert member["today"] == {
            "completed": expected["completed"],
            "total": expected["total"],
            "token_earned": expected["token_earned"],
            "missing_habit_names": expected["missing_habit_names"],
        }
        assert member["weekly"]["tokens"] == expected["weekly_tokens"]
        assert [day["earned"] for day in member["weekly"]["history"]] == (
            expected["weekly_history"]
        )
        assert member["weekly"]["ready_for_reward"] is expected["ready_for_reward"]
        assert member["monthly_tokens"] == expected["monthly_tokens"]
        assert member["available_tokens"] == expected["weekly_tokens"]

    def test_stale_focus_reference(self, progress: dict[str, Any]) -> None:
        """Sam's archived focus habit is listed by id but not resolved."""
        sam = progress["sam"]

        assert [habit["id"] for habit in sam["focus_habits"]] == ["walk_dog"]

    def test_default_focus_map(self, scenario: dict[str, Any]) -> None:
        """Default focus per active member, independent of configuration."""
        defaults = MomentumEngine.build_default_focus_map(
            scenario["members"], scenario["habits"]
        )

        assert defaults == {
            "zoe": ["brush", "read"],
            "max": ["bed", "water", "homework"],
            "sam": ["walk_dog"],
            "lee": [],
        }


class TestScenarioSurfaces:
    """The scenario through the manager and the dashboard strip."""

    def test_manager_matches_engine(
        self, scenario: dict[str, Any], progress: dict[str, Any]
    ) -> None:
        """The memoized manager returns the engine's answer."""
        manager = MomentumManager(
            members=scenario["members"],
            habits=scenario["habits"],
            completions=scenario["completions"],
        )

        assert manager.progress_map(scenario["today"]) == progress

    def test_strip_labels(
        self, scenario: dict[str, Any], progress: dict[str, Any]
    ) -> None:
        """Today and weekly labels for each card, in member order."""
        cards = dashboard_helpers.build_momentum_strip(scenario["members"], progress)

        assert [
            (card["display_name"], card["today_label"], card["weekly_label"])
            for card in cards
        ] == [
            ("Zoë", "Daily focus 2/2 · Boost earned", "4/4 · Ready!"),
            ("Max", "Daily focus 3/3 · Boost earned", "1/4"),
            ("Sam", "Daily focus 1/1 · Boost earned", "2/2 · Ready!"),
            ("Lee", "Daily focus 0/0", "0/4"),
        ]
