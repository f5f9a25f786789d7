"""Tests for math_utils percentage helpers."""

import pytest

from reward_momentum.utils.math_utils import calculate_percentage, round_ratio


@pytest.mark.parametrize(
    ("value", "precision", "expected"),
    [(57.14285, 2, 57.14), (100.0, 2, 100.0), (33.3333, 1, 33.3)],
)
def test_round_ratio(value: float, precision: int, expected: float) -> None:
    """Values round to the requested precision."""
    assert round_ratio(value, precision) == expected


@pytest.mark.parametrize(
    ("current", "target", "expected"),
    [
        (0, 4, 0.0),
        (3, 4, 75.0),
        (4, 4, 100.0),
        (5, 4, 100.0),
        (1, 3, 33.33),
        (2, 0, 100.0),
        (0, 0, 0.0),
        (-1, 4, 0.0),
    ],
)
def test_calculate_percentage(current: int, target: int, expected: float) -> None:
    """Progress toward a goal is capped at 100 and never divides by zero."""
    assert calculate_percentage(current, target) == expected


def test_calculate_percentage_uncapped() -> None:
    """cap=False reports progress beyond the goal."""
    assert calculate_percentage(5, 4, cap=False) == 125.0
