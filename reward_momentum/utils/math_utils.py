# File: utils/math_utils.py
"""Math and calculation utilities for Reward Momentum.

Functions:
    - round_ratio: Consistent rounding to configured precision
    - calculate_percentage: Progress percentage calculations
"""

from __future__ import annotations

# Default float precision for percentage rounding
DATA_FLOAT_PRECISION = 2


def round_ratio(value: float, precision: int = DATA_FLOAT_PRECISION) -> float:
    """Round a ratio or percentage to the configured precision.

    Examples:
        round_ratio(57.14285) → 57.14
        round_ratio(100.0) → 100.0
    """
    return round(value, precision)


def calculate_percentage(
    current: float,
    target: float,
    *,
    cap: bool = True,
    precision: int = DATA_FLOAT_PRECISION,
) -> float:
    """Calculate progress of current toward target as a percentage.

    Args:
        current: Achieved amount (e.g. weekly tokens)
        target: Goal amount; values below 1 are treated as 1 so an unset
                goal never divides by zero
        cap: Clamp the result to 100.0 (default True)
        precision: Decimal places for rounding

    Returns:
        Percentage between 0.0 and 100.0 (or above 100.0 if cap=False)

    Examples:
        calculate_percentage(3, 4) → 75.0
        calculate_percentage(5, 4) → 100.0
        calculate_percentage(5, 4, cap=False) → 125.0
        calculate_percentage(2, 0) → 100.0
    """
    denominator = max(target, 1)
    percent = max(current, 0) / denominator * 100.0
    if cap:
        percent = min(percent, 100.0)
    return round_ratio(percent, precision)
