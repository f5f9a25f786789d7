# File: utils/__init__.py
"""Pure Python utilities for Reward Momentum.

Submodules:
    - dt_utils: Local calendar-day handling and date windows
    - math_utils: Percentage and rounding helpers

Usage:
    from . import dt_utils
    from .math_utils import calculate_percentage
"""

from . import dt_utils, math_utils

__all__ = ["dt_utils", "math_utils"]
