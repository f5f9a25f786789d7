"""Managers for Reward Momentum.

Managers hold state around the pure engines:
- momentum_manager: Memoized progress and default-focus maps
"""

from .momentum_manager import MomentumManager

__all__ = ["MomentumManager"]
