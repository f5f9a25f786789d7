# File: helpers/__init__.py
"""Presentation helper functions for Reward Momentum.

Submodules:
    - dashboard_helpers: Member momentum cards and labels

Usage:
    from .helpers import dashboard_helpers
    from .helpers.dashboard_helpers import build_momentum_strip
"""

from . import dashboard_helpers

__all__ = ["dashboard_helpers"]
