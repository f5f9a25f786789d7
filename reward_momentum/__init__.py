"""Reward Momentum: daily focus tokens and weekly reward readiness.

Converts per-day habit completions into a gamified progress model for each
active member of a group:

    from reward_momentum import MomentumEngine

    progress = MomentumEngine.build_progress_map(members, habits, completions)
    progress["member-1"]["weekly"]["ready_for_reward"]

MomentumManager wraps the engine with identity-based memoization for callers
that re-read progress on every render.
"""

from .engines.momentum_engine import CompletionIndex, MomentumEngine
from .managers.momentum_manager import MomentumManager

__all__ = ["CompletionIndex", "MomentumEngine", "MomentumManager"]
