"""Engine modules for Reward Momentum.

Contains pure computation engines:
- momentum_engine: Completion indexing, focus resolution, token windows
"""

from .momentum_engine import CompletionIndex, MomentumEngine

__all__ = [
    "CompletionIndex",
    "MomentumEngine",
]
