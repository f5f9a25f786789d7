"""Momentum Manager - Memoized reward momentum for a group.

This manager sits at the caller boundary of MomentumEngine:
- Holds the current member, habit and completion collections
- Recomputes the progress map only when an input's identity or the
  evaluation day changes, otherwise serves the cached result
- Notifies listeners after each recomputation

ARCHITECTURE:
- Directive 1: Derivative Data is Ephemeral - progress is never persisted
- Directive 2: Cache is Presentation, not Database - it can always be
  recreated from the three input collections
- The engine stays unaware of caching; replacing a collection (new object)
  is the change signal, in-place mutation of a held collection is not
  detected and needs invalidate_cache()
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from .. import const
from ..engines.momentum_engine import MomentumEngine

if TYPE_CHECKING:
    from ..type_defs import DefaultFocusMap, MemberRewardProgress, ProgressMap


__all__ = ["MomentumManager"]

ProgressListener = Callable[["ProgressMap"], None]

# Default for update() arguments that were not passed
_UNCHANGED: Any = object()


class MomentumManager:
    """Manager for memoized reward momentum derivation.

    Responsibilities:
    - Track input collection identities
    - Cache progress and default-focus maps
    - Fan out recomputed progress to listeners

    NOT responsible for:
    - Fetching or persisting data (data-access layer)
    - Token math (MomentumEngine)
    - Deciding when inputs change (caller calls update())
    """

    def __init__(
        self,
        members: Iterable[Any] | None = None,
        habits: Iterable[Any] | None = None,
        completions: Iterable[Any] | None = None,
    ) -> None:
        """Initialize the manager with optional starting collections."""
        self._members = members
        self._habits = habits
        self._completions = completions

        # Inputs the cached maps were computed from, compared by identity
        self._progress_inputs: tuple[Any, ...] | None = None
        self._default_focus_inputs: tuple[Any, ...] | None = None

        self._progress_cache: ProgressMap = {}
        self._default_focus_cache: DefaultFocusMap = {}
        self._listeners: list[ProgressListener] = []

    # =========================================================================
    # Inputs
    # =========================================================================

    def update(
        self,
        *,
        members: Iterable[Any] | None = _UNCHANGED,
        habits: Iterable[Any] | None = _UNCHANGED,
        completions: Iterable[Any] | None = _UNCHANGED,
    ) -> None:
        """Replace one or more input collections.

        Only the collections passed are replaced; passing None resets a
        collection to absent. The cache is refreshed lazily on the next read.
        """
        if members is not _UNCHANGED:
            self._members = members
        if habits is not _UNCHANGED:
            self._habits = habits
        if completions is not _UNCHANGED:
            self._completions = completions

    def add_listener(self, listener: ProgressListener) -> Callable[[], None]:
        """Register a callback for recomputed progress maps.

        Returns:
            Callable that removes the listener.
        """
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    # =========================================================================
    # Cached Reads
    # =========================================================================

    def progress_map(
        self, today: date | datetime | str | None = None
    ) -> ProgressMap:
        """Return {member_id: MemberRewardProgress}, recomputing if needed.

        Args:
            today: Evaluation day; defaults to the current local date, so a
                   cached map is refreshed automatically after midnight.
        """
        day = MomentumEngine.resolve_today(today)
        inputs = (self._members, self._habits, self._completions, day)

        if self._progress_inputs is not None and self._same_inputs(
            self._progress_inputs, inputs
        ):
            const.LOGGER.debug("MomentumManager: Progress cache hit for %s", day)
            return self._progress_cache

        self._progress_cache = MomentumEngine.build_progress_map(
            self._members, self._habits, self._completions, day
        )
        self._progress_inputs = inputs
        const.LOGGER.debug(
            "MomentumManager: Recomputed progress for %s members on %s",
            len(self._progress_cache),
            day,
        )

        for listener in list(self._listeners):
            listener(self._progress_cache)

        return self._progress_cache

    def default_focus_map(self) -> DefaultFocusMap:
        """Return {member_id: default focus ids}, recomputing if needed."""
        inputs = (self._members, self._habits)
        if self._default_focus_inputs is not None and self._same_inputs(
            self._default_focus_inputs, inputs
        ):
            return self._default_focus_cache

        self._default_focus_cache = MomentumEngine.build_default_focus_map(
            self._members, self._habits
        )
        self._default_focus_inputs = inputs
        return self._default_focus_cache

    def get_member_progress(
        self, member_id: str, today: date | datetime | str | None = None
    ) -> MemberRewardProgress | None:
        """Return one member's progress, or None if the member is not active."""
        return self.progress_map(today).get(member_id)

    def invalidate_cache(self) -> None:
        """Drop cached maps so the next read recomputes."""
        self._progress_inputs = None
        self._default_focus_inputs = None
        self._progress_cache = {}
        self._default_focus_cache = {}
        const.LOGGER.debug("MomentumManager: Cleared all cache entries")

    @staticmethod
    def _same_inputs(cached: tuple[Any, ...], current: tuple[Any, ...]) -> bool:
        """Compare collections by identity (a date, if present, by value)."""
        return all(
            old == new if isinstance(old, date) else old is new
            for old, new in zip(cached, current, strict=True)
        )
