"""
Game Session - One player's deck and the transitions on it.

The session owns:
- The current GameState (replaced on every transition)
- The reducer and its random source
- Scheduled mismatch reversions, keyed by deal generation

Every mutation (tap, reset, delayed reversion) runs under one lock, so a
reversion firing on a timer thread can never interleave with a tap or a
reset. A reset cancels outstanding reversions and bumps the generation;
a reversion that still fires for an older generation is a no-op.
"""

from __future__ import annotations
from typing import Callable
import logging
import math
import random
import threading

from ..config import get_mismatch_delay
from ..engine_core.state import CardView, GameState
from ..engine_core.action import Action, Reversion
from ..engine_core.reducer import Reducer
from ..engine_core.errors import InvalidCardIndexError, InvalidPairCountError
from .scheduler import Scheduler, ScheduledCall, TimerScheduler

logger = logging.getLogger(__name__)

Listener = Callable[[list[CardView]], None]


class GameSession:
    """
    A single-player matching game.

    Usage:
        session = GameSession(pair_count=4)
        session.tap(0)
        session.tap(5)
        if session.is_won():
            session.reset(6)

    Args:
        pair_count: Pairs in the first deal (positive int)
        scheduler: Where mismatch reversions run (real timers by default)
        mismatch_delay: Seconds a mismatched pair stays visible
        seed: Seeds the shuffle for reproducible deals
        rng: Explicit random source; overrides seed

    Raises:
        InvalidPairCountError: if pair_count is not a positive int
        ValueError: if mismatch_delay is negative or not finite
    """

    def __init__(
        self,
        pair_count: int,
        *,
        scheduler: Scheduler | None = None,
        mismatch_delay: float | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
    ):
        if mismatch_delay is None:
            mismatch_delay = get_mismatch_delay()
        elif not math.isfinite(mismatch_delay) or mismatch_delay < 0:
            raise ValueError(f"mismatch_delay must be a finite non-negative number, got {mismatch_delay!r}")

        self._lock = threading.RLock()
        self._scheduler = scheduler or TimerScheduler()
        self.mismatch_delay = mismatch_delay
        self._reducer = Reducer(rng=rng or random.Random(seed))
        self._pending: dict[Reversion, ScheduledCall] = {}
        self._listeners: list[Listener] = []
        self._closed = False
        self._state: GameState | None = None
        self.reset(pair_count)

    # =========================================================================
    # Public API
    # =========================================================================

    def reset(self, pair_count: int, seed: int | None = None) -> list[CardView]:
        """
        Replace the deck with a fresh shuffled deal.

        Any mismatch reversion still pending for the old deal is cancelled.
        An invalid pair_count raises and leaves the current deal untouched.
        """
        with self._lock:
            result = self._reducer.apply(self._state, Action.reset(pair_count, seed))
            if not result.success:
                raise InvalidPairCountError(pair_count)
            self._cancel_pending()
            self._state = result.new_state
            self._closed = False
            snapshot = self._state.snapshot()
            logger.info(
                "Dealt %d pairs (generation %d)",
                self._state.pair_count, self._state.generation,
            )
        self._notify(snapshot)
        return snapshot

    def tap(self, index: int) -> list[CardView]:
        """
        Reveal the card at index and resolve the pair attempt if complete.

        Tapping a matched or face-up card does nothing.

        Raises:
            InvalidCardIndexError: if index is not a position in the deck
        """
        state, _ = self.apply_tap(index)
        return state.snapshot()

    def apply_tap(self, index: int) -> tuple[GameState, bool]:
        """
        Same as tap, returning the resulting state and whether it changed.

        Both come from the one transition, so a reversion firing on the
        scheduler thread afterwards does not affect them.
        """
        with self._lock:
            result = self._reducer.apply(self._state, Action.tap(index))
            if not result.success:
                raise InvalidCardIndexError(index, self._state.size)
            state = self._state = result.new_state
            if result.reversion is not None:
                self._schedule(result.reversion)
            snapshot = state.snapshot()
        for change in result.state_changes:
            logger.debug(change)
        if result.changed:
            self._notify(snapshot)
        return state, result.changed

    def snapshot(self) -> list[CardView]:
        """Ordered view of the deck; face-down values are concealed."""
        with self._lock:
            return self._state.snapshot()

    def is_won(self) -> bool:
        """True when every card is matched."""
        with self._lock:
            return self._state.is_won

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call listener with a fresh snapshot after every change.

        Delayed reversions notify from the scheduler's thread.
        Returns a function that removes the listener.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        """Cancel outstanding reversions and stop notifying listeners."""
        with self._lock:
            self._cancel_pending()
            self._listeners.clear()
            self._closed = True

    # =========================================================================
    # Read-only state
    # =========================================================================

    @property
    def state(self) -> GameState:
        with self._lock:
            return self._state

    @property
    def pair_count(self) -> int:
        return self.state.pair_count

    @property
    def pending_index(self) -> int | None:
        return self.state.pending_index

    @property
    def generation(self) -> int:
        return self.state.generation

    @property
    def pending_reversions(self) -> int:
        with self._lock:
            return len(self._pending)

    # =========================================================================
    # Mismatch reversion
    # =========================================================================

    def _schedule(self, reversion: Reversion) -> None:
        call = self._scheduler.call_later(
            self.mismatch_delay,
            lambda: self._revert(reversion),
        )
        self._pending[reversion] = call

    def _revert(self, reversion: Reversion) -> None:
        with self._lock:
            self._pending.pop(reversion, None)
            if self._closed:
                return
            result = self._reducer.apply(self._state, Action.revert_mismatch(reversion))
            self._state = result.new_state
            snapshot = self._state.snapshot()
        if result.changed:
            logger.debug("Reverted mismatch %s", reversion.indices)
            self._notify(snapshot)
        else:
            logger.debug("Ignored reversion: %s", "; ".join(result.state_changes))

    def _cancel_pending(self) -> None:
        for call in self._pending.values():
            call.cancel()
        if self._pending:
            logger.debug("Cancelled %d pending reversion(s)", len(self._pending))
        self._pending.clear()

    def _notify(self, snapshot: list[CardView]) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(snapshot)
