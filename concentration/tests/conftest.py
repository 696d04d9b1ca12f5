"""
Pytest fixtures for Concentration tests.
"""

import pytest

from ..engine_core.state import Card, GameState
from ..session import GameSession, ManualScheduler, SessionManager
from ..api.service import APIService


def pair_positions(state: GameState) -> dict[int, list[int]]:
    """Map each value to the two indices holding it."""
    positions: dict[int, list[int]] = {}
    for i, card in enumerate(state.cards):
        positions.setdefault(card.value, []).append(i)
    return positions


def mismatched_indices(state: GameState) -> tuple[int, int]:
    """Two face-down, unmatched indices holding different values."""
    for i, a in enumerate(state.cards):
        for j, b in enumerate(state.cards):
            if i != j and a.value != b.value and not (a.face_up or b.face_up or a.matched or b.matched):
                return i, j
    raise AssertionError("No mismatched pair available")


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Virtual-clock scheduler."""
    return ManualScheduler()


@pytest.fixture
def session(scheduler: ManualScheduler) -> GameSession:
    """A 4-pair game with a one-second mismatch delay on a virtual clock."""
    return GameSession(4, scheduler=scheduler, mismatch_delay=1.0, seed=7)


@pytest.fixture
def two_pair_session(scheduler: ManualScheduler) -> GameSession:
    """A 2-pair game: [A, A, B, B] in some order."""
    return GameSession(2, scheduler=scheduler, mismatch_delay=1.0, seed=11)


@pytest.fixture
def fixed_state() -> GameState:
    """An unshuffled 2-pair deck laid out as 1, 2, 1, 2."""
    return GameState(
        cards=(
            Card(card_id="a1", value=1),
            Card(card_id="b1", value=2),
            Card(card_id="a2", value=1),
            Card(card_id="b2", value=2),
        ),
        pair_count=2,
    )


@pytest.fixture
def manager() -> SessionManager:
    """Session manager whose sessions run on one shared virtual clock."""
    clock = ManualScheduler()
    mgr = SessionManager(scheduler_factory=lambda: clock, mismatch_delay=1.0)
    mgr.clock = clock
    return mgr


@pytest.fixture
def service(manager: SessionManager) -> APIService:
    """API service with the default pair options."""
    return APIService(
        session_manager=manager,
        pair_options=(2, 4, 6, 8),
        default_pairs=2,
    )
