"""
Engine Core - Deterministic card state and match resolution.

The engine:
1. Deals a shuffled deck of paired cards
2. Holds the deck as an immutable GameState
3. Applies taps, resets and mismatch reversions via the reducer
4. Exposes a concealing snapshot for rendering
"""

from .state import Card, CardView, GameState, GamePhase
from .action import Action, ActionType, ActionPayload, ActionResult, Reversion
from .reducer import Reducer, apply_action
from .deck import deal, fisher_yates, validate_pair_count
from .errors import ConcentrationError, InvalidPairCountError, InvalidCardIndexError

__all__ = [
    "Card",
    "CardView",
    "GameState",
    "GamePhase",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Reversion",
    "Reducer",
    "apply_action",
    "deal",
    "fisher_yates",
    "validate_pair_count",
    "ConcentrationError",
    "InvalidPairCountError",
    "InvalidCardIndexError",
]
