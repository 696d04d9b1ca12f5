"""
Reducer - Applies actions to game state.

The reducer is the single point of state transition.
All state changes must go through apply_action().

Design principles:
- Pure with respect to GameState: (state, action) -> new_state
- Validates before applying, so a failure never leaves partial state
- Returns ActionResult with success/failure
- Anticipated-but-pointless input is a successful no-op
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random

from .state import GameState
from .action import Action, ActionType, ActionResult, Reversion
from .deck import deal
from .errors import InvalidCardIndexError, InvalidPairCountError

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless apart from the random source used for new deals.
    """
    rng: random.Random = field(default_factory=random.Random)

    def apply(self, state: GameState | None, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        state may be None only for RESET (the first deal).
        Returns ActionResult with new state or error.
        """
        validation_error = self._validate_action(state, action)
        if validation_error:
            return validation_error

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )
        return handler(state, action)

    def _validate_action(self, state: GameState | None, action: Action) -> ActionResult | None:
        """
        Validate that an action can be applied to the current state.

        Returns a failure result if invalid, None if valid.
        """
        if action.action_type == ActionType.RESET:
            return None

        if state is None:
            return ActionResult.failure("No game has been dealt", error_code="NO_GAME")

        if action.action_type == ActionType.TAP:
            index = action.payload.index
            if (
                isinstance(index, bool)
                or not isinstance(index, int)
                or not 0 <= index < state.size
            ):
                err = InvalidCardIndexError(index, state.size)
                return ActionResult.failure(str(err), error_code=err.error_code)

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.TAP: self._handle_tap,
            ActionType.RESET: self._handle_reset,
            ActionType.REVERT_MISMATCH: self._handle_revert,
        }
        return handlers.get(action_type)

    def _handle_reset(self, state: GameState | None, action: Action) -> ActionResult:
        """Deal a fresh deck. The generation always moves forward."""
        generation = state.generation + 1 if state is not None else 0
        seed = action.payload.seed
        rng = random.Random(seed) if seed is not None else self.rng
        try:
            new_state = deal(
                action.payload.pair_count,
                rng=rng,
                generation=generation,
                seed=seed,
            )
        except InvalidPairCountError as e:
            return ActionResult.failure(str(e), error_code=e.error_code)

        return ActionResult.success_with_state(
            new_state,
            changes=[f"Dealt {new_state.size} cards ({new_state.pair_count} pairs)"],
        )

    def _handle_tap(self, state: GameState, action: Action) -> ActionResult:
        """
        Handle a tap on one card.

        Steps:
        1. Ignore matched or face-up cards
        2. Turn the card face-up
        3. First of a pair: remember it and stop
        4. Second of a pair: match, or hand back a Reversion to schedule
        """
        index = action.payload.index
        card = state.card_at(index)

        if card.matched:
            return ActionResult.unchanged(state, f"Card {index} already matched")
        if card.face_up:
            return ActionResult.unchanged(state, f"Card {index} already face-up")

        if state.pending_index is None:
            new_state = state.with_cards({index: card.turned_up()}).with_pending(index)
            return ActionResult.success_with_state(
                new_state,
                changes=[f"Revealed card {index}"],
            )

        first_index = state.pending_index
        first = state.card_at(first_index)

        # Pending selection is cleared in both branches, before any delay
        if first.value == card.value:
            new_state = state.with_cards({
                first_index: first.as_matched(),
                index: card.as_matched(),
            }).with_pending(None)
            logger.debug("Matched cards %d and %d (value %d)", first_index, index, card.value)
            return ActionResult.success_with_state(
                new_state,
                changes=[f"Revealed card {index}", f"Matched cards {first_index} and {index}"],
            )

        new_state = state.with_cards({index: card.turned_up()}).with_pending(None)
        reversion = Reversion(
            generation=state.generation,
            indices=(first_index, index),
            card_ids=(first.card_id, card.card_id),
        )
        logger.debug("Mismatch between cards %d and %d", first_index, index)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Revealed card {index}", f"Cards {first_index} and {index} do not match"],
            reversion=reversion,
        )

    def _handle_revert(self, state: GameState, action: Action) -> ActionResult:
        """
        Turn a mismatched pair back down.

        Inert unless it belongs to the current deal and every targeted card
        is still where it was, face-up and unmatched.
        """
        payload = action.payload
        if payload.generation != state.generation:
            return ActionResult.unchanged(
                state,
                f"Stale reversion for generation {payload.generation}",
            )

        updates = {}
        for index, card_id in zip(payload.indices, payload.card_ids):
            if not 0 <= index < state.size:
                continue
            card = state.card_at(index)
            if card.card_id != card_id or card.matched or not card.face_up:
                continue
            updates[index] = card.turned_down()

        if not updates:
            return ActionResult.unchanged(state, "Nothing to turn back down")

        return ActionResult.success_with_state(
            state.with_cards(updates),
            changes=[f"Turned card {i} face-down" for i in sorted(updates)],
        )


def apply_action(
    state: GameState | None,
    action: Action,
    rng: random.Random | None = None,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(rng=rng) if rng is not None else Reducer()
    return reducer.apply(state, action)
