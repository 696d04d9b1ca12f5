"""
Action System - Actions, payloads, and results.

Actions represent:
1. Player input (tap a card)
2. Session control (reset / new deal)
3. Delayed work (flip a mismatched pair back down)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    TAP = "tap"
    RESET = "reset"
    REVERT_MISMATCH = "revert_mismatch"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    Validation happens in the reducer.
    """
    # For taps
    index: Any = None

    # For resets
    pair_count: Any = None
    seed: int | None = None

    # For mismatch reversion
    generation: int | None = None
    indices: tuple[int, ...] = ()
    card_ids: tuple[str, ...] = ()


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Applied atomically by the reducer.
    """
    action_type: ActionType
    payload: ActionPayload

    @classmethod
    def tap(cls, index: int) -> Action:
        """Factory for tap action."""
        return cls(
            action_type=ActionType.TAP,
            payload=ActionPayload(index=index),
        )

    @classmethod
    def reset(cls, pair_count: int, seed: int | None = None) -> Action:
        """Factory for reset action."""
        return cls(
            action_type=ActionType.RESET,
            payload=ActionPayload(pair_count=pair_count, seed=seed),
        )

    @classmethod
    def revert_mismatch(cls, reversion: Reversion) -> Action:
        """Factory for the delayed flip-back of a mismatched pair."""
        return cls(
            action_type=ActionType.REVERT_MISMATCH,
            payload=ActionPayload(
                generation=reversion.generation,
                indices=reversion.indices,
                card_ids=reversion.card_ids,
            ),
        )


@dataclass(frozen=True)
class Reversion:
    """
    A mismatched pair waiting to be turned back down.

    Keyed by the deal generation and the exact cards it was created for,
    so it can never touch a different deal.
    """
    generation: int
    indices: tuple[int, ...]
    card_ids: tuple[str, ...]


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Errors (if failed)
    - Side effects (for UI updates and scheduling)
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None

    # False for no-op taps and inert reversions
    changed: bool = True

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)

    # Set when a tap completed a mismatched pair
    reversion: Reversion | None = None

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        reversion: Reversion | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            reversion=reversion,
        )

    @classmethod
    def unchanged(cls, state: Any, reason: str) -> ActionResult:
        """A successful no-op."""
        return cls(
            success=True,
            new_state=state,
            changed=False,
            state_changes=[reason],
        )
