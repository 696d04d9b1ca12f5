"""
Deck - Builds and shuffles a fresh deal.

Values run 1..pair_count, two cards each. The shuffle is an explicit
Fisher-Yates pass so placement is uniform regardless of how
random.shuffle is implemented.
"""

from __future__ import annotations
from typing import MutableSequence, TypeVar
import random
import uuid

from .state import Card, GameState
from .errors import InvalidPairCountError

T = TypeVar("T")


def validate_pair_count(pair_count) -> int:
    """Return pair_count if it is a positive int, raise otherwise."""
    if isinstance(pair_count, bool) or not isinstance(pair_count, int):
        raise InvalidPairCountError(pair_count)
    if pair_count < 1:
        raise InvalidPairCountError(pair_count)
    return pair_count


def fisher_yates(items: MutableSequence[T], rng: random.Random) -> MutableSequence[T]:
    """
    Shuffle items in place and return them.

    Walks from the end, swapping each slot with a uniformly chosen slot
    at or before it. Every permutation is equally likely.
    """
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def build_cards(pair_count: int) -> list[Card]:
    """Two face-down cards per value, in value order."""
    cards = []
    for value in range(1, pair_count + 1):
        cards.append(Card(card_id=str(uuid.uuid4()), value=value))
        cards.append(Card(card_id=str(uuid.uuid4()), value=value))
    return cards


def deal(
    pair_count: int,
    rng: random.Random | None = None,
    generation: int = 0,
    seed: int | None = None,
) -> GameState:
    """
    Create a shuffled GameState with no pending selection.

    Args:
        pair_count: Number of pairs (positive int)
        rng: Random source; a fresh one seeded from seed if omitted
        generation: Generation number for the new deal
        seed: Recorded on the state for reproducibility

    Raises:
        InvalidPairCountError: if pair_count is not a positive int
    """
    validate_pair_count(pair_count)
    if rng is None:
        rng = random.Random(seed)

    cards = fisher_yates(build_cards(pair_count), rng)
    return GameState(
        cards=tuple(cards),
        pair_count=pair_count,
        pending_index=None,
        generation=generation,
        seed=seed,
    )
