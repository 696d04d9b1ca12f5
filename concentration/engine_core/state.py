"""
Game State - Cards and the deck they are dealt into.

Design principles:
- Immutable: every transition returns a new GameState
- Removal is a flag: matched cards stay in the deck so observers
  can react before the presentation layer hides them
- Derived, not stored: the won condition is computed from the cards
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum


class GamePhase(Enum):
    """High-level game phases."""
    PLAYING = "playing"
    WON = "won"


@dataclass(frozen=True)
class Card:
    """
    A card instance in the deck.

    Two cards share each value. The card_id is unique within a deal
    and never changes while the card lives.
    """
    card_id: str
    value: int
    face_up: bool = False
    matched: bool = False

    def turned_up(self) -> Card:
        return replace(self, face_up=True)

    def turned_down(self) -> Card:
        return replace(self, face_up=False)

    def as_matched(self) -> Card:
        """Matched cards are always face-up."""
        return replace(self, face_up=True, matched=True)


@dataclass(frozen=True)
class CardView:
    """
    What a renderer gets to see of a card.

    value is None while the card is face-down.
    """
    card_id: str
    value: int | None
    face_up: bool
    matched: bool

    @classmethod
    def of(cls, card: Card) -> CardView:
        return cls(
            card_id=card.card_id,
            value=card.value if card.face_up else None,
            face_up=card.face_up,
            matched=card.matched,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.card_id,
            "value": self.value,
            "face_up": self.face_up,
            "matched": self.matched,
        }


@dataclass(frozen=True)
class GameState:
    """
    Complete state of one deal.

    cards is in display order. pending_index points at the first card
    of an unfinished pair attempt, if any. generation increases on every
    reset so delayed work can tell which deal it belongs to.
    """
    cards: tuple[Card, ...]
    pair_count: int
    pending_index: int | None = None
    generation: int = 0
    seed: int | None = None

    @property
    def size(self) -> int:
        return len(self.cards)

    @property
    def is_won(self) -> bool:
        return bool(self.cards) and all(c.matched for c in self.cards)

    @property
    def phase(self) -> GamePhase:
        return GamePhase.WON if self.is_won else GamePhase.PLAYING

    @property
    def matched_pairs(self) -> int:
        return sum(1 for c in self.cards if c.matched) // 2

    def card_at(self, index: int) -> Card:
        return self.cards[index]

    def with_cards(self, updates: dict[int, Card]) -> GameState:
        """Return new state with the cards at the given indices replaced."""
        new_cards = tuple(
            updates.get(i, card) for i, card in enumerate(self.cards)
        )
        return replace(self, cards=new_cards)

    def with_pending(self, index: int | None) -> GameState:
        return replace(self, pending_index=index)

    def snapshot(self) -> list[CardView]:
        """Ordered, concealing view of the deck for rendering."""
        return [CardView.of(c) for c in self.cards]
