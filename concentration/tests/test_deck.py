"""
Tests for dealing and shuffling.

Tests:
- Deck size and pairing
- Fresh deals are concealed
- Pair count validation
- Fisher-Yates uniformity
"""

from collections import Counter
import random

import pytest

from ..engine_core.deck import deal, fisher_yates, validate_pair_count, build_cards
from ..engine_core.errors import InvalidPairCountError


class TestDeal:
    """Tests for deal()."""

    @pytest.mark.parametrize("pair_count", [1, 2, 4, 6, 8, 13])
    def test_every_value_appears_twice(self, pair_count):
        """A deal has 2*pair_count cards, each value exactly twice."""
        state = deal(pair_count, seed=3)

        assert state.size == 2 * pair_count
        counts = Counter(card.value for card in state.cards)
        assert set(counts) == set(range(1, pair_count + 1))
        assert all(n == 2 for n in counts.values())

    def test_fresh_deal_is_face_down(self):
        """All cards start face-down and unmatched with nothing pending."""
        state = deal(6)

        assert all(not c.face_up and not c.matched for c in state.cards)
        assert state.pending_index is None
        assert not state.is_won

    def test_snapshot_conceals_values(self):
        """Snapshot right after a deal discloses no values."""
        state = deal(8)

        assert all(view.value is None for view in state.snapshot())

    def test_card_ids_are_unique(self):
        """Every card gets its own id."""
        state = deal(8)

        ids = [c.card_id for c in state.cards]
        assert len(set(ids)) == len(ids)

    def test_seed_reproduces_layout(self):
        """Same seed, same order of values."""
        first = deal(8, seed=42)
        second = deal(8, seed=42)

        assert [c.value for c in first.cards] == [c.value for c in second.cards]
        assert first.seed == 42

    def test_generation_recorded(self):
        """Deal carries the generation it was given."""
        assert deal(2, generation=5).generation == 5


class TestPairCountValidation:
    """Tests for pair count validation."""

    @pytest.mark.parametrize("bad", [0, -1, -8])
    def test_non_positive_rejected(self, bad):
        """Zero and negative pair counts raise."""
        with pytest.raises(InvalidPairCountError):
            deal(bad)

    @pytest.mark.parametrize("bad", [2.0, "4", None, True])
    def test_non_int_rejected(self, bad):
        """Pair count must be a real int."""
        with pytest.raises(InvalidPairCountError):
            validate_pair_count(bad)

    def test_error_is_value_error(self):
        """Callers can catch it as ValueError."""
        with pytest.raises(ValueError):
            deal(0)

    def test_any_positive_int_accepted(self):
        """The engine is not limited to the offered options."""
        assert validate_pair_count(5) == 5


class TestFisherYates:
    """Tests for the shuffle."""

    def test_is_permutation(self):
        """Shuffle keeps every element."""
        items = list(range(20))
        fisher_yates(items, random.Random(1))

        assert sorted(items) == list(range(20))

    def test_uniform_over_permutations(self):
        """All 6 orders of 3 items come up with roughly equal frequency."""
        rng = random.Random(1234)
        trials = 60000
        counts = Counter(tuple(fisher_yates([0, 1, 2], rng)) for _ in range(trials))

        assert len(counts) == 6
        expected = trials / 6
        for n in counts.values():
            assert abs(n - expected) < expected * 0.05

    def test_empty_and_single(self):
        """Degenerate inputs are left alone."""
        assert fisher_yates([], random.Random(0)) == []
        assert fisher_yates([9], random.Random(0)) == [9]

    def test_build_cards_in_value_order(self):
        """Unshuffled cards come in value order, two by two."""
        values = [c.value for c in build_cards(3)]
        assert values == [1, 1, 2, 2, 3, 3]
