"""
Engine errors raised at the session boundary.

Anticipated-but-pointless input (tapping a face-up or matched card) is
never an error; it is a no-op. Only malformed references are raised.
"""


class ConcentrationError(Exception):
    """Base class for engine errors."""
    error_code = "ENGINE_ERROR"


class InvalidPairCountError(ConcentrationError, ValueError):
    """Raised when a deal is requested with a non-positive pair count."""
    error_code = "INVALID_PAIR_COUNT"

    def __init__(self, pair_count):
        self.pair_count = pair_count
        super().__init__(f"pair_count must be a positive integer, got {pair_count!r}")


class InvalidCardIndexError(ConcentrationError, IndexError):
    """Raised when a tap references a position outside the deck."""
    error_code = "INVALID_CARD_INDEX"

    def __init__(self, index, size: int):
        self.index = index
        self.size = size
        super().__init__(f"Card index {index!r} out of range for deck of {size}")
