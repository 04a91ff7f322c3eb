"""
Exceptions raised by the round engine and its card supplies.

All of them are recoverable: the engine commits no state for an operation
that raises, so callers can redisplay the error and try again.
"""


class RoundError(Exception):
    """Base class for errors raised while playing a round."""


class InvalidBet(RoundError, ValueError):
    """Raised when a bet is not a positive multiple of the bet unit."""


class InsufficientBalance(RoundError):
    """Raised when the balance cannot cover a bet, split or double down."""


class IllegalAction(RoundError):
    """Raised when an action is invoked outside its phase or hand shape."""


class SupplyUnavailable(RoundError):
    """Raised when the card supply fails to initialize, draw or reshuffle."""
