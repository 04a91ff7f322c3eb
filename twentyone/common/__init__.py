"""
Common building blocks for the twentyone package: cards, errors and IO.
"""

from twentyone.common.card import Card, Rank, Suit
from twentyone.common.errors import (
    RoundError,
    InvalidBet,
    InsufficientBalance,
    IllegalAction,
    SupplyUnavailable,
)

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "RoundError",
    "InvalidBet",
    "InsufficientBalance",
    "IllegalAction",
    "SupplyUnavailable",
]
