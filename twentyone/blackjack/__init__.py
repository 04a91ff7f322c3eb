"""
Blackjack rules: actions, constants and hand evaluation.
"""

from twentyone.blackjack.action import Action
from twentyone.blackjack.hand import (
    hand_value,
    is_bust,
    is_natural_blackjack,
    is_soft,
    has_soft_17,
    split_value,
    determine_winner,
    WinState,
)

__all__ = [
    "Action",
    "hand_value",
    "is_bust",
    "is_natural_blackjack",
    "is_soft",
    "has_soft_17",
    "split_value",
    "determine_winner",
    "WinState",
]
