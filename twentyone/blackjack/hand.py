"""
Pure hand evaluation for blackjack.

A hand is any ordered sequence of `Card`. Nothing here caches a total: every
value is recomputed from the cards on demand.
"""

from enum import Enum
from typing import Sequence, Tuple

from twentyone.blackjack.constants import BLACKJACK
from twentyone.common.card import Card, Rank


class WinState(Enum):
    """Result of comparing a player hand with the dealer hand."""

    PLAYER = "player"
    DEALER = "dealer"
    PUSH = "push"


def _score(cards: Sequence[Card]) -> Tuple[int, int]:
    """
    Score a hand, returning the total and the number of aces still counted as 11.
    """
    total = 0
    soft_aces = 0
    for card in cards:
        if card.rank is Rank.ACE:
            soft_aces += 1
        total += card.rank.blackjack_value

    while total > BLACKJACK and soft_aces > 0:
        total -= 10
        soft_aces -= 1

    return total, soft_aces


def hand_value(cards: Sequence[Card]) -> int:
    """
    Calculate the optimal value of a hand.

    Aces start at 11 and are re-scored as 1, one at a time, while the total is
    over 21. The result is the best total not exceeding 21, or the minimum
    possible total when even that busts.

    >>> from twentyone.common.card import Card, Rank, Suit
    >>> hand_value([Card(Rank.ACE, Suit.SPADES), Card(Rank.KING, Suit.HEARTS)])
    21
    >>> hand_value([Card(Rank.ACE, Suit.SPADES), Card(Rank.ACE, Suit.HEARTS), Card(Rank.NINE, Suit.CLUBS)])
    21
    """
    return _score(cards)[0]


def is_bust(cards: Sequence[Card]) -> bool:
    """Check if the hand is over 21."""
    return hand_value(cards) > BLACKJACK


def is_natural_blackjack(cards: Sequence[Card]) -> bool:
    """Check if the hand is exactly two cards totaling 21."""
    return len(cards) == 2 and hand_value(cards) == BLACKJACK


def is_soft(cards: Sequence[Card]) -> bool:
    """Determine if the hand is soft (an ace is counted as 11)."""
    return _score(cards)[1] > 0


def has_soft_17(cards: Sequence[Card]) -> bool:
    """
    Check for a soft 17.

    Informational only: the dealer stands on every 17.
    """
    total, soft_aces = _score(cards)
    return total == 17 and soft_aces > 0


def split_value(card: Card) -> int:
    """Value used to decide whether two cards form a pair (face cards all 10, ace 11)."""
    return card.rank.blackjack_value


def determine_winner(player: Sequence[Card], dealer: Sequence[Card]) -> WinState:
    """
    Compare a player hand against the dealer's.

    A busted player loses even when the dealer also busts.
    """
    player_value = hand_value(player)
    dealer_value = hand_value(dealer)

    if player_value > BLACKJACK:
        return WinState.DEALER
    if dealer_value > BLACKJACK:
        return WinState.PLAYER
    if player_value > dealer_value:
        return WinState.PLAYER
    if dealer_value > player_value:
        return WinState.DEALER
    return WinState.PUSH
