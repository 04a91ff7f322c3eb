"""Blackjack-specific constants and default engine configuration."""

BLACKJACK = 21

# Dealer draws while below this total and stands on every 17, soft or hard.
DEALER_STAND_TOTAL = 17

# Natural blackjack returns the stake plus 3:2.
BLACKJACK_PAYOUT = 2.5

# Winning hands return the stake plus an equal amount.
WIN_PAYOUT = 2

CARDS_PER_DECK = 52

INITIAL_DEAL_SIZE = 4

DEFAULT_CONFIG = {
    "starting_balance": 1000,
    "deck_count": 6,
    "reshuffle_fraction": 0.4,
    "bet_unit": 10,
    "dealer_stands_on": DEALER_STAND_TOTAL,
}


def reshuffle_threshold(deck_count: int, fraction: float) -> float:
    """Number of remaining cards below which the shoe is refilled."""
    return CARDS_PER_DECK * deck_count * fraction
