"""
Immutable state models for the round engine.

This module provides dataclasses for representing the state of a blackjack
round in an immutable manner. These classes are designed to be used with pure
transition functions that create new state instances rather than modifying
existing ones, so the engine can commit a whole action at once or not at all.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from twentyone.blackjack.constants import BLACKJACK_PAYOUT, WIN_PAYOUT
from twentyone.blackjack.hand import hand_value, is_bust, is_soft, WinState
from twentyone.common.card import Card


class Phase(Enum):
    """
    Possible phases of a round. Exactly one is active at a time.
    """

    BETTING = "betting"
    INITIAL_DEAL = "initial deal"
    PLAYER_TURN = "player turn"
    DEALER_TURN = "dealer turn"
    OUTCOME = "outcome"


class Outcome(Enum):
    """
    Closed set of results a player hand can finish with.
    """

    PLAYER_BUST = "player bust"
    DEALER_BUST = "dealer bust"
    PLAYER_WINS = "player wins"
    DEALER_WINS = "dealer wins"
    PUSH = "push"
    PLAYER_BLACKJACK = "player blackjack"
    DEALER_BLACKJACK = "dealer blackjack"
    PLAYER_SURRENDER = "player surrender"

    def payout(self, bet: int) -> int:
        """
        Amount credited back to the balance for a hand staked with `bet`.

        The stake was debited when it was placed, so a loss credits nothing
        and a push credits the stake back.
        """
        match self:
            case Outcome.PLAYER_BUST | Outcome.DEALER_WINS | Outcome.DEALER_BLACKJACK:
                return 0
            case Outcome.DEALER_BUST | Outcome.PLAYER_WINS:
                return bet * WIN_PAYOUT
            case Outcome.PUSH:
                return bet
            case Outcome.PLAYER_BLACKJACK:
                return math.floor(bet * BLACKJACK_PAYOUT)
            case Outcome.PLAYER_SURRENDER:
                return bet // 2

    @classmethod
    def from_win_state(cls, win_state: WinState, dealer_bust: bool) -> "Outcome":
        match win_state:
            case WinState.PLAYER:
                return cls.DEALER_BUST if dealer_bust else cls.PLAYER_WINS
            case WinState.DEALER:
                return cls.DEALER_WINS
            case WinState.PUSH:
                return cls.PUSH

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PlayerHand:
    """
    Immutable representation of one player hand and its wager.

    Attributes:
        cards: Cards in the hand, in the order they were dealt
        bet: Stake riding on this hand (doubled after a double down)
        outcome: Result once the hand is resolved, None while in play
        split_origin: Whether this hand was created by a split
        doubled: Whether the bet has been doubled
        acted: Whether the player has already taken an action on this hand
    """

    cards: Tuple[Card, ...] = ()
    bet: int = 0
    outcome: Optional[Outcome] = None
    split_origin: bool = False
    doubled: bool = False
    acted: bool = False

    @property
    def value(self) -> int:
        return hand_value(self.cards)

    @property
    def is_bust(self) -> bool:
        return is_bust(self.cards)

    @property
    def is_soft(self) -> bool:
        return is_soft(self.cards)

    @property
    def is_resolved(self) -> bool:
        return self.outcome is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cards": [str(card) for card in self.cards],
            "value": self.value,
            "bet": self.bet,
            "outcome": self.outcome.value if self.outcome else None,
            "split": self.split_origin,
            "doubled": self.doubled,
        }


@dataclass(frozen=True)
class RoundState:
    """
    Immutable representation of the whole table.

    Attributes:
        balance: Player balance, debited when stakes are placed
        hands: Player hands in play order (one, or two after a split)
        active_hand_index: Index of the hand receiving player actions
        dealer_cards: Dealer cards; the first one is the up card
        phase: Current phase of the round
        game_over: Set when a resolved round leaves the balance at zero
        round_outcome: Outcome decided on the initial deal, if any
        round_number: Number of rounds started since the last restart
    """

    balance: int = 0
    hands: Tuple[PlayerHand, ...] = field(default_factory=lambda: (PlayerHand(),))
    active_hand_index: int = 0
    dealer_cards: Tuple[Card, ...] = ()
    phase: Phase = Phase.BETTING
    game_over: bool = False
    round_outcome: Optional[Outcome] = None
    round_number: int = 0

    @property
    def active_hand(self) -> PlayerHand:
        return self.hands[self.active_hand_index]

    @property
    def bets(self) -> Tuple[int, ...]:
        return tuple(hand.bet for hand in self.hands)

    @property
    def outcomes(self) -> Tuple[Optional[Outcome], ...]:
        return tuple(hand.outcome for hand in self.hands)

    @property
    def dealer_value(self) -> int:
        return hand_value(self.dealer_cards)

    @property
    def is_last_hand(self) -> bool:
        return self.active_hand_index >= len(self.hands) - 1

    @property
    def hole_card_hidden(self) -> bool:
        return self.phase in (Phase.INITIAL_DEAL, Phase.PLAYER_TURN)

    def to_adapter_format(self) -> Dict[str, Any]:
        """
        Convert the state to a plain dict suitable for rendering.

        The dealer's hole card is masked until the dealer's turn.
        """
        dealer_cards: List[str] = [str(card) for card in self.dealer_cards]
        if self.hole_card_hidden and len(dealer_cards) > 1:
            dealer_cards = dealer_cards[:1] + ["??"] * (len(dealer_cards) - 1)
            dealer_value = hand_value(self.dealer_cards[:1])
        else:
            dealer_value = self.dealer_value

        return {
            "phase": self.phase.value,
            "balance": self.balance,
            "round": self.round_number,
            "game_over": self.game_over,
            "active_hand_index": self.active_hand_index,
            "round_outcome": self.round_outcome.value if self.round_outcome else None,
            "dealer": {
                "hand": dealer_cards,
                "value": dealer_value,
                "hide_second_card": self.hole_card_hidden,
            },
            "hands": [hand.to_dict() for hand in self.hands],
        }
