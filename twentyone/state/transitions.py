"""
State transition functions for the round engine.

This module provides pure functions for transitioning between round states,
without modifying the original state objects. Preconditions are checked by
the engine before a transition is applied; the functions here only build
the next state.
"""

from dataclasses import replace
from typing import Sequence

from twentyone.blackjack.constants import DEALER_STAND_TOTAL
from twentyone.blackjack.hand import (
    determine_winner,
    is_bust,
    is_natural_blackjack,
)
from twentyone.common.card import Card
from twentyone.state.models import Outcome, Phase, PlayerHand, RoundState


class StateTransitionEngine:
    """
    Pure functions for state transitions.

    This class contains static methods that implement round state transitions.
    Each method takes a state and returns a new state, without modifying the
    original.
    """

    @staticmethod
    def begin_round(state: RoundState, bet: int, cards: Sequence[Card]) -> RoundState:
        """
        Debit the stake and deal the four opening cards.

        Args:
            state: Current round state
            bet: Stake for the single opening hand
            cards: Four cards; the first two go to the player, the rest to the dealer

        Returns:
            New state in the InitialDeal phase
        """
        return replace(
            state,
            balance=state.balance - bet,
            hands=(PlayerHand(cards=tuple(cards[:2]), bet=bet),),
            active_hand_index=0,
            dealer_cards=tuple(cards[2:4]),
            phase=Phase.INITIAL_DEAL,
            round_outcome=None,
            round_number=state.round_number + 1,
        )

    @staticmethod
    def check_naturals(state: RoundState) -> RoundState:
        """
        Settle the round immediately if either side was dealt a natural.

        Returns:
            New state in the Outcome phase with the settled hand, or in the
            PlayerTurn phase when nobody has a natural
        """
        hand = state.hands[0]
        player_natural = is_natural_blackjack(hand.cards)
        dealer_natural = is_natural_blackjack(state.dealer_cards)

        if player_natural and dealer_natural:
            outcome = Outcome.PUSH
        elif player_natural:
            outcome = Outcome.PLAYER_BLACKJACK
        elif dealer_natural:
            outcome = Outcome.DEALER_BLACKJACK
        else:
            return replace(state, phase=Phase.PLAYER_TURN, round_outcome=None)

        settled = replace(state, hands=(replace(hand, outcome=outcome),))
        settled = StateTransitionEngine.credit(settled, outcome.payout(hand.bet))
        return replace(settled, phase=Phase.OUTCOME, round_outcome=outcome)

    @staticmethod
    def update_active_hand(state: RoundState, hand: PlayerHand) -> RoundState:
        hands = list(state.hands)
        hands[state.active_hand_index] = hand
        return replace(state, hands=tuple(hands))

    @staticmethod
    def hit(state: RoundState, card: Card) -> RoundState:
        """
        Add a card to the active hand, marking it busted if it went over 21.
        """
        hand = state.active_hand
        cards = hand.cards + (card,)
        outcome = Outcome.PLAYER_BUST if is_bust(cards) else None
        return StateTransitionEngine.update_active_hand(
            state, replace(hand, cards=cards, acted=True, outcome=outcome)
        )

    @staticmethod
    def double_down(state: RoundState, card: Card) -> RoundState:
        """
        Debit a second stake, double the active bet and deal exactly one card.
        """
        hand = state.active_hand
        state = replace(state, balance=state.balance - hand.bet)
        hand = replace(hand, bet=hand.bet * 2, doubled=True)
        state = StateTransitionEngine.update_active_hand(state, hand)
        return StateTransitionEngine.hit(state, card)

    @staticmethod
    def surrender(state: RoundState) -> RoundState:
        """
        Forfeit the active hand, refunding half its stake.
        """
        hand = state.active_hand
        state = StateTransitionEngine.update_active_hand(
            state, replace(hand, outcome=Outcome.PLAYER_SURRENDER, acted=True)
        )
        return StateTransitionEngine.credit(state, Outcome.PLAYER_SURRENDER.payout(hand.bet))

    @staticmethod
    def split(state: RoundState, first_card: Card, second_card: Card) -> RoundState:
        """
        Split the active pair into two hands and deal one card to each.

        The first half stays at the active index and is played first; the
        second half is appended after the existing hands with its own stake.

        Args:
            state: Current round state
            first_card: Card dealt to the hand kept at the active index
            second_card: Card dealt to the appended hand
        """
        hand = state.active_hand
        first = PlayerHand(
            cards=(hand.cards[0], first_card), bet=hand.bet, split_origin=True
        )
        second = PlayerHand(
            cards=(hand.cards[1], second_card), bet=hand.bet, split_origin=True
        )
        state = replace(state, balance=state.balance - hand.bet)
        state = StateTransitionEngine.update_active_hand(state, first)
        return replace(state, hands=state.hands + (second,))

    @staticmethod
    def advance_hand(state: RoundState) -> RoundState:
        """
        Move play to the next hand, or to the dealer when the last hand is done.
        """
        if state.is_last_hand:
            return replace(state, phase=Phase.DEALER_TURN)
        return replace(state, active_hand_index=state.active_hand_index + 1)

    @staticmethod
    def dealer_must_play(state: RoundState) -> bool:
        """
        The dealer plays out unless every hand is settled and one was surrendered.

        Busted hands alone still send the dealer to play out.
        """
        settled = all(hand.outcome is not None for hand in state.hands)
        surrendered = any(
            hand.outcome is Outcome.PLAYER_SURRENDER for hand in state.hands
        )
        return not (settled and surrendered)

    @staticmethod
    def dealer_draw(state: RoundState, card: Card) -> RoundState:
        return replace(state, dealer_cards=state.dealer_cards + (card,))

    @staticmethod
    def dealer_must_draw(state: RoundState, stand_on: int = DEALER_STAND_TOTAL) -> bool:
        """The dealer draws below `stand_on` and stands on all totals at or above it."""
        return state.dealer_value < stand_on

    @staticmethod
    def resolve_hands(state: RoundState) -> RoundState:
        """
        Settle every unresolved hand against the final dealer hand.

        Busted and surrendered hands keep the outcome they already have.
        """
        dealer_bust = is_bust(state.dealer_cards)
        credit = 0
        hands = []
        for hand in state.hands:
            if hand.outcome is None:
                winner = determine_winner(hand.cards, state.dealer_cards)
                hand = replace(hand, outcome=Outcome.from_win_state(winner, dealer_bust))
                credit += hand.outcome.payout(hand.bet)
            hands.append(hand)

        state = replace(state, hands=tuple(hands), phase=Phase.OUTCOME)
        return StateTransitionEngine.credit(state, credit)

    @staticmethod
    def credit(state: RoundState, amount: int) -> RoundState:
        if not amount:
            return state
        return replace(state, balance=state.balance + amount)

    @staticmethod
    def check_game_over(state: RoundState) -> RoundState:
        return replace(state, game_over=state.balance <= 0)

    @staticmethod
    def prepare_new_round(state: RoundState) -> RoundState:
        """
        Discard the round's hands and return to the betting phase.
        """
        return replace(
            state,
            hands=(PlayerHand(),),
            active_hand_index=0,
            dealer_cards=(),
            phase=Phase.BETTING,
            round_outcome=None,
        )

    @staticmethod
    def restart(starting_balance: int) -> RoundState:
        """
        Fresh table with the starting stake and no round history.
        """
        return RoundState(balance=starting_balance)
