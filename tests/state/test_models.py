"""
Tests for the immutable round state models.
"""

import dataclasses

import pytest

from twentyone.blackjack.hand import WinState
from twentyone.common.card import Card
from twentyone.state import Outcome, Phase, PlayerHand, RoundState


def cards(*codes):
    return tuple(Card.from_code(code) for code in codes)


@pytest.mark.parametrize(
    "outcome, bet, payout",
    [
        (Outcome.PLAYER_BUST, 100, 0),
        (Outcome.DEALER_WINS, 100, 0),
        (Outcome.DEALER_BLACKJACK, 100, 0),
        (Outcome.DEALER_BUST, 100, 200),
        (Outcome.PLAYER_WINS, 100, 200),
        (Outcome.PUSH, 100, 100),
        (Outcome.PLAYER_BLACKJACK, 100, 250),
        (Outcome.PLAYER_BLACKJACK, 10, 25),
        (Outcome.PLAYER_SURRENDER, 100, 50),
        (Outcome.PLAYER_SURRENDER, 10, 5),
    ],
)
def test_outcome_payout(outcome, bet, payout):
    assert outcome.payout(bet) == payout


def test_blackjack_payout_rounds_down():
    assert Outcome.PLAYER_BLACKJACK.payout(15) == 37


def test_outcome_from_win_state():
    assert Outcome.from_win_state(WinState.PLAYER, dealer_bust=True) is Outcome.DEALER_BUST
    assert Outcome.from_win_state(WinState.PLAYER, dealer_bust=False) is Outcome.PLAYER_WINS
    assert Outcome.from_win_state(WinState.DEALER, dealer_bust=False) is Outcome.DEALER_WINS
    assert Outcome.from_win_state(WinState.PUSH, dealer_bust=False) is Outcome.PUSH


def test_player_hand_is_immutable():
    hand = PlayerHand(cards=cards("0H", "7S"), bet=10)
    with pytest.raises(dataclasses.FrozenInstanceError):
        hand.bet = 20


def test_player_hand_properties():
    hand = PlayerHand(cards=cards("AH", "6S"), bet=10)
    assert hand.value == 17
    assert hand.is_soft
    assert not hand.is_bust
    assert not hand.is_resolved

    busted = dataclasses.replace(hand, cards=hand.cards + cards("6D", "0C"), outcome=Outcome.PLAYER_BUST)
    assert busted.value == 23
    assert busted.is_bust
    assert busted.is_resolved


def test_default_round_state():
    state = RoundState(balance=1000)
    assert state.phase is Phase.BETTING
    assert state.bets == (0,)
    assert state.outcomes == (None,)
    assert state.active_hand == PlayerHand()
    assert state.dealer_cards == ()
    assert not state.game_over
    assert state.round_number == 0


def test_round_state_collections():
    state = RoundState(
        balance=800,
        hands=(
            PlayerHand(cards=cards("8H", "3D"), bet=100, split_origin=True),
            PlayerHand(cards=cards("8S", "0H"), bet=100, split_origin=True, outcome=Outcome.PUSH),
        ),
        active_hand_index=1,
        dealer_cards=cards("0D", "7C"),
        phase=Phase.PLAYER_TURN,
    )
    assert state.bets == (100, 100)
    assert state.outcomes == (None, Outcome.PUSH)
    assert state.active_hand.value == 18
    assert state.is_last_hand
    assert state.dealer_value == 17


def test_adapter_format_masks_hole_card_during_player_turn():
    state = RoundState(
        balance=900,
        hands=(PlayerHand(cards=cards("0H", "7S"), bet=100),),
        dealer_cards=cards("5D", "8C"),
        phase=Phase.PLAYER_TURN,
        round_number=1,
    )
    data = state.to_adapter_format()
    assert data["dealer"]["hand"] == ["5♦", "??"]
    assert data["dealer"]["value"] == 5
    assert data["dealer"]["hide_second_card"] is True
    assert data["hands"][0]["cards"] == ["10♥", "7♠"]
    assert data["hands"][0]["value"] == 17
    assert data["phase"] == "player turn"
    assert data["balance"] == 900
    assert data["round"] == 1


def test_adapter_format_reveals_dealer_at_outcome():
    state = RoundState(
        balance=1000,
        hands=(PlayerHand(cards=cards("0H", "7S"), bet=100, outcome=Outcome.PUSH),),
        dealer_cards=cards("5D", "8C", "4H"),
        phase=Phase.OUTCOME,
    )
    data = state.to_adapter_format()
    assert data["dealer"]["hand"] == ["5♦", "8♣", "4♥"]
    assert data["dealer"]["value"] == 17
    assert data["hands"][0]["outcome"] == "push"
