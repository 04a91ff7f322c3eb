"""
Tests for the command-line adapter, driven through a TestIOInterface.
"""

import pytest

from twentyone.adapters.cli import CLIAdapter
from twentyone.blackjack.action import Action
from twentyone.common.card import Card
from twentyone.common.io_interface import TestIOInterface
from twentyone.events import EngineEventType
from twentyone.state import Outcome, Phase, PlayerHand, RoundState


def cards(*codes):
    return tuple(Card.from_code(code) for code in codes)


@pytest.fixture
def io():
    return TestIOInterface()


@pytest.fixture
def adapter(io):
    cli = CLIAdapter(io)
    yield cli
    cli.io.shutdown()


@pytest.mark.asyncio
async def test_render_player_turn_hides_hole_card(adapter, io):
    state = RoundState(
        balance=900,
        hands=(PlayerHand(cards=cards("0H", "7S"), bet=100),),
        dealer_cards=cards("5D", "8C"),
        phase=Phase.PLAYER_TURN,
        round_number=3,
    )

    await adapter.render_game_state(state.to_adapter_format())

    assert "=== Round 3 - player turn ===" in io.sent_messages
    assert "Dealer: 5♦ ??" in io.sent_messages
    assert " Player: 10♥ 7♠ (17) - Bet: 100" in io.sent_messages
    assert "Balance: 900" in io.sent_messages
    assert "GAME OVER" not in io.sent_messages


@pytest.mark.asyncio
async def test_render_split_hands_marks_active_hand(adapter, io):
    state = RoundState(
        balance=800,
        hands=(
            PlayerHand(cards=cards("8H", "3D"), bet=100, split_origin=True, outcome=Outcome.PLAYER_BUST),
            PlayerHand(cards=cards("8S", "4H"), bet=100, split_origin=True),
        ),
        active_hand_index=1,
        dealer_cards=cards("0D", "7C"),
        phase=Phase.PLAYER_TURN,
    )

    await adapter.render_game_state(state.to_adapter_format())

    assert " Hand 1: 8♥ 3♦ (11) - Bet: 100 - player bust" in io.sent_messages
    assert "*Hand 2: 8♠ 4♥ (12) - Bet: 100" in io.sent_messages


@pytest.mark.asyncio
async def test_render_game_over(adapter, io):
    state = RoundState(
        balance=0,
        hands=(PlayerHand(cards=cards("0H", "6S"), bet=100, outcome=Outcome.DEALER_WINS),),
        dealer_cards=cards("0D", "8C"),
        phase=Phase.OUTCOME,
        game_over=True,
    )
    await adapter.render_game_state(state.to_adapter_format())
    assert "Dealer: 10♦ 8♣ (18)" in io.sent_messages
    assert "GAME OVER" in io.sent_messages


@pytest.mark.asyncio
async def test_request_bet():
    io = TestIOInterface(["abc", "50"])
    adapter = CLIAdapter(io)

    assert await adapter.request_bet(1000, 10) == 50
    assert "Invalid response, please enter a number." in io.sent_messages
    assert "multiple of 10" in io.prompts[0]
    await adapter.shutdown()


@pytest.mark.asyncio
@pytest.mark.parametrize("answer", ["", "q", "quit"])
async def test_request_bet_leave_table(answer):
    adapter = CLIAdapter(TestIOInterface([answer]))
    assert await adapter.request_bet(1000, 10) is None
    await adapter.shutdown()


@pytest.mark.asyncio
async def test_request_player_action():
    io = TestIOInterface(["fold", "d"])
    adapter = CLIAdapter(io)

    action = await adapter.request_player_action([Action.HIT, Action.STAND, Action.DOUBLE])

    assert action is Action.DOUBLE
    assert any(message.startswith("Invalid action") for message in io.sent_messages)
    await adapter.shutdown()


@pytest.mark.asyncio
async def test_notify_formats_known_events(adapter, io):
    await adapter.notify_game_event(
        EngineEventType.HAND_RESULT, {"hand": 0, "outcome": "push", "payout": 100}
    )
    await adapter.notify_game_event("ERROR", {"error": "Split is only allowed on a pair"})
    await adapter.notify_game_event(EngineEventType.CARD_DEALT, {"card": "A♠"})

    assert io.sent_messages == [
        "Hand 1: push, pays 100",
        "Error: Split is only allowed on a pair",
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("answer, expected", [("y", True), ("YES", True), ("n", False), ("", False)])
async def test_confirm_restart(answer, expected):
    adapter = CLIAdapter(TestIOInterface([answer]))
    assert await adapter.confirm_restart() is expected
    await adapter.shutdown()
