"""
Pytest configuration for tests at the root level.

This module contains the stacked card supply used to deal deterministic
rounds, plus fixtures shared by the engine, table and adapter tests.
"""

from typing import Iterable, List, Tuple

import pytest

from twentyone.common.card import Card
from twentyone.common.errors import SupplyUnavailable
from twentyone.engine.blackjack import BlackjackEngine
from twentyone.events import EventBus
from twentyone.supply.base import CardSupply, DrawResult, ShoeHandle


class StackedCardSupply(CardSupply):
    """
    Card supply that deals a fixed sequence of cards.

    Cards are given as deck-service codes ("0H" is the ten of hearts) and
    come out in order: the opening deal takes player, player, dealer up
    card, dealer hole card. Set `fail` to make every call raise.
    """

    def __init__(self, codes: Iterable[str] = (), remaining: int = 300):
        self.cards: List[Card] = [Card.from_code(code) for code in codes]
        self.remaining = remaining
        self.refill = remaining
        self.fail = False
        self.calls: List[Tuple[str, object]] = []

    def stack(self, *codes: str) -> None:
        self.cards.extend(Card.from_code(code) for code in codes)

    def _check(self) -> None:
        if self.fail:
            raise SupplyUnavailable("Stacked supply is down")

    async def initialize(self, deck_count: int) -> ShoeHandle:
        self.calls.append(("initialize", deck_count))
        self._check()
        return ShoeHandle("stacked", self.remaining)

    async def draw(self, handle: ShoeHandle, count: int) -> DrawResult:
        self.calls.append(("draw", count))
        self._check()
        if count > len(self.cards):
            raise SupplyUnavailable("Stacked supply ran out of cards")
        drawn, self.cards = self.cards[:count], self.cards[count:]
        self.remaining -= count
        return DrawResult(handle.deck_id, tuple(drawn), self.remaining)

    async def reshuffle(
        self, handle: ShoeHandle, remaining_only: bool = True
    ) -> ShoeHandle:
        self.calls.append(("reshuffle", remaining_only))
        self._check()
        self.remaining = self.refill
        return ShoeHandle(handle.deck_id, self.remaining)


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus._instance = None
    yield
    EventBus._instance = None


@pytest.fixture
def events():
    """Record every event published on the bus as (event name, data)."""
    recorded = []
    EventBus.get_instance().on_any(recorded.append)
    return recorded


@pytest.fixture
def make_engine():
    """
    Factory building an engine over a stacked supply.

    Usage: ``engine, supply = make_engine("0H", "7S", "5D", "8C", balance=100)``
    """

    def factory(*codes: str, balance: int = 1000, remaining: int = 300, **config):
        supply = StackedCardSupply(codes, remaining=remaining)
        engine = BlackjackEngine(supply, {"starting_balance": balance, **config})
        return engine, supply

    return factory