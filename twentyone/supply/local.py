"""
In-process card supply.

Keeps each shoe as a list of cards plus the cards already dealt from it, and
shuffles with `random`. Useful offline and for simulations; pass a seeded
`random.Random` for reproducible shoes.
"""

import logging
import random
import uuid
from typing import Dict, List, Optional

from twentyone.common.card import Card, Rank, Suit
from twentyone.common.errors import SupplyUnavailable
from twentyone.supply.base import CardSupply, DrawResult, ShoeHandle

logger = logging.getLogger(__name__)


def standard_deck() -> List[Card]:
    """
    Construct one 52-card deck in suit then rank order.

    >>> len(standard_deck())
    52
    """
    return [Card(rank, suit) for suit in Suit for rank in Rank]


class _Shoe:
    __slots__ = ("cards", "dealt")

    def __init__(self, cards: List[Card]):
        self.cards = cards
        self.dealt: List[Card] = []


class LocalCardSupply(CardSupply):
    """
    Card supply backed by shoes held in memory.

    >>> import asyncio
    >>> supply = LocalCardSupply(rng=random.Random(7))
    >>> handle = asyncio.run(supply.initialize(6))
    >>> handle.remaining
    312
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self._shoes: Dict[str, _Shoe] = {}

    def _shoe(self, handle: ShoeHandle) -> _Shoe:
        try:
            return self._shoes[handle.deck_id]
        except KeyError as exc:
            raise SupplyUnavailable(f"Unknown shoe: {handle.deck_id}") from exc

    async def initialize(self, deck_count: int) -> ShoeHandle:
        if deck_count < 1:
            raise SupplyUnavailable("Number of decks must be at least 1")

        cards: List[Card] = []
        for _ in range(deck_count):
            cards.extend(standard_deck())
        self.rng.shuffle(cards)

        deck_id = uuid.uuid4().hex[:12]
        self._shoes[deck_id] = _Shoe(cards)
        logger.debug("Created shoe %s with %d decks", deck_id, deck_count)
        return ShoeHandle(deck_id, len(cards))

    async def draw(self, handle: ShoeHandle, count: int) -> DrawResult:
        shoe = self._shoe(handle)
        if count < 0 or count > len(shoe.cards):
            raise SupplyUnavailable(
                f"Cannot draw {count} cards, {len(shoe.cards)} remaining"
            )

        drawn = shoe.cards[:count]
        del shoe.cards[:count]
        shoe.dealt.extend(drawn)
        return DrawResult(handle.deck_id, tuple(drawn), len(shoe.cards))

    async def reshuffle(
        self, handle: ShoeHandle, remaining_only: bool = True
    ) -> ShoeHandle:
        shoe = self._shoe(handle)
        if not remaining_only:
            shoe.cards.extend(shoe.dealt)
            shoe.dealt = []
        self.rng.shuffle(shoe.cards)
        logger.debug(
            "Reshuffled shoe %s (remaining_only=%s), %d cards",
            handle.deck_id,
            remaining_only,
            len(shoe.cards),
        )
        return ShoeHandle(handle.deck_id, len(shoe.cards))
