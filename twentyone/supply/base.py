"""
Base interface for card supplies.

A card supply owns one or more shuffled shoes, identified by a handle. The
round engine only ever talks to this interface, so a shoe can live in the
same process or behind a remote deck service.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple

from twentyone.common.card import Card


@dataclass(frozen=True)
class ShoeHandle:
    """
    Reference to a shoe held by a card supply.

    Attributes:
        deck_id: Identifier of the shoe within its supply
        remaining: Cards left to draw, as last reported by the supply
    """

    deck_id: str
    remaining: int


@dataclass(frozen=True)
class DrawResult:
    """
    Cards returned by a draw, with the shoe's remaining count afterwards.
    """

    deck_id: str
    cards: Tuple[Card, ...]
    remaining: int

    @property
    def handle(self) -> ShoeHandle:
        return ShoeHandle(self.deck_id, self.remaining)


class CardSupply(ABC):
    """
    Base interface for card supplies.

    Every method raises `SupplyUnavailable` when the supply cannot serve the
    request.
    """

    @abstractmethod
    async def initialize(self, deck_count: int) -> ShoeHandle:
        """
        Create and shuffle a shoe of `deck_count` standard decks.

        Args:
            deck_count: Number of 52-card decks in the shoe

        Returns:
            Handle for the new shoe
        """

    @abstractmethod
    async def draw(self, handle: ShoeHandle, count: int) -> DrawResult:
        """
        Draw `count` cards from the top of the shoe.

        Args:
            handle: Shoe to draw from
            count: Number of cards to draw
        """

    @abstractmethod
    async def reshuffle(
        self, handle: ShoeHandle, remaining_only: bool = True
    ) -> ShoeHandle:
        """
        Shuffle the shoe.

        Args:
            handle: Shoe to shuffle
            remaining_only: Shuffle only the undealt cards; when False every
                dealt card is returned to the shoe first

        Returns:
            Updated handle
        """
