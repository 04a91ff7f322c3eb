"""
This module defines the `Suit`, `Rank`, and `Card` types used to represent playing cards.

- `Suit`: An enum representing the four suits of a standard deck of playing
cards: Hearts, Diamonds, Clubs, and Spades.

- `Rank`: An enum representing the thirteen ranks of a standard deck of playing
cards: Two through Ten, Jack, Queen, King, and Ace.

- `Card`: An immutable playing card. A card has a rank and a suit, and can be
parsed from the short codes used by deck services ("KH", "0S", "AD").

This module is part of the `twentyone` package, a blackjack round engine.
"""

from dataclasses import dataclass
from enum import Enum, unique


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck.
    """

    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"
    SPADES = "♠"

    @property
    def code(self) -> str:
        """Single letter used by deck services."""
        return self.name[0]

    @classmethod
    def from_code(cls, code: str) -> "Suit":
        for suit in cls:
            if suit.code == code.upper():
                return suit
        raise ValueError(f"Invalid suit code: {code!r}")

    def __str__(self) -> str:
        return self.value


@unique
class Rank(Enum):
    """
    Enum for ranks in a card deck.

    Values are the labels shown on the card; `blackjack_value` gives the
    scoring value with aces counted high.
    """

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @property
    def blackjack_value(self) -> int:
        """The value of the rank, used for scoring."""
        if self is Rank.ACE:
            return 11
        if self in (Rank.JACK, Rank.QUEEN, Rank.KING):
            return 10
        return int(self.value)

    @property
    def code(self) -> str:
        """Single character used by deck services ("0" is ten)."""
        return "0" if self is Rank.TEN else self.value

    @classmethod
    def from_code(cls, code: str) -> "Rank":
        code = code.upper()
        if code in ("0", "10"):
            return cls.TEN
        for rank in cls:
            if rank.value == code:
                return rank
        raise ValueError(f"Invalid rank code: {code!r}")

    @classmethod
    def from_name(cls, name: str) -> "Rank":
        """
        Parse a rank from the long form used by deck services ("KING", "7").
        """
        name = name.strip().upper()
        if name in cls.__members__:
            return cls[name]
        return cls.from_code(name)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Card:
    """
    An immutable playing card.

    >>> card = Card(Rank.EIGHT, Suit.HEARTS)
    >>> print(card)
    8♥
    >>> Card.from_code("0S")
    Card(Rank.TEN, Suit.SPADES)
    """

    rank: Rank
    suit: Suit

    def __post_init__(self):
        if not isinstance(self.rank, Rank):
            raise TypeError(f"Invalid rank: {self.rank}")
        if not isinstance(self.suit, Suit):
            raise TypeError(f"Invalid suit: {self.suit}")

    @classmethod
    def from_code(cls, code: str) -> "Card":
        """
        Build a card from a deck-service code such as "AS", "0H" or "10H".

        :param code: Rank code followed by a one letter suit code.
        :return: The matching card.
        :raises ValueError: If either part of the code is unknown.
        """
        if not code or len(code) < 2:
            raise ValueError(f"Invalid card code: {code!r}")
        return cls(Rank.from_code(code[:-1]), Suit.from_code(code[-1]))

    @property
    def code(self) -> str:
        return f"{self.rank.code}{self.suit.code}"

    @property
    def value(self) -> int:
        """Blackjack value of the card with aces counted as 11."""
        return self.rank.blackjack_value

    def __repr__(self) -> str:
        return f"Card(Rank.{self.rank.name}, Suit.{self.suit.name})"

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"
