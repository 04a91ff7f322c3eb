import pytest

from twentyone.blackjack.hand import (
    WinState,
    determine_winner,
    hand_value,
    has_soft_17,
    is_bust,
    is_natural_blackjack,
    is_soft,
    split_value,
)
from twentyone.common.card import Card, Rank, Suit


def cards(*codes):
    return [Card.from_code(code) for code in codes]


@pytest.mark.parametrize(
    "codes, value",
    [
        (("AS", "KH"), 21),
        (("AS", "5H"), 16),
        (("AS", "AH"), 12),
        (("AS", "AH", "9C"), 21),
        (("AS", "AH", "9C", "3D"), 14),
        (("0H", "6S", "9C"), 25),
        (("AS", "AH", "AD", "AC"), 14),
        (("KS", "QH"), 20),
    ],
)
def test_hand_value(codes, value):
    assert hand_value(cards(*codes)) == value


def test_empty_hand_value():
    assert hand_value([]) == 0


def test_hand_value_does_not_depend_on_order():
    assert hand_value(cards("AS", "9C", "AH")) == hand_value(cards("9C", "AH", "AS"))


def test_is_soft_true():
    assert is_soft(cards("AH", "2C"))


def test_hand_with_ace_and_ten_is_soft():
    assert is_soft(cards("AH", "0C"))


def test_hand_without_ace_is_not_soft():
    assert not is_soft(cards("0H", "2C"))


def test_ace_counted_low_is_not_soft():
    assert not is_soft(cards("AH", "9C", "5D"))


def test_hand_bust():
    assert is_bust(cards("0H", "0C", "2D"))
    assert not is_bust(cards("0H", "0C", "AD"))


def test_natural_blackjack_needs_two_cards():
    assert is_natural_blackjack(cards("AS", "JH"))
    assert not is_natural_blackjack(cards("7S", "7H", "7D"))
    assert not is_natural_blackjack(cards("AS", "5H", "5D"))


def test_soft_17():
    assert has_soft_17(cards("AS", "6H"))
    assert has_soft_17(cards("AS", "3H", "3D"))
    assert not has_soft_17(cards("0S", "7H"))
    assert not has_soft_17(cards("AS", "6H", "0D"))


def test_split_value_treats_faces_alike():
    assert split_value(Card(Rank.KING, Suit.HEARTS)) == split_value(Card(Rank.TEN, Suit.CLUBS))
    assert split_value(Card(Rank.ACE, Suit.HEARTS)) == 11


@pytest.mark.parametrize(
    "player, dealer, winner",
    [
        (("0H", "8S"), ("0D", "7C"), WinState.PLAYER),
        (("0H", "6S"), ("0D", "8C"), WinState.DEALER),
        (("0H", "7S"), ("0D", "7C"), WinState.PUSH),
        (("0H", "6S", "9C"), ("0D", "6C", "9D"), WinState.DEALER),
        (("0H", "2S"), ("0D", "6C", "9D"), WinState.PLAYER),
    ],
)
def test_determine_winner(player, dealer, winner):
    assert determine_winner(cards(*player), cards(*dealer)) is winner


def test_docstring_examples():
    import doctest

    from twentyone.blackjack import hand

    failed, attempted = doctest.testmod(hand)
    assert attempted > 0
    assert failed == 0
