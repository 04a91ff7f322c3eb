import pytest

from twentyone.blackjack.action import Action
from twentyone.common.errors import IllegalAction


@pytest.mark.parametrize(
    "raw, action",
    [
        (Action.HIT, Action.HIT),
        ("hit", Action.HIT),
        ("STAND", Action.STAND),
        (" Surrender ", Action.SURRENDER),
        ("double", Action.DOUBLE),
        ("double down", Action.DOUBLE),
        ("Double_Down", Action.DOUBLE),
        ("split", Action.SPLIT),
    ],
)
def test_parse(raw, action):
    assert Action.parse(raw) is action


@pytest.mark.parametrize("raw", ["fold", "", "insurance", 3, None])
def test_parse_rejects_unknown(raw):
    with pytest.raises(IllegalAction):
        Action.parse(raw)


def test_shortcuts_are_unique():
    shortcuts = [action.shortcut for action in Action]
    assert len(set(shortcuts)) == len(shortcuts)
    assert Action.SPLIT.shortcut == "p"


def test_str():
    assert str(Action.DOUBLE) == "double"
