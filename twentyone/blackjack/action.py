"""Defines the Action enum for the possible actions a player can take in a round of blackjack."""
from enum import Enum
from typing import Union

from twentyone.common.errors import IllegalAction


class Action(Enum):
    """Enum for the possible actions a player can take in a round of blackjack."""

    HIT = "hit"
    STAND = "stand"
    DOUBLE = "double"
    SPLIT = "split"
    SURRENDER = "surrender"

    @classmethod
    def parse(cls, action: Union["Action", str]) -> "Action":
        """
        Resolve an Action from a member, its name or its value.

        Accepts "double down" and "double_down" as aliases for DOUBLE.
        """
        if isinstance(action, cls):
            return action
        if isinstance(action, str):
            key = action.strip().upper().replace(" ", "_")
            if key == "DOUBLE_DOWN":
                key = "DOUBLE"
            if key in cls.__members__:
                return cls[key]
        raise IllegalAction(f"Unknown action: {action!r}")

    @property
    def shortcut(self) -> str:
        """Single key used to pick the action at a prompt."""
        return _SHORTCUTS[self]

    def __str__(self) -> str:
        return self.value


_SHORTCUTS = {
    Action.HIT: "h",
    Action.STAND: "s",
    Action.DOUBLE: "d",
    Action.SPLIT: "p",
    Action.SURRENDER: "r",
}
