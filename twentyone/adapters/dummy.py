"""
Dummy adapter for the round engine, used for testing and simulation.

This module provides a non-interactive adapter that replays scripted bets
and actions and records everything it is shown.
"""

from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from twentyone.adapters.base import PlatformAdapter
from twentyone.blackjack.action import Action


class DummyAdapter(PlatformAdapter):
    """
    Dummy adapter for testing and simulation.

    This adapter doesn't interact with any real platform. Bets and actions
    are taken from scripted lists; once the action script runs out the
    strategy function is asked, and failing that the adapter stands.
    """

    def __init__(
        self,
        bets: Optional[List[Optional[int]]] = None,
        actions: Optional[List[Action]] = None,
        strategy_function: Optional[Callable[[List[Action]], Action]] = None,
        restart: bool = False,
    ):
        """
        Initialize the dummy adapter.

        Args:
            bets: Stakes to place in order; None (or running out) leaves the table
            actions: Actions to take in order
            strategy_function: Optional function that takes the valid actions
                              and returns an action to take
            restart: Answer to give when asked to restart after game over
        """
        self.bets = list(bets or [])
        self.actions = list(actions or [])
        self.strategy_function = strategy_function
        self.restart = restart

        # Track events and rendered states for later inspection
        self.events = []
        self.rendered_states = []
        self.offered_actions: List[List[Action]] = []

    async def render_game_state(self, state: Dict[str, Any]) -> None:
        self.rendered_states.append(state)

    async def request_bet(self, balance: int, bet_unit: int) -> Optional[int]:
        if self.bets:
            return self.bets.pop(0)
        return None

    async def request_player_action(self, valid_actions: List[Action]) -> Action:
        """
        Return the next scripted action, or one chosen by the strategy function.

        Scripted actions are returned even when they are not currently valid,
        so tests can exercise the engine's rejection path.
        """
        self.offered_actions.append(list(valid_actions))
        if self.actions:
            return self.actions.pop(0)
        if self.strategy_function:
            return self.strategy_function(valid_actions)
        return Action.STAND

    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type
        self.events.append((event_type_str, data))

    async def confirm_restart(self) -> bool:
        return self.restart

    def get_events_by_type(self, event_type: Union[str, Enum]) -> List[Dict[str, Any]]:
        """
        Get all events of a specific type.

        Args:
            event_type: The type of events to retrieve

        Returns:
            A list of event data dictionaries
        """
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type
        return [data for typ, data in self.events if typ == event_type_str]

    def clear(self) -> None:
        """Clear all stored events and states."""
        self.events.clear()
        self.rendered_states.clear()
        self.offered_actions.clear()
