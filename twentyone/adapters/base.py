"""
Base adapter interface for the round engine.

This module defines the interface that platform-specific adapters must
implement so the table loop can show the state and collect decisions.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from twentyone.blackjack.action import Action


class PlatformAdapter(ABC):
    """
    Base interface for platform-specific adapters.

    Adapters only mirror engine state and relay choices; they never change
    the state themselves.
    """

    @abstractmethod
    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Render the current table state to the platform.

        Args:
            state: Output of `RoundState.to_adapter_format()`
        """
        pass

    @abstractmethod
    async def request_bet(self, balance: int, bet_unit: int) -> Optional[int]:
        """
        Ask the player for a stake.

        Args:
            balance: Current balance
            bet_unit: Bets must be a multiple of this

        Returns:
            The stake, or None if the player wants to leave the table
        """
        pass

    @abstractmethod
    async def request_player_action(self, valid_actions: List[Action]) -> Action:
        """
        Ask the player for an action.

        Args:
            valid_actions: Actions the engine currently allows

        Returns:
            The chosen action
        """
        pass

    @abstractmethod
    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Notify the platform of a game event.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        pass

    @abstractmethod
    async def confirm_restart(self) -> bool:
        """
        Ask whether to start over after the balance ran out.

        Returns:
            True to restart with the starting balance
        """
        pass

    # The following methods have default implementations but can be overridden

    async def initialize(self) -> None:
        """
        Initialize the adapter before the first round.
        """
        pass

    async def shutdown(self) -> None:
        """
        Release the adapter's resources after the last round.
        """
        pass
