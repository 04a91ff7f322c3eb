"""
Base engine class for the twentyone package.

This module provides the abstract base class for table engines. It defines
the interface a presentation layer drives: starting a round, applying
player actions and resetting the table.
"""

import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union

from twentyone.blackjack.action import Action
from twentyone.blackjack.constants import DEFAULT_CONFIG
from twentyone.events import EventBus, EngineEventType
from twentyone.state.models import Outcome
from twentyone.supply.base import CardSupply


class TableEngine(ABC):
    """
    Abstract base class for table engines.

    Engines own their state exclusively: callers read it through accessors
    and change it only through the operations below, one at a time.
    """

    def __init__(self, supply: CardSupply, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the engine.

        Args:
            supply: Card supply to draw from
            config: Configuration options; missing keys fall back to DEFAULT_CONFIG
        """
        self.supply = supply
        self.config = config or {}
        self.event_bus = EventBus.get_instance()

    def setting(self, key: str) -> Any:
        """Read a configuration value, falling back to the package default."""
        return self.config.get(key, DEFAULT_CONFIG[key])

    def emit(self, event_type: EngineEventType, data: Dict[str, Any]) -> None:
        self.event_bus.emit(event_type, {**data, "timestamp": time.time()})

    @abstractmethod
    async def start_round(self, bet: int) -> Optional[Outcome]:
        """
        Place a bet and deal a new round.

        Args:
            bet: Stake for the round

        Returns:
            The outcome if the deal settled the round, otherwise None
        """

    @abstractmethod
    async def handle_action(self, action: Union[Action, str]) -> None:
        """
        Apply a player action to the active hand.

        Args:
            action: Action to perform
        """

    @abstractmethod
    def new_round(self) -> None:
        """
        Clear the finished round and return to betting.
        """

    @abstractmethod
    def restart_game(self) -> None:
        """
        Reset the balance and all round state.
        """
