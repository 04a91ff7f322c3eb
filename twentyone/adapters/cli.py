"""
Command-line interface adapter for the round engine.

This module provides an adapter for console play. Blocking console reads run
on a worker thread through `AsyncIOInterfaceWrapper` so the event loop stays
free while the player thinks.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from twentyone.adapters.base import PlatformAdapter
from twentyone.blackjack.action import Action
from twentyone.common.io_interface import (
    AsyncIOInterfaceWrapper,
    ConsoleIOInterface,
    IOInterface,
)


class CLIAdapter(PlatformAdapter):
    """
    Command-line interface adapter.

    This adapter uses an IOInterface (the console by default) for input and
    output, providing a simple text-based table.
    """

    def __init__(self, io_interface: Optional[IOInterface] = None):
        """
        Initialize the CLI adapter.

        Args:
            io_interface: Optional IOInterface to use for I/O. If None, a
                          console IOInterface is used.
        """
        self.io_interface = io_interface or ConsoleIOInterface()
        self.io = AsyncIOInterfaceWrapper(self.io_interface)

    async def shutdown(self) -> None:
        self.io.shutdown()

    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Render the current table to the console.

        Args:
            state: The current table state
        """
        lines = ["", f"=== Round {state.get('round', 0)} - {state.get('phase', '')} ==="]

        dealer = state.get("dealer", {})
        dealer_hand = dealer.get("hand", [])
        if dealer_hand:
            suffix = "" if dealer.get("hide_second_card") else f" ({dealer.get('value', 0)})"
            lines.append(f"Dealer: {' '.join(dealer_hand)}{suffix}")

        hands = state.get("hands", [])
        active = state.get("active_hand_index", 0)
        for i, hand in enumerate(hands):
            if not hand.get("cards"):
                continue
            label = f"Hand {i + 1}" if len(hands) > 1 else "Player"
            marker = "*" if len(hands) > 1 and i == active and not hand.get("outcome") else " "
            line = f"{marker}{label}: {' '.join(hand['cards'])} ({hand.get('value', 0)}) - Bet: {hand.get('bet', 0)}"
            if hand.get("outcome"):
                line += f" - {hand['outcome']}"
            lines.append(line)

        lines.append(f"Balance: {state.get('balance', 0)}")
        if state.get("game_over"):
            lines.append("GAME OVER")
        lines.append("=" * 27)

        for line in lines:
            await self.io.output(line)

    async def request_bet(self, balance: int, bet_unit: int) -> Optional[int]:
        return await self.io.check_numeric_response(
            f"Balance {balance}. Bet (multiple of {bet_unit}, blank to quit): "
        )

    async def request_player_action(self, valid_actions: List[Action]) -> Action:
        return await self.io.get_player_action(valid_actions)

    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Notify the user of a game event via the console.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        if isinstance(event_type, Enum):
            event_type = event_type.name

        message = self._format_event_message(event_type, data)
        if message:
            await self.io.output(message)

    def _format_event_message(
        self, event_type: str, data: Dict[str, Any]
    ) -> Optional[str]:
        """
        Format an event message based on the event type.

        Returns:
            Formatted message string or None if no message needed
        """
        if event_type == "HAND_SPLIT":
            return f"Hand {data.get('hand', 0) + 1} split"
        elif event_type == "HAND_BUSTED":
            return f"Hand {data.get('hand', 0) + 1} busts with {data.get('value')}"
        elif event_type == "HAND_RESULT":
            return f"Hand {data.get('hand', 0) + 1}: {data.get('outcome')}, pays {data.get('payout', 0)}"
        elif event_type == "SHUFFLE":
            return f"Shoe shuffled ({data.get('remaining')} cards)"
        elif event_type == "GAME_ENDED":
            return "You are out of money."
        elif event_type == "ERROR":
            return f"Error: {data.get('error')}"

        return None

    async def confirm_restart(self) -> bool:
        answer = await self.io.input("Play again from the starting balance? [y/N] ")
        return answer.strip().lower() in ("y", "yes")
