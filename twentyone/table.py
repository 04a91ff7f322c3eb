"""
Table loop connecting the round engine to a platform adapter.

The table asks the adapter for bets and actions, hands them to the engine one
at a time, and mirrors the engine's state and events back to the adapter.
Engine errors are shown to the player and the prompt is repeated.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from twentyone.adapters.base import PlatformAdapter
from twentyone.common.errors import RoundError, SupplyUnavailable
from twentyone.engine.blackjack import BlackjackEngine
from twentyone.state.models import Phase

logger = logging.getLogger(__name__)


class BlackjackTable:
    """
    Drives a BlackjackEngine through a PlatformAdapter.
    """

    def __init__(
        self,
        engine: BlackjackEngine,
        adapter: PlatformAdapter,
        max_supply_failures: int = 3,
    ):
        """
        Args:
            engine: Engine to drive
            adapter: Front end to show the table on
            max_supply_failures: Consecutive card supply failures tolerated
                before the round is abandoned
        """
        self.engine = engine
        self.adapter = adapter
        self.max_supply_failures = max_supply_failures
        self.rounds_played = 0
        self._events: List[Tuple[str, Dict[str, Any]]] = []
        self._unsubscribe = None

    def _record(self, event: Tuple[str, Dict[str, Any]]) -> None:
        self._events.append(event)

    async def _flush(self) -> None:
        """Forward queued engine events to the adapter and redraw the table."""
        events, self._events = self._events, []
        for event_type, data in events:
            await self.adapter.notify_game_event(event_type, data)
        await self.adapter.render_game_state(self.engine.state.to_adapter_format())

    async def _supply_failed(self, failures: int) -> int:
        """
        Show a card supply failure; re-raise once too many happened in a row.
        """
        await self._flush()
        failures += 1
        if failures >= self.max_supply_failures:
            raise SupplyUnavailable(
                f"Card supply failed {failures} times in a row, abandoning the round"
            )
        return failures

    async def play_round(self) -> bool:
        """
        Play one round from the bet to the settlement.

        Returns:
            False if the player left the table instead of betting
        """
        failures = 0
        while True:
            bet = await self.adapter.request_bet(self.engine.balance, self.engine.bet_unit)
            if bet is None:
                return False
            try:
                await self.engine.start_round(bet)
                break
            except SupplyUnavailable:
                failures = await self._supply_failed(failures)
            except RoundError:
                await self._flush()

        await self._flush()
        failures = 0
        while self.engine.phase is Phase.PLAYER_TURN:
            action = await self.adapter.request_player_action(self.engine.valid_actions())
            try:
                await self.engine.handle_action(action)
                failures = 0
            except SupplyUnavailable:
                failures = await self._supply_failed(failures)
                continue
            except RoundError:
                pass
            await self._flush()

        self.rounds_played += 1
        return True

    def is_broke(self) -> bool:
        """
        True once a settled round leaves less than the smallest legal bet.

        This covers game over as well as a balance of a few chips left by a
        3:2 payout or a surrender refund.
        """
        if self.engine.game_over:
            return True
        return (
            self.engine.phase is Phase.OUTCOME
            and self.engine.balance < self.engine.bet_unit
        )

    async def run(self, max_rounds: Optional[int] = None) -> int:
        """
        Play rounds until the player leaves, declines a restart after going
        broke, or `max_rounds` rounds have been played.

        Returns:
            Number of rounds played
        """
        await self.adapter.initialize()
        self._unsubscribe = self.engine.event_bus.on_any(self._record)
        try:
            while max_rounds is None or self.rounds_played < max_rounds:
                if self.is_broke():
                    logger.info("Balance %d cannot cover a bet", self.engine.balance)
                    if not await self.adapter.confirm_restart():
                        break
                    self.engine.restart_game()
                    await self._flush()
                if not await self.play_round():
                    break
        finally:
            if self._unsubscribe:
                self._unsubscribe()
                self._unsubscribe = None
            await self.adapter.shutdown()

        logger.info(
            "Table closed after %d rounds, balance %d",
            self.rounds_played,
            self.engine.balance,
        )
        return self.rounds_played
