"""
Blackjack round engine.

This module provides the BlackjackEngine class, which implements the
TableEngine interface for a single player against the dealer. Every
operation builds the next RoundState through pure transitions and commits
it only once the whole operation has succeeded, so a failed draw or a
rejected action leaves the table exactly as it was.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Union

from twentyone.blackjack.action import Action
from twentyone.blackjack.constants import INITIAL_DEAL_SIZE, reshuffle_threshold
from twentyone.blackjack.hand import split_value
from twentyone.common.card import Card
from twentyone.common.errors import (
    IllegalAction,
    InsufficientBalance,
    InvalidBet,
    RoundError,
    SupplyUnavailable,
)
from twentyone.engine.base import TableEngine
from twentyone.events import EngineEventType
from twentyone.state import (
    Outcome,
    Phase,
    PlayerHand,
    RoundState,
    StateTransitionEngine,
)
from twentyone.supply.base import CardSupply, ShoeHandle

logger = logging.getLogger(__name__)

_ROUND_IN_PROGRESS = (Phase.INITIAL_DEAL, Phase.PLAYER_TURN, Phase.DEALER_TURN)


class BlackjackEngine(TableEngine):
    """
    Engine implementation for a single-player blackjack table.

    The dealer stands on all 17s, naturals pay 3:2 and a hand produced by a
    split cannot be split again.
    """

    def __init__(self, supply: CardSupply, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the blackjack engine.

        Args:
            supply: Card supply to draw from
            config: Configuration options (starting_balance, deck_count,
                reshuffle_fraction, bet_unit, dealer_stands_on)
        """
        super().__init__(supply, config)
        self.starting_balance = int(self.setting("starting_balance"))
        self.deck_count = int(self.setting("deck_count"))
        self.bet_unit = int(self.setting("bet_unit"))
        self.dealer_stands_on = int(self.setting("dealer_stands_on"))
        self.reshuffle_threshold = reshuffle_threshold(
            self.deck_count, float(self.setting("reshuffle_fraction"))
        )

        self.shoe: Optional[ShoeHandle] = None
        self._state = StateTransitionEngine.restart(self.starting_balance)
        self._pending: List[Tuple[EngineEventType, Dict[str, Any]]] = []

    # Read-only accessors

    @property
    def state(self) -> RoundState:
        return self._state

    @property
    def balance(self) -> int:
        return self._state.balance

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def hands(self) -> Tuple[PlayerHand, ...]:
        return self._state.hands

    @property
    def bets(self) -> Tuple[int, ...]:
        return self._state.bets

    @property
    def outcomes(self) -> Tuple[Optional[Outcome], ...]:
        return self._state.outcomes

    @property
    def active_hand_index(self) -> int:
        return self._state.active_hand_index

    @property
    def active_hand(self) -> PlayerHand:
        return self._state.active_hand

    @property
    def dealer_hand(self) -> Tuple[Card, ...]:
        return self._state.dealer_cards

    @property
    def round_outcome(self) -> Optional[Outcome]:
        return self._state.round_outcome

    @property
    def game_over(self) -> bool:
        return self._state.game_over

    @property
    def cards_remaining(self) -> Optional[int]:
        return self.shoe.remaining if self.shoe else None

    # Eligibility predicates

    def can_split(self) -> bool:
        if self.phase is not Phase.PLAYER_TURN:
            return False
        hand = self.active_hand
        return (
            self._is_pair(hand)
            and not hand.split_origin
            and self.balance >= hand.bet
        )

    def can_double_down(self) -> bool:
        if self.phase is not Phase.PLAYER_TURN:
            return False
        hand = self.active_hand
        return len(hand.cards) == 2 and self.balance >= hand.bet

    def can_surrender(self) -> bool:
        if self.phase is not Phase.PLAYER_TURN:
            return False
        return self._is_untouched(self.active_hand)

    def valid_actions(self) -> List[Action]:
        """
        Get the actions the player may take right now.

        Returns:
            List of valid actions, empty outside the player's turn
        """
        if self.phase is not Phase.PLAYER_TURN:
            return []

        valid_actions = [Action.HIT, Action.STAND]
        if self.can_double_down():
            valid_actions.append(Action.DOUBLE)
        if self.can_split():
            valid_actions.append(Action.SPLIT)
        if self.can_surrender():
            valid_actions.append(Action.SURRENDER)
        return valid_actions

    @staticmethod
    def _is_pair(hand: PlayerHand) -> bool:
        return len(hand.cards) == 2 and split_value(hand.cards[0]) == split_value(
            hand.cards[1]
        )

    @staticmethod
    def _is_untouched(hand: PlayerHand) -> bool:
        return len(hand.cards) == 2 and not hand.acted

    # Round lifecycle

    async def start_round(self, bet: int) -> Optional[Outcome]:
        """
        Place a bet and deal the opening four cards.

        Cards 0 and 1 go to the player, 2 and 3 to the dealer. Naturals are
        settled on the spot.

        Args:
            bet: Stake, a positive multiple of the bet unit not above the balance

        Returns:
            The outcome if a natural settled the round, otherwise None

        Raises:
            InvalidBet: If the bet is not a positive multiple of the bet unit
            InsufficientBalance: If the bet exceeds the balance
            IllegalAction: If the game is over or a round is in progress
            SupplyUnavailable: If the cards could not be drawn
        """

        async def deal() -> RoundState:
            state = self._state
            if state.game_over:
                raise IllegalAction("Game over: restart the game to play again")
            if state.phase in _ROUND_IN_PROGRESS:
                raise IllegalAction(f"Cannot start a round during {state.phase.value}")
            self._validate_bet(bet)

            if state.phase is Phase.OUTCOME:
                state = StateTransitionEngine.prepare_new_round(state)

            cards = await self._draw(INITIAL_DEAL_SIZE)
            state = StateTransitionEngine.begin_round(state, bet, cards)
            self._queue(
                EngineEventType.ROUND_STARTED,
                {"round": state.round_number, "bet": bet, "balance": state.balance},
            )
            for card in cards[:2]:
                self._queue(EngineEventType.CARD_DEALT, {"to": "player", "hand": 0, "card": str(card)})
            for position, card in enumerate(cards[2:]):
                self._queue(
                    EngineEventType.CARD_DEALT,
                    {"to": "dealer", "card": str(card), "hole": position == 1},
                )

            state = StateTransitionEngine.check_naturals(state)
            if state.phase is Phase.OUTCOME:
                state = self._finish_round(state)
            return state

        await self._apply("deal", deal)
        logger.info(
            "Round %d started with bet %d, outcome %s",
            self._state.round_number,
            bet,
            self._state.round_outcome,
        )
        return self._state.round_outcome

    def _validate_bet(self, bet: int) -> None:
        if isinstance(bet, bool) or not isinstance(bet, int):
            raise InvalidBet(f"Bet must be a whole number, got {bet!r}")
        if bet <= 0 or bet % self.bet_unit != 0:
            raise InvalidBet(f"Bet must be a positive multiple of {self.bet_unit}")
        if bet > self._state.balance:
            raise InsufficientBalance(
                f"Bet {bet} exceeds balance {self._state.balance}"
            )

    def new_round(self) -> None:
        """
        Clear the finished round and return to betting.

        Raises:
            IllegalAction: If a round is still in progress
        """
        if self._state.phase in _ROUND_IN_PROGRESS:
            exc = IllegalAction(f"Cannot start a new round during {self._state.phase.value}")
            self._reject("new round", exc)
            raise exc
        self._state = StateTransitionEngine.prepare_new_round(self._state)

    def restart_game(self) -> None:
        """
        Reset the balance to the starting stake and clear all round state.

        Allowed at any time as a hard reset; the shoe is kept.
        """
        self._state = StateTransitionEngine.restart(self.starting_balance)
        logger.info("Game restarted with balance %d", self.starting_balance)
        self.emit(EngineEventType.GAME_STARTED, {"balance": self.starting_balance})

    # Player actions

    async def handle_action(self, action: Union[Action, str]) -> None:
        """
        Apply a player action to the active hand.

        Args:
            action: Action member, or its name or value ("hit", "double down", ...)

        Raises:
            IllegalAction: If the action is unknown or not allowed right now
        """
        try:
            action = Action.parse(action)
        except IllegalAction as exc:
            self._reject(action, exc)
            raise

        handlers: Dict[Action, Callable[[], Awaitable[None]]] = {
            Action.HIT: self.hit,
            Action.STAND: self.stand,
            Action.DOUBLE: self.double_down,
            Action.SPLIT: self.split,
            Action.SURRENDER: self.surrender,
        }
        await handlers[action]()

    async def hit(self) -> None:
        """
        Draw one card into the active hand; a bust ends that hand's turn.
        """

        async def hit() -> RoundState:
            self._require_player_turn(Action.HIT)
            (card,) = await self._draw(1)
            state = StateTransitionEngine.hit(self._state, card)
            self._queue_player_card(state, card)
            if state.active_hand.is_bust:
                self._queue_bust(state)
                state = await self._end_hand(state)
            return state

        await self._apply(Action.HIT, hit)

    async def stand(self) -> None:
        """
        End the active hand's turn.
        """

        async def stand() -> RoundState:
            self._require_player_turn(Action.STAND)
            return await self._end_hand(self._state)

        await self._apply(Action.STAND, stand)

    async def double_down(self) -> None:
        """
        Double the active bet, draw exactly one card and end the hand's turn.

        Raises:
            IllegalAction: If the active hand does not have exactly two cards
            InsufficientBalance: If the balance cannot cover the extra stake
        """

        async def double() -> RoundState:
            self._require_player_turn(Action.DOUBLE)
            hand = self.active_hand
            if len(hand.cards) != 2:
                raise IllegalAction("Double down is only allowed on a two-card hand")
            if self.balance < hand.bet:
                raise InsufficientBalance(
                    f"Doubling needs {hand.bet}, balance is {self.balance}"
                )

            (card,) = await self._draw(1)
            state = StateTransitionEngine.double_down(self._state, card)
            self._queue_player_card(state, card)
            self._queue_bankroll(state)
            if state.active_hand.is_bust:
                self._queue_bust(state)
            return await self._end_hand(state)

        await self._apply(Action.DOUBLE, double)

    async def surrender(self) -> None:
        """
        Give up the active hand for half its stake back.

        No card is drawn for the surrendered hand, and the dealer does not
        play out once every hand is settled.

        Raises:
            IllegalAction: If the hand has been acted on
        """

        async def surrender() -> RoundState:
            self._require_player_turn(Action.SURRENDER)
            if not self._is_untouched(self.active_hand):
                raise IllegalAction(
                    "Surrender is only allowed on an untouched two-card hand"
                )
            state = StateTransitionEngine.surrender(self._state)
            self._queue_bankroll(state)
            return await self._end_hand(state)

        await self._apply(Action.SURRENDER, surrender)

    async def split(self) -> None:
        """
        Split a pair into two hands, each staked with the original bet.

        The first half stays at the active index and is played first; the
        second is appended and played after the hands before it.

        Raises:
            IllegalAction: If the hand is not a pair or was itself split
            InsufficientBalance: If the balance cannot cover the second stake
        """

        async def split() -> RoundState:
            self._require_player_turn(Action.SPLIT)
            hand = self.active_hand
            if not self._is_pair(hand):
                raise IllegalAction("Split is only allowed on a pair")
            if hand.split_origin:
                raise IllegalAction("A hand produced by a split cannot be split again")
            if self.balance < hand.bet:
                raise InsufficientBalance(
                    f"Splitting needs {hand.bet}, balance is {self.balance}"
                )

            (first_card,) = await self._draw(1)
            (second_card,) = await self._draw(1)
            state = StateTransitionEngine.split(self._state, first_card, second_card)
            new_index = len(state.hands) - 1
            self._queue(
                EngineEventType.HAND_SPLIT,
                {"hand": state.active_hand_index, "new_hand": new_index, "bet": hand.bet},
            )
            self._queue(
                EngineEventType.CARD_DEALT,
                {"to": "player", "hand": state.active_hand_index, "card": str(first_card)},
            )
            self._queue(
                EngineEventType.CARD_DEALT,
                {"to": "player", "hand": new_index, "card": str(second_card)},
            )
            self._queue_bankroll(state)
            return state

        await self._apply(Action.SPLIT, split)

    def _require_player_turn(self, action: Action) -> None:
        if self._state.phase is not Phase.PLAYER_TURN:
            raise IllegalAction(
                f"Cannot {action.value} during {self._state.phase.value}"
            )

    # Dealer play and settlement

    async def _end_hand(self, state: RoundState) -> RoundState:
        """
        Finish the active hand and, after the last one, play out the dealer.
        """
        state = StateTransitionEngine.advance_hand(state)
        if state.phase is not Phase.DEALER_TURN:
            return state

        if StateTransitionEngine.dealer_must_play(state):
            state = await self._play_dealer(state)
        state = StateTransitionEngine.resolve_hands(state)
        return self._finish_round(state)

    async def _play_dealer(self, state: RoundState) -> RoundState:
        """
        Draw for the dealer until the total reaches the stand threshold.
        """
        while StateTransitionEngine.dealer_must_draw(state, self.dealer_stands_on):
            (card,) = await self._draw(1)
            state = StateTransitionEngine.dealer_draw(state, card)
            self._queue(EngineEventType.CARD_DEALT, {"to": "dealer", "card": str(card)})
            self._queue(
                EngineEventType.DEALER_ACTION,
                {"action": "hit", "card": str(card), "value": state.dealer_value},
            )

        self._queue(
            EngineEventType.DEALER_ACTION,
            {"action": "stand", "value": state.dealer_value},
        )
        return state

    def _finish_round(self, state: RoundState) -> RoundState:
        """
        Report the settled hands and flag game over on an empty balance.
        """
        for index, hand in enumerate(state.hands):
            self._queue(
                EngineEventType.HAND_RESULT,
                {
                    "hand": index,
                    "outcome": hand.outcome.value,
                    "bet": hand.bet,
                    "payout": hand.outcome.payout(hand.bet),
                    "value": hand.value,
                    "dealer_value": state.dealer_value,
                },
            )
        self._queue_bankroll(state)
        self._queue(
            EngineEventType.ROUND_ENDED,
            {
                "round": state.round_number,
                "outcomes": [hand.outcome.value for hand in state.hands],
                "balance": state.balance,
            },
        )

        logger.info(
            "Round %d settled: %s, balance %d",
            state.round_number,
            ", ".join(hand.outcome.value for hand in state.hands),
            state.balance,
        )

        state = StateTransitionEngine.check_game_over(state)
        if state.game_over:
            self._queue(EngineEventType.GAME_ENDED, {"balance": state.balance})
        return state

    # Plumbing

    async def _draw(self, count: int) -> Tuple[Card, ...]:
        """
        Draw cards, opening or refilling the shoe first when needed.

        Raises:
            SupplyUnavailable: If any call to the card supply fails
        """
        try:
            if self.shoe is None:
                self.shoe = await self.supply.initialize(self.deck_count)
                self._announce_shuffle()
            elif self.shoe.remaining < self.reshuffle_threshold:
                self.shoe = await self.supply.reshuffle(self.shoe, remaining_only=False)
                self._announce_shuffle()

            result = await self.supply.draw(self.shoe, count)
        except RoundError:
            raise
        except Exception as exc:
            logger.warning("Card supply failed: %s", exc)
            raise SupplyUnavailable(f"Card supply failed: {exc}") from exc

        self.shoe = result.handle
        if len(result.cards) != count:
            raise SupplyUnavailable(
                f"Card supply returned {len(result.cards)} cards, expected {count}"
            )
        return result.cards

    def _announce_shuffle(self) -> None:
        logger.info("Shoe %s shuffled, %d cards", self.shoe.deck_id, self.shoe.remaining)
        self.emit(
            EngineEventType.SHUFFLE,
            {"deck_id": self.shoe.deck_id, "remaining": self.shoe.remaining},
        )

    def _queue(self, event_type: EngineEventType, data: Dict[str, Any]) -> None:
        self._pending.append((event_type, data))

    def _queue_player_card(self, state: RoundState, card: Card) -> None:
        self._queue(
            EngineEventType.CARD_DEALT,
            {"to": "player", "hand": state.active_hand_index, "card": str(card)},
        )

    def _queue_bust(self, state: RoundState) -> None:
        self._queue(
            EngineEventType.HAND_BUSTED,
            {"hand": state.active_hand_index, "value": state.active_hand.value},
        )

    def _queue_bankroll(self, state: RoundState) -> None:
        self._queue(EngineEventType.BANKROLL_UPDATED, {"balance": state.balance})

    def _reject(self, action: Any, exc: RoundError) -> None:
        level = logging.WARNING if isinstance(exc, SupplyUnavailable) else logging.INFO
        logger.log(level, "%s rejected: %s", action, exc)
        self.emit(EngineEventType.ERROR, {"action": str(action), "error": str(exc)})

    async def _apply(
        self,
        action: Union[Action, str],
        operation: Callable[[], Awaitable[RoundState]],
    ) -> None:
        """
        Run an operation and commit its resulting state.

        Events queued by the operation are published only after the commit;
        if the operation raises, both the state and the events are dropped.
        """
        self._pending = []
        try:
            state = await operation()
        except RoundError as exc:
            self._pending = []
            self._reject(action, exc)
            raise

        self._state = state
        pending, self._pending = self._pending, []

        if isinstance(action, Action):
            logger.debug("Player action %s, phase now %s", action.value, state.phase.value)
            self.emit(
                EngineEventType.PLAYER_ACTION,
                {"action": action.value, "phase": state.phase.value},
            )
        for event_type, data in pending:
            self.emit(event_type, data)
