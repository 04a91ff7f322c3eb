"""
Event system for the round engine.

The engine reports every step of a round on a process-wide bus. Presentation
layers and loggers subscribe to it instead of polling engine state.
"""

from collections import defaultdict
from typing import Any, Callable, DefaultDict, Dict, List, Tuple, Union
import threading
import logging
from enum import Enum

logger = logging.getLogger("twentyone.events")


class EngineEventType(Enum):
    """
    Event types published by the round engine.
    """

    # Table lifecycle
    GAME_STARTED = "game_started"
    GAME_ENDED = "game_ended"
    ROUND_STARTED = "round_started"
    ROUND_ENDED = "round_ended"

    # Player events
    PLAYER_ACTION = "player_action"

    # Card events
    CARD_DEALT = "card_dealt"
    SHUFFLE = "shuffle"

    # Hand events
    HAND_SPLIT = "hand_split"
    HAND_BUSTED = "hand_busted"
    HAND_RESULT = "hand_result"

    # Dealer events
    DEALER_ACTION = "dealer_action"

    # Money events
    BANKROLL_UPDATED = "bankroll_updated"

    # Error events
    ERROR = "error"

    @classmethod
    def coerce(cls, event_type: Union["EngineEventType", str]) -> "EngineEventType":
        """
        Look up an event type by member, name ("CARD_DEALT") or value ("card_dealt").

        Raises:
            ValueError: If no engine event goes by that name
        """
        if isinstance(event_type, cls):
            return event_type
        if event_type in cls.__members__:
            return cls[event_type]
        try:
            return cls(event_type)
        except ValueError:
            raise ValueError(f"Unknown engine event: {event_type!r}") from None


EventType = Union[EngineEventType, str]
Listener = Callable[[Dict[str, Any]], None]
AnyListener = Callable[[Tuple[str, Dict[str, Any]]], None]


class EventEmitter:
    """
    Synchronous publish/subscribe hub for engine events.

    Listeners run in subscription order on the emitting thread. A listener
    that raises is logged and skipped.
    """

    def __init__(self):
        self._listeners: DefaultDict[EngineEventType, List[Listener]] = defaultdict(list)
        self._any_listeners: List[AnyListener] = []
        self._listener_lock = threading.RLock()

    def on(self, event_type: EventType, callback: Listener) -> Callable[[], None]:
        """
        Subscribe to one engine event.

        Args:
            event_type: Event member, or its name or value
            callback: Called with the event data

        Returns:
            Function removing this subscription
        """
        event_type = EngineEventType.coerce(event_type)
        with self._listener_lock:
            self._listeners[event_type].append(callback)

        def unsubscribe():
            with self._listener_lock:
                if callback in self._listeners[event_type]:
                    self._listeners[event_type].remove(callback)

        return unsubscribe

    def on_any(self, callback: AnyListener) -> Callable[[], None]:
        """
        Subscribe to every engine event.

        The callback receives an (event name, data) tuple, e.g.
        ``("HAND_RESULT", {"outcome": "push", ...})``.

        Returns:
            Function removing this subscription
        """
        with self._listener_lock:
            self._any_listeners.append(callback)

        def unsubscribe():
            with self._listener_lock:
                if callback in self._any_listeners:
                    self._any_listeners.remove(callback)

        return unsubscribe

    def emit(self, event_type: EventType, data: Dict[str, Any]) -> None:
        """
        Publish an event to its listeners, then to the catch-all listeners.

        Raises:
            ValueError: If the event type is not an engine event
        """
        event_type = EngineEventType.coerce(event_type)

        with self._listener_lock:
            calls = [(callback, data) for callback in self._listeners.get(event_type, [])]
            calls += [(callback, (event_type.name, data)) for callback in self._any_listeners]

        # Outside the lock so listeners may subscribe or unsubscribe
        for callback, args in calls:
            try:
                callback(args)
            except Exception as e:
                logger.error(
                    f"Error in event handler for {event_type.name}: {e}", exc_info=True
                )


class EventBus:
    """
    Process-wide event bus shared by every engine.
    """

    _instance = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> EventEmitter:
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = EventEmitter()
        return cls._instance
