"""
Event bus for Ski Chase.

Synchronous pub/sub between the simulator window and the game. The window
publishes key presses and frame ticks; the game publishes pause and entity
state notifications.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
from collections import defaultdict
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input events
    KEY_DOWN = auto()

    # Loop events
    TICK = auto()
    QUIT = auto()

    # Game events
    PAUSED = auto()
    RESUMED = auto()
    GAME_RESET = auto()
    SKIER_STATE_CHANGED = auto()
    RHINO_STATE_CHANGED = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type
        data: Event payload
        source: Component that emitted the event
        timestamp: When event was created
    """
    type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


Handler = Callable[[Event], None]


class EventBus:
    """
    Central event bus for component communication.

    Handlers run in subscription order on the emitting thread. A handler
    that raises is logged and does not stop the remaining handlers.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)
        self._global_handlers: list[Handler] = []

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type.name}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type.name}")

        return unsubscribe

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Subscribe to all events."""
        self._global_handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._global_handlers:
                self._global_handlers.remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Emit an event to every matching handler."""
        handlers = self._handlers.get(event.type, []) + self._global_handlers
        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type.name}: {e}")


def key_down_event(key: str, source: str = "keyboard") -> Event:
    """Create a key press event."""
    return Event(EventType.KEY_DOWN, data={"key": key}, source=source)


def tick_event(current_time: float, frame: int) -> Event:
    """Create a frame tick event."""
    return Event(EventType.TICK, data={"time": current_time, "frame": frame})
