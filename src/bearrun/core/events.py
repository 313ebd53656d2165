"""
Event bus for BEAR RUN.

Synchronous pub/sub between the simulation and its collaborators (audio
cues, window). Handlers are fire-and-forget: errors raised by a handler
are logged and never reach the emitter.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
import logging
import time
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input events
    BUTTON_PRESS = auto()
    RESIZE = auto()

    # State events
    STATE_CHANGED = auto()

    # Gameplay events
    JUMPED = auto()
    SCORED = auto()
    CRASHED = auto()
    NIGHT_BEGAN = auto()

    # System events
    TICK = auto()  # Frame that advanced the game
    SHUTDOWN = auto()


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
    """Dispatches each emitted event to its subscribers, in subscription order."""

    def __init__(self) -> None:
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)
        self._global_handlers: list[Handler] = []

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Returns:
            Unsubscribe function (safe to call more than once)
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Subscribe to every event. Returns the unsubscribe function."""
        self._global_handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._global_handlers:
                self._global_handlers.remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Deliver an event to all matching handlers right away."""
        handlers = self._handlers.get(event.type, []) + self._global_handlers
        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type}: {e}")


def button_press_event(source: str = "button") -> Event:
    """Create a button press event."""
    return Event(EventType.BUTTON_PRESS, source=source)


def resize_event(width: int, height: int, source: str = "window") -> Event:
    """Create a window resize event."""
    return Event(EventType.RESIZE, data={"width": width, "height": height}, source=source)


def tick_event(frame: int) -> Event:
    """Create a frame tick event."""
    return Event(EventType.TICK, data={"frame": frame}, source="window")
