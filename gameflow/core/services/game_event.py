"""
game_event.py
-------------
Broadcast events that connect game collaborators (buttons, triggers,
OS focus changes) to the flow graph.

Each event instance owns its own listener list. Firing notifies the
listeners and then resets any payload the firing collaborator set.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from gameflow.core.debug.debug_logger import DebugLogger


# ===========================================================
# Listener Interface
# ===========================================================

class GameEventListener(ABC):
    """Anything that wants to observe a GameEvent."""

    @abstractmethod
    def on_event_raised(self) -> None:
        """Called synchronously when the observed event fires."""
        pass


# ===========================================================
# Event Base
# ===========================================================

class GameEvent:
    """
    Broadcast primitive with a listener set and a fire-then-reset payload.

    Attributes:
        name: Human-readable name for logging
        payload: Value set by the firing collaborator, only valid during fire()
    """

    UNSET_PAYLOAD: Any = None

    def __init__(self, name: str = None):
        self.name = name or self.__class__.__name__
        self.payload = self.UNSET_PAYLOAD
        self._listeners: List[GameEventListener] = []

    # ===========================================================
    # Subscription
    # ===========================================================

    def subscribe(self, listener: GameEventListener) -> None:
        """Add a listener. No-op if it is already subscribed."""
        if listener in self._listeners:
            return
        self._listeners.append(listener)
        DebugLogger.trace(f"'{self.name}' +listener ({len(self._listeners)})", category="event")

    def unsubscribe(self, listener: GameEventListener) -> None:
        """Remove a listener. No-op if it is not subscribed."""
        if listener not in self._listeners:
            return
        self._listeners.remove(listener)
        DebugLogger.trace(f"'{self.name}' -listener ({len(self._listeners)})", category="event")

    def is_subscribed(self, listener: GameEventListener) -> bool:
        return listener in self._listeners

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    # ===========================================================
    # Dispatch
    # ===========================================================

    def fire(self, payload: Any = None) -> None:
        """
        Notify every listener, most recently subscribed first, then reset.

        Listeners may unsubscribe themselves or others from inside the
        callback. A listener removed mid-fire is not called afterwards, and
        one added mid-fire waits for the next fire.

        Args:
            payload: Optional value exposed as self.payload during the call
        """
        if payload is not None:
            self.payload = payload

        DebugLogger.system(
            f"Fired '{self.name}' -> {len(self._listeners)} listener(s)",
            category="event"
        )

        for listener in reversed(list(self._listeners)):
            if listener in self._listeners:
                listener.on_event_raised()

        self.reset()

    def reset(self) -> None:
        """Restore the payload to its unset sentinel. Runs after every fire."""
        self.payload = self.UNSET_PAYLOAD

    def __repr__(self):
        return f"<{self.__class__.__name__} '{self.name}' listeners={len(self._listeners)}>"


# ===========================================================
# Concrete Events
# ===========================================================

class ItemPickedEvent(GameEvent):
    """Fired when the player picks up an item. Payload is the new item count."""

    UNSET_PAYLOAD = -1

    @property
    def count(self) -> int:
        return self.payload

    @count.setter
    def count(self, value: int):
        self.payload = value


class LevelCompletedEvent(GameEvent):
    """Fired when the player completes a level."""
    pass


class LevelLostEvent(GameEvent):
    """Fired when the player loses a level."""
    pass


# ===========================================================
# Generic Listener
# ===========================================================

class GenericGameEventListener(GameEventListener):
    """Adapts a plain callable into a listener for one event."""

    def __init__(self, event: GameEvent, handler: Optional[Callable[[], None]] = None):
        self.event = event
        self.handler = handler

    def start_listening(self) -> None:
        self.event.subscribe(self)

    def stop_listening(self) -> None:
        self.event.unsubscribe(self)

    def on_event_raised(self) -> None:
        if self.handler is not None:
            self.handler()


# ===========================================================
# Flow Event Registry
# ===========================================================

class FlowEvents:
    """Named set of the events that drive the standard game flow."""

    CONTINUE = "continue"
    BACK = "back"
    WIN = "win"
    LOSE = "lose"
    PAUSE = "pause"

    def __init__(self):
        self._events: Dict[str, GameEvent] = {
            self.CONTINUE: GameEvent(self.CONTINUE),
            self.BACK: GameEvent(self.BACK),
            self.WIN: LevelCompletedEvent(self.WIN),
            self.LOSE: LevelLostEvent(self.LOSE),
            self.PAUSE: GameEvent(self.PAUSE),
        }
        DebugLogger.init(f"FlowEvents initialized ({len(self._events)} events)", category="event")

    def get(self, name: str) -> GameEvent:
        """Return the event registered under name, creating a plain one if missing."""
        if name not in self._events:
            self._events[name] = GameEvent(name)
        return self._events[name]

    def names(self) -> List[str]:
        return list(self._events)

    @property
    def continue_event(self) -> GameEvent:
        return self._events[self.CONTINUE]

    @property
    def back_event(self) -> GameEvent:
        return self._events[self.BACK]

    @property
    def win_event(self) -> GameEvent:
        return self._events[self.WIN]

    @property
    def lose_event(self) -> GameEvent:
        return self._events[self.LOSE]

    @property
    def pause_event(self) -> GameEvent:
        return self._events[self.PAUSE]


# ===========================================================
# Singleton Access
# ===========================================================

_FLOW_EVENTS = None


def get_flow_events() -> FlowEvents:
    """Get or create the flow event registry singleton."""
    global _FLOW_EVENTS
    if _FLOW_EVENTS is None:
        _FLOW_EVENTS = FlowEvents()
    return _FLOW_EVENTS


def reset_flow_events() -> None:
    """Drop the singleton. Call on full game restart."""
    global _FLOW_EVENTS
    _FLOW_EVENTS = None
