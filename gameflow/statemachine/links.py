"""
links.py
--------
Directed edges between flow states.

A link is polled by its owning state once that state's body has finished.
Link is always open; EventLink opens once its event fires while armed.
"""

from typing import Optional, TYPE_CHECKING

from gameflow.core.debug.debug_logger import DebugLogger
from gameflow.core.services.game_event import GameEvent, GameEventListener
from gameflow.exceptions import ConfigurationError

if TYPE_CHECKING:
    from gameflow.statemachine.states import AbstractState


class Link:
    """
    A link that is always open for transition.

    The owning state moves to next_state as soon as its body completes.
    """

    def __init__(self, next_state: "AbstractState"):
        """
        Raises:
            ConfigurationError: next_state is None
        """
        if next_state is None:
            DebugLogger.fail(f"{self.__class__.__name__} has no target state", category="link")
            raise ConfigurationError(f"{self.__class__.__name__} needs a target state")
        self.next_state = next_state

    def validate(self) -> Optional["AbstractState"]:
        """Return the target state if the link is open, otherwise None."""
        return self.next_state

    def enable(self) -> None:
        """Arm the link. Nothing to arm for an unconditional link."""
        pass

    def disable(self) -> None:
        """Disarm the link."""
        pass

    def __repr__(self):
        return f"<{self.__class__.__name__} -> {_state_name(self.next_state)}>"


class EventLink(Link, GameEventListener):
    """
    A link that opens once its event is raised while the link is armed.

    The raised flag is a boolean: several fires before the next poll still
    produce a single transition. Arming and disarming both clear it.
    """

    def __init__(self, game_event: GameEvent, next_state: "AbstractState"):
        if not isinstance(game_event, GameEvent):
            DebugLogger.fail(f"EventLink given {game_event!r} instead of a GameEvent", category="link")
            raise ConfigurationError(f"EventLink needs a GameEvent, got {game_event!r}")
        super().__init__(next_state)
        self.game_event = game_event
        self.event_raised = False

    def validate(self) -> Optional["AbstractState"]:
        if self.event_raised:
            return self.next_state
        return None

    def on_event_raised(self) -> None:
        self.event_raised = True
        DebugLogger.trace(
            f"'{self.game_event.name}' opened link -> {_state_name(self.next_state)}"
        )

    def enable(self) -> None:
        self.game_event.subscribe(self)
        self.event_raised = False

    def disable(self) -> None:
        self.game_event.unsubscribe(self)
        self.event_raised = False

    @property
    def is_armed(self) -> bool:
        return self.game_event.is_subscribed(self)

    def __repr__(self):
        return (
            f"<{self.__class__.__name__} '{self.game_event.name}' "
            f"-> {_state_name(self.next_state)}>"
        )


def _state_name(state) -> str:
    return getattr(state, "name", repr(state))
