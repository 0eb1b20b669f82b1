"""
states.py
---------
Flow states: the base lifecycle plus the built-in body variants.

Each activation runs reset() -> enter() -> execute() once per tick until it
returns StepStatus.DONE -> exit(). Links are attached by the graph builder.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Tuple

from gameflow.core.debug.debug_logger import DebugLogger
from gameflow.core.runtime.game_clock import GameClock
from gameflow.core.services.scene_controller import SceneController, SceneTask
from gameflow.exceptions import ConfigurationError
from gameflow.statemachine.links import Link
from gameflow.statemachine.step_status import StepStatus


# ===========================================================
# Base State
# ===========================================================

class AbstractState(ABC):
    """
    Common lifecycle and link ownership for every flow state.

    Attributes:
        links_enabled: True between enable_links() and disable_links()
    """

    def __init__(self, name: str = None):
        self._name = name
        self._links: List[Link] = []
        self.links_enabled = False

    @property
    def name(self) -> str:
        """Debug name. Not used for any flow decision."""
        return self._name or self.__class__.__name__

    @name.setter
    def name(self, value: str):
        self._name = value

    # ===========================================================
    # Lifecycle Hooks (Override in subclasses)
    # ===========================================================

    def reset(self):
        """Prepare the body for a fresh activation."""
        pass

    def enter(self):
        """Called once per activation, before the body runs."""
        pass

    @abstractmethod
    def execute(self) -> StepStatus:
        """Advance the body by one step."""
        pass

    def exit(self):
        """Called once per activation, after a transition has been chosen."""
        pass

    # ===========================================================
    # Links
    # ===========================================================

    @property
    def links(self) -> Tuple[Link, ...]:
        return tuple(self._links)

    def add_link(self, link: Link) -> None:
        """Append a link. Adding the same link twice is ignored."""
        if link not in self._links:
            self._links.append(link)

    def remove_link(self, link: Link) -> None:
        if link not in self._links:
            return
        if self.links_enabled:
            link.disable()
        self._links.remove(link)

    def remove_all_links(self) -> None:
        """Drop every link, disarming them first if they are armed."""
        if self.links_enabled:
            for link in self._links:
                link.disable()
        self._links.clear()

    def validate_links(self) -> Optional["AbstractState"]:
        """Return the target of the first open link in insertion order."""
        for link in self._links:
            next_state = link.validate()
            if next_state is not None:
                return next_state
        return None

    def enable_links(self) -> None:
        for link in self._links:
            link.enable()
        self.links_enabled = True

    def disable_links(self) -> None:
        for link in self._links:
            link.disable()
        self.links_enabled = False

    def __repr__(self):
        return f"<{self.__class__.__name__} '{self.name}' links={len(self._links)}>"


# ===========================================================
# Built-in States
# ===========================================================

class State(AbstractState):
    """Generic state: waits one step, then invokes an optional callback."""

    def __init__(self, on_execute: Callable[[], None] = None, name: str = None):
        super().__init__(name)
        self.on_execute = on_execute
        self._stepped = False

    def reset(self):
        self._stepped = False

    def execute(self) -> StepStatus:
        if not self._stepped:
            self._stepped = True
            return StepStatus.RUNNING

        if self.on_execute is not None:
            self.on_execute()
        return StepStatus.DONE


class DelayState(AbstractState):
    """
    Holds the flow for a fixed duration on the injected clock.

    Scaled time is used unless unscaled=True, so the delay freezes while
    the clock is paused.
    """

    def __init__(self, delay: float, clock: GameClock, unscaled: bool = False,
                 name: str = None):
        if delay < 0:
            raise ConfigurationError(f"delay must be >= 0, got {delay}")
        super().__init__(name)
        self.delay = delay
        self.clock = clock
        self.unscaled = unscaled
        self._start_time = 0.0

    def reset(self):
        self._start_time = self.clock.now(self.unscaled)

    @property
    def elapsed(self) -> float:
        return self.clock.now(self.unscaled) - self._start_time

    def execute(self) -> StepStatus:
        if self.elapsed < self.delay:
            return StepStatus.RUNNING
        return StepStatus.DONE


class PauseState(AbstractState):
    """Freezes scaled game time while active."""

    def __init__(self, clock: GameClock, on_pause: Callable[[], None] = None,
                 name: str = None):
        super().__init__(name)
        self.clock = clock
        self.on_pause = on_pause
        self._holding_pause = False
        self._stepped = False

    def reset(self):
        self._stepped = False

    def enter(self):
        if not self._holding_pause:
            self.clock.pause()
            self._holding_pause = True
        if self.on_pause is not None:
            self.on_pause()

    def execute(self) -> StepStatus:
        if not self._stepped:
            self._stepped = True
            return StepStatus.RUNNING
        return StepStatus.DONE

    def exit(self):
        if self._holding_pause:
            self.clock.resume()
            self._holding_pause = False


class _SceneTaskState(AbstractState):
    """Body that starts one SceneTask and polls it to completion."""

    def __init__(self, scene_controller: SceneController, name: str = None):
        super().__init__(name)
        self.scene_controller = scene_controller
        self._task: Optional[SceneTask] = None

    def reset(self):
        self._task = None

    @abstractmethod
    def _start_task(self) -> SceneTask:
        pass

    def _on_task_completed(self):
        pass

    def execute(self) -> StepStatus:
        if self._task is None:
            self._task = self._start_task()

        if not self._task.update():
            return StepStatus.RUNNING

        self._on_task_completed()
        return StepStatus.DONE


class LoadSceneState(_SceneTaskState):
    """Loads a scene by path, then invokes an optional callback."""

    def __init__(self, scene_controller: SceneController, scene: str,
                 on_load_completed: Callable[[], None] = None, name: str = None):
        super().__init__(scene_controller, name)
        self.scene = scene
        self.on_load_completed = on_load_completed

    @property
    def name(self) -> str:
        return self._name or f"LoadSceneState: {self.scene}"

    def _start_task(self) -> SceneTask:
        DebugLogger.state(f"Loading scene '{self.scene}'", category="scene")
        return self.scene_controller.load_scene(self.scene)

    def _on_task_completed(self):
        if self.on_load_completed is not None:
            self.on_load_completed()


class UnloadLastSceneState(_SceneTaskState):
    """Unloads the most recently loaded scene."""

    def _start_task(self) -> SceneTask:
        return self.scene_controller.unload_last_scene()


class LoadLevelState(_SceneTaskState):
    """
    Creates a fresh scene for a level definition and hands the definition on.

    Args:
        scene_controller: Controller that owns the level scene
        level_definition: Object with a 'name' attribute describing the level
        on_level_loaded: Called with level_definition once the scene exists
    """

    def __init__(self, scene_controller: SceneController, level_definition: Any,
                 on_level_loaded: Callable[[Any], None] = None, name: str = None):
        super().__init__(scene_controller, name)
        self.level_definition = level_definition
        self.on_level_loaded = on_level_loaded

    @property
    def name(self) -> str:
        if self._name:
            return self._name
        level_name = getattr(self.level_definition, "name", None)
        return f"LoadLevelState: {level_name}"

    def _start_task(self) -> SceneTask:
        if self.level_definition is None:
            DebugLogger.fail("LoadLevelState has no level definition", category="scene")
            raise ConfigurationError("level_definition is None")
        return self.scene_controller.load_new_scene(self.level_definition.name)

    def _on_task_completed(self):
        if self.on_level_loaded is not None:
            self.on_level_loaded(self.level_definition)
