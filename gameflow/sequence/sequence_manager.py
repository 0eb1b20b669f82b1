"""
sequence_manager.py
-------------------
Builds the standard game flow graph and drives it through a StateMachine.

Responsibilities
----------------
- Splash -> delay -> main menu <-> level select navigation.
- One load/gameplay/win/lose/pause cluster per level, chained level to level.
- Rebinding the level select entry point to a chosen starting level.
- Advancing saved progress when a level is won.
"""

from typing import Any, Callable, List, Optional, Sequence

from gameflow.core.debug.debug_logger import DebugLogger
from gameflow.core.runtime.game_clock import GameClock
from gameflow.core.runtime.game_settings import Flow
from gameflow.core.services.game_event import FlowEvents
from gameflow.core.services.notifier import FlowNotifier
from gameflow.core.services.progress_store import ProgressStore
from gameflow.core.services.scene_controller import SceneController
from gameflow.exceptions import ConfigurationError, StateMachineError
from gameflow.sequence.level_data import LevelData, LevelDefinition, SceneRef
from gameflow.statemachine.links import EventLink, Link
from gameflow.statemachine.state_machine import StateMachine
from gameflow.statemachine.states import (
    AbstractState,
    DelayState,
    LoadLevelState,
    LoadSceneState,
    PauseState,
    State,
    UnloadLastSceneState,
)


class SequenceManager:
    """Owns the flow graph and the state machine that walks it."""

    # ===========================================================
    # Initialization
    # ===========================================================

    def __init__(self, clock: GameClock, scene_controller: SceneController,
                 events: FlowEvents, notifier: FlowNotifier,
                 progress_store: ProgressStore, levels: Sequence[LevelData],
                 splash_delay: float = Flow.SPLASH_DELAY,
                 on_level_loaded: Callable[[Any], None] = None):
        """
        Args:
            clock: Time domain shared by delay and pause states
            scene_controller: Loads and unloads level scenes
            events: continue/back/win/lose/pause events
            notifier: UI/audio sink
            progress_store: Level progress storage
            levels: Ordered level descriptors
            splash_delay: Seconds the splash screen stays up
            on_level_loaded: Called with a LevelDefinition once its scene exists
        """
        self.clock = clock
        self.scene_controller = scene_controller
        self.events = events
        self.notifier = notifier
        self.progress_store = progress_store
        self.levels = list(levels)
        self.splash_delay = splash_delay
        self.on_level_loaded = on_level_loaded

        self.state_machine = StateMachine()
        self.splash_state: Optional[AbstractState] = None
        self.main_menu_state: Optional[AbstractState] = None
        self.level_select_state: Optional[AbstractState] = None
        self.level_states: List[AbstractState] = []
        self.current_level: Optional[AbstractState] = None

    def initialize(self, starting_level: int = 0) -> None:
        """
        Build the whole graph, pick the starting level and start the machine.

        Raises:
            StateMachineError: the flow is already running
            ConfigurationError: no levels, or starting_level out of range
        """
        if self.state_machine.is_running:
            DebugLogger.fail("initialize() called on a running flow", category="flow")
            raise StateMachineError("Flow is already running; initialize() may only be called once")
        if not self.levels:
            DebugLogger.fail("SequenceManager needs at least one level", category="flow")
            raise ConfigurationError("No levels configured")

        DebugLogger.section("Building Flow")
        self.splash_state = State(lambda: self._show_view(Flow.VIEW_SPLASH), name="Splash")
        self._create_menu_navigation_sequence()
        self._create_level_sequences()
        self.set_starting_level(starting_level)

        self.state_machine.run(self.splash_state)

    # ===========================================================
    # Graph Construction
    # ===========================================================

    def _create_menu_navigation_sequence(self):
        splash_delay = DelayState(self.splash_delay, self.clock, name="SplashDelay")
        self.main_menu_state = State(self._on_main_menu_displayed, name="MainMenu")
        self.level_select_state = State(self._on_level_selection_displayed, name="LevelSelect")

        self.splash_state.add_link(Link(splash_delay))
        splash_delay.add_link(Link(self.main_menu_state))
        self.main_menu_state.add_link(EventLink(self.events.continue_event, self.level_select_state))
        self.level_select_state.add_link(EventLink(self.events.back_event, self.main_menu_state))

    def _create_level_sequences(self):
        self.level_states.clear()

        last_state = None
        for level in self.levels:
            load_state = self._create_level_state(level)
            last_state = self._add_level_peripheral_states(load_state, self.level_select_state, last_state)

        # Closing the loop: the last level's win screen returns to level select
        unload_last_scene = UnloadLastSceneState(self.scene_controller, name="UnloadAfterLastLevel")
        last_state.add_link(EventLink(self.events.continue_event, unload_last_scene))
        unload_last_scene.add_link(Link(self.level_select_state))

        DebugLogger.system(f"Built {len(self.level_states)} level sequence(s)", category="flow")

    def _create_level_state(self, level: LevelData) -> AbstractState:
        if isinstance(level, SceneRef):
            return LoadSceneState(self.scene_controller, level.scene_path)
        if isinstance(level, LevelDefinition):
            return LoadLevelState(self.scene_controller, level, self.on_level_loaded)
        raise ConfigurationError(f"Unsupported level descriptor: {level!r}")

    def _add_level_peripheral_states(self, load_level_state: AbstractState,
                                     quit_state: AbstractState,
                                     last_state: Optional[AbstractState]) -> AbstractState:
        """Wire one level's satellites. Returns the level's win state."""
        self.level_states.append(load_level_state)
        level_name = load_level_state.name

        gameplay_state = State(lambda: self._on_gameplay_started(load_level_state),
                               name=f"Gameplay ({level_name})")
        win_state = PauseState(self.clock, lambda: self._on_win_screen_displayed(load_level_state),
                               name=f"Win ({level_name})")
        lose_state = PauseState(self.clock, lambda: self._show_view(Flow.VIEW_GAME_OVER),
                                name=f"Lose ({level_name})")
        pause_state = PauseState(self.clock, lambda: self._show_view(Flow.VIEW_PAUSE_MENU),
                                 name=f"Pause ({level_name})")
        unload_lose = UnloadLastSceneState(self.scene_controller, name=f"UnloadLose ({level_name})")
        unload_pause = UnloadLastSceneState(self.scene_controller, name=f"UnloadPause ({level_name})")

        if last_state is not None:
            last_state.add_link(EventLink(self.events.continue_event, load_level_state))
        load_level_state.add_link(Link(gameplay_state))

        gameplay_state.add_link(EventLink(self.events.win_event, win_state))
        gameplay_state.add_link(EventLink(self.events.lose_event, lose_state))
        gameplay_state.add_link(EventLink(self.events.pause_event, pause_state))

        lose_state.add_link(EventLink(self.events.continue_event, load_level_state))
        lose_state.add_link(EventLink(self.events.back_event, unload_lose))
        unload_lose.add_link(Link(quit_state))

        pause_state.add_link(EventLink(self.events.continue_event, gameplay_state))
        pause_state.add_link(EventLink(self.events.back_event, unload_pause))
        unload_pause.add_link(Link(self.main_menu_state))

        return win_state

    # ===========================================================
    # Rebinding
    # ===========================================================

    def set_starting_level(self, index: int) -> None:
        """
        Point level select's 'continue' at the level with the given index.

        Raises:
            ConfigurationError: index is out of range or the graph is not built
        """
        if self.level_select_state is None:
            raise ConfigurationError("Flow graph has not been built")
        if not 0 <= index < len(self.level_states):
            DebugLogger.fail(f"Invalid starting level {index}", category="flow")
            raise ConfigurationError(
                f"Starting level {index} out of range (0..{len(self.level_states) - 1})"
            )

        was_armed = self.level_select_state.links_enabled
        self.level_select_state.remove_all_links()
        self.level_select_state.add_link(EventLink(self.events.continue_event, self.level_states[index]))
        self.level_select_state.add_link(EventLink(self.events.back_event, self.main_menu_state))
        if was_armed:
            self.level_select_state.enable_links()

        DebugLogger.state(f"Starting level -> {self.level_states[index].name}", category="flow")

    # ===========================================================
    # Flow Callbacks
    # ===========================================================

    def _show_view(self, view_name: str):
        self.notifier.show_view(view_name)

    def _on_main_menu_displayed(self):
        self._show_view(Flow.VIEW_MAIN_MENU)
        self.notifier.play_music(Flow.MENU_MUSIC)

    def _on_level_selection_displayed(self):
        self._show_view(Flow.VIEW_LEVEL_SELECT)
        self.notifier.play_music(Flow.MENU_MUSIC)

    def _on_gameplay_started(self, current: AbstractState):
        self.current_level = current
        self._show_view(Flow.VIEW_HUD)
        self.notifier.stop_music()

    def _on_win_screen_displayed(self, current_level: AbstractState):
        self._show_view(Flow.VIEW_LEVEL_COMPLETE)

        if current_level not in self.level_states:
            DebugLogger.fail(f"Unknown level state {current_level!r}", category="flow")
            raise ConfigurationError(f"{current_level!r} is not a level of this flow")
        current_index = self.level_states.index(current_level)

        level_progress = self.progress_store.level_progress
        if current_index == level_progress and current_index < len(self.level_states) - 1:
            self.progress_store.level_progress = level_progress + 1
