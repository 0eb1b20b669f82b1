"""
state_machine.py
----------------
Single-active-state runner for the flow graph.

Responsibilities
----------------
- Hold the one active state and advance its body one step per tick.
- Poll the active state's links once its body has finished.
- Perform transitions: disarm -> exit -> reset -> enter -> arm.
"""

from typing import Callable, Optional

from gameflow.core.debug.debug_logger import DebugLogger
from gameflow.exceptions import StateMachineError
from gameflow.statemachine.states import AbstractState
from gameflow.statemachine.step_status import StepStatus


class StateMachine:
    """
    Cooperative runner driven by tick().

    Attributes:
        on_state_changed: Optional hook called with (old_state, new_state)
            after each transition completes
    """

    # ===========================================================
    # Initialization
    # ===========================================================

    def __init__(self, on_state_changed: Callable[[AbstractState, AbstractState], None] = None):
        self._current: Optional[AbstractState] = None
        self._body_completed = False
        self._transitioning = False
        self._failure: Optional[BaseException] = None
        self.transition_count = 0
        self.on_state_changed = on_state_changed

    @property
    def current_state(self) -> Optional[AbstractState]:
        return self._current

    @property
    def is_running(self) -> bool:
        return self._current is not None

    @property
    def body_completed(self) -> bool:
        """True once the active state's body finished and links are being polled."""
        return self._body_completed

    @property
    def failure(self) -> Optional[BaseException]:
        """Error raised while activating the current state, if any."""
        return self._failure

    # ===========================================================
    # Control
    # ===========================================================

    def run(self, initial_state: AbstractState) -> None:
        """
        Activate the initial state.

        Raises:
            StateMachineError: initial_state is None or the machine already runs
        """
        if initial_state is None:
            DebugLogger.fail("run() called without an initial state")
            raise StateMachineError("Cannot run a state machine without an initial state")
        if self._current is not None:
            raise StateMachineError(
                f"State machine is already running '{self._current.name}'"
            )

        DebugLogger.system(f"Initial state: [{initial_state.name}]")
        self._activate(initial_state)

    def tick(self) -> bool:
        """
        Advance the machine by one scheduler step.

        Returns:
            bool: True if a transition happened during this tick

        Raises:
            StateMachineError: run() was never called, tick() was called
                re-entrantly from a state callback, or the current state
                failed to activate
        """
        if self._current is None:
            DebugLogger.fail("tick() called before run()")
            raise StateMachineError("No current state: call run() with an initial state first")
        if self._failure is not None:
            raise StateMachineError(
                f"State '{self._current.name}' failed to activate"
            ) from self._failure
        if self._transitioning:
            raise StateMachineError("tick() called from inside a transition")

        if not self._body_completed:
            status = self._current.execute()
            if status is not StepStatus.DONE:
                return False
            self._body_completed = True
            DebugLogger.trace(f"[{self._current.name}] body done", category="state_machine")

        next_state = self._current.validate_links()
        if next_state is None:
            return False

        self._transition(next_state)
        return True

    # ===========================================================
    # Transition
    # ===========================================================

    def _transition(self, next_state: AbstractState):
        old_state = self._current
        self._transitioning = True
        try:
            old_state.disable_links()
            old_state.exit()
            DebugLogger.state(f"Transitioning [{old_state.name}] → [{next_state.name}]")
            self._activate(next_state)
        finally:
            self._transitioning = False

        self.transition_count += 1
        if self.on_state_changed is not None:
            self.on_state_changed(old_state, next_state)

    def _activate(self, state: AbstractState):
        self._current = state
        self._body_completed = False
        try:
            state.reset()
            state.enter()
            state.enable_links()
        except Exception as e:
            # Half-entered state: every later tick refuses to run it
            self._failure = e
            DebugLogger.fail(f"[{state.name}] failed to activate: {e}")
            raise
