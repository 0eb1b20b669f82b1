"""
State machine exports.

Provides flow states, links and the runner that drives them.
"""

from gameflow.exceptions import (
    GameFlowError,
    ConfigurationError,
    StateMachineError,
    SceneOperationError,
    ClockError,
)
from gameflow.statemachine.step_status import StepStatus
from gameflow.statemachine.links import Link, EventLink
from gameflow.statemachine.states import (
    AbstractState,
    State,
    DelayState,
    PauseState,
    LoadSceneState,
    UnloadLastSceneState,
    LoadLevelState,
)
from gameflow.statemachine.state_machine import StateMachine

__all__ = [
    # Errors
    'GameFlowError',
    'ConfigurationError',
    'StateMachineError',
    'SceneOperationError',
    'ClockError',
    # Graph
    'StepStatus',
    'Link',
    'EventLink',
    'AbstractState',
    'State',
    'DelayState',
    'PauseState',
    'LoadSceneState',
    'UnloadLastSceneState',
    'LoadLevelState',
    # Runner
    'StateMachine',
]
