"""
gameflow
--------
Cooperative state machine that sequences a game's high-level flow.
"""

from gameflow.statemachine import (
    AbstractState,
    State,
    DelayState,
    PauseState,
    LoadSceneState,
    UnloadLastSceneState,
    LoadLevelState,
    Link,
    EventLink,
    StateMachine,
    StepStatus,
)
from gameflow.core.services.game_event import GameEvent, FlowEvents
from gameflow.core.runtime.game_clock import GameClock

__version__ = "0.1.0"

__all__ = [
    'AbstractState',
    'State',
    'DelayState',
    'PauseState',
    'LoadSceneState',
    'UnloadLastSceneState',
    'LoadLevelState',
    'Link',
    'EventLink',
    'StateMachine',
    'StepStatus',
    'GameEvent',
    'FlowEvents',
    'GameClock',
]
