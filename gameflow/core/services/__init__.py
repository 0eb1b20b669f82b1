"""
Core services exports.

Provides flow events, scene loading collaborators, notification sinks,
progress storage and configuration loading.
"""

from gameflow.core.services.config_manager import load_config
from gameflow.core.services.game_event import (
    GameEvent,
    GameEventListener,
    GenericGameEventListener,
    ItemPickedEvent,
    LevelCompletedEvent,
    LevelLostEvent,
    FlowEvents,
    get_flow_events,
    reset_flow_events,
)
from gameflow.core.services.scene_backend import (
    Scene,
    AsyncOperation,
    SceneBackend,
    SimulatedSceneBackend,
)
from gameflow.core.services.scene_controller import SceneController, SceneTask
from gameflow.core.services.notifier import FlowNotifier, LoggingNotifier
from gameflow.core.services.progress_store import ProgressStore, MemoryProgressStore
from gameflow.core.services.app_pause_detector import AppPauseDetector

__all__ = [
    # Config
    'load_config',
    # Events
    'GameEvent',
    'GameEventListener',
    'GenericGameEventListener',
    'ItemPickedEvent',
    'LevelCompletedEvent',
    'LevelLostEvent',
    'FlowEvents',
    'get_flow_events',
    'reset_flow_events',
    # Scenes
    'Scene',
    'AsyncOperation',
    'SceneBackend',
    'SimulatedSceneBackend',
    'SceneController',
    'SceneTask',
    # Sinks
    'FlowNotifier',
    'LoggingNotifier',
    'ProgressStore',
    'MemoryProgressStore',
    'AppPauseDetector',
]
