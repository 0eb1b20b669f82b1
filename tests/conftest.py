"""
conftest.py
-----------
Shared pytest configuration and fixtures for gameflow tests.

Contains:
- Global pygame mock so no window or audio device is needed
- Fixtures for clocks, events and scene collaborators
- Pytest markers
"""

import os
import sys
from unittest.mock import MagicMock

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Mock pygame globally before any gameflow import touches it
mock_pygame = MagicMock()
sys.modules["pygame"] = mock_pygame
sys.modules["pygame.display"] = MagicMock()
sys.modules["pygame.event"] = MagicMock()
sys.modules["pygame.time"] = MagicMock()

# Mock pygame constants
mock_pygame.QUIT = 256
mock_pygame.WINDOWFOCUSGAINED = 32785
mock_pygame.WINDOWFOCUSLOST = 32786
mock_pygame.WINDOWMINIMIZED = 32779
mock_pygame.WINDOWRESTORED = 32781
mock_pygame.KEYDOWN = 768

from gameflow.core.debug.debug_logger import LoggerConfig  # noqa: E402
from gameflow.core.runtime.game_clock import GameClock  # noqa: E402
from gameflow.core.services.game_event import (  # noqa: E402
    FlowEvents,
    GameEventListener,
    reset_flow_events,
)
from gameflow.core.services.scene_backend import SimulatedSceneBackend  # noqa: E402
from gameflow.core.services.scene_controller import SceneController  # noqa: E402


# ===========================================================
# Global Setup
# ===========================================================

@pytest.fixture(autouse=True)
def quiet_logger():
    """Silence console output for every test."""
    previous = LoggerConfig.ENABLE_LOGGING
    LoggerConfig.ENABLE_LOGGING = False
    yield
    LoggerConfig.ENABLE_LOGGING = previous


@pytest.fixture(autouse=True)
def fresh_flow_events():
    """Drop the flow event singleton between tests."""
    reset_flow_events()
    yield
    reset_flow_events()


# ===========================================================
# Common Fixtures
# ===========================================================

@pytest.fixture
def clock():
    return GameClock()


@pytest.fixture
def events():
    return FlowEvents()


@pytest.fixture
def scene_backend():
    """Backend whose operations need two polls to finish."""
    return SimulatedSceneBackend(base_scene_name="Boot", frames_per_operation=2)


@pytest.fixture
def scene_controller(scene_backend):
    return SceneController(scene_backend)


# ===========================================================
# Test Utilities
# ===========================================================

class RecordingListener(GameEventListener):
    """Listener that appends its label to a shared log when raised."""

    def __init__(self, label, log, on_raise=None):
        self.label = label
        self.log = log
        self.on_raise = on_raise
        self.payloads = []

    def on_event_raised(self):
        self.log.append(self.label)
        if self.on_raise is not None:
            self.on_raise(self)


def tick_until(machine, predicate, max_ticks=100):
    """Tick machine until predicate() holds. Returns ticks used."""
    for count in range(1, max_ticks + 1):
        machine.tick()
        if predicate():
            return count
    raise AssertionError(f"Condition not met after {max_ticks} ticks")


@pytest.fixture
def make_listener():
    """Factory fixture for RecordingListener."""
    return RecordingListener


@pytest.fixture(name="tick_until")
def tick_until_fixture():
    return tick_until


# Pytest configuration
def pytest_configure(config):
    """Custom pytest configuration."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "scenario: end-to-end flow scenarios")


def pytest_collection_modifyitems(config, items):
    """Tag tests by location: sequence tests are integration, the rest unit."""
    for item in items:
        if "sequence" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
