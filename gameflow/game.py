"""
game.py
-------
Entry point: builds the default game flow from config and runs it.

Usage:
    gameflow                      # Run with a host window
    gameflow --headless --frames 600
"""

import argparse
import sys

from gameflow.core.debug.debug_logger import DebugLogger
from gameflow.core.runtime.game_clock import GameClock
from gameflow.core.runtime.game_settings import Flow
from gameflow.core.runtime.main_loop import MainLoop
from gameflow.core.services.app_pause_detector import AppPauseDetector
from gameflow.core.services.config_manager import load_config
from gameflow.core.services.game_event import get_flow_events
from gameflow.core.services.notifier import LoggingNotifier
from gameflow.core.services.progress_store import MemoryProgressStore
from gameflow.core.services.scene_backend import SimulatedSceneBackend
from gameflow.core.services.scene_controller import SceneController
from gameflow.sequence.level_data import level_from_config
from gameflow.sequence.sequence_manager import SequenceManager


DEFAULT_FLOW_CONFIG = {
    "splash_delay": Flow.SPLASH_DELAY,
    "base_scene": Flow.BASE_SCENE,
    "scene_frames_per_operation": 1,
    "starting_level": 0,
    "levels": [],
}


def build_game(config: dict, headless: bool = False):
    """
    Wire every collaborator for the default flow.

    Returns:
        tuple: (SequenceManager, MainLoop)
    """
    clock = GameClock()
    events = get_flow_events()
    backend = SimulatedSceneBackend(
        base_scene_name=config["base_scene"],
        frames_per_operation=config["scene_frames_per_operation"],
    )
    sequence = SequenceManager(
        clock=clock,
        scene_controller=SceneController(backend),
        events=events,
        notifier=LoggingNotifier(),
        progress_store=MemoryProgressStore(),
        levels=[level_from_config(entry) for entry in config["levels"]],
        splash_delay=config["splash_delay"],
    )
    sequence.initialize(config["starting_level"])

    loop = MainLoop(
        sequence.state_machine,
        clock,
        pause_detector=AppPauseDetector(events.pause_event),
        headless=headless,
    )
    return sequence, loop


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run the game flow state machine")
    parser.add_argument("--config", default=Flow.CONFIG_FILE,
                        help="Flow config file (default: %(default)s)")
    parser.add_argument("--headless", action="store_true",
                        help="Run without a host window")
    parser.add_argument("--frames", type=int, default=None,
                        help="Stop after this many frames")
    args = parser.parse_args(argv)

    config = load_config(args.config, DEFAULT_FLOW_CONFIG)
    _, loop = build_game(config, headless=args.headless)
    DebugLogger.init_entry("Game Flow")
    loop.run(max_frames=args.frames)
    return 0


if __name__ == "__main__":
    sys.exit(main())
