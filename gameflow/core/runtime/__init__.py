"""
Runtime exports.

Provides the flow constants, the injected game clock and the main loop.
"""

from gameflow.core.runtime.game_settings import Timing, Window, Flow
from gameflow.core.runtime.game_clock import GameClock

__all__ = [
    # Configuration
    'Timing',
    'Window',
    'Flow',
    # Time
    'GameClock',
]
