"""
game_clock.py
-------------
Injected time domain shared by the flow states.

The main loop advances the clock once per fixed step. Scaled time stops
while any pause region is open; unscaled time always advances.
"""

from gameflow.core.debug.debug_logger import DebugLogger
from gameflow.exceptions import ClockError


class GameClock:
    """
    Scaled and unscaled game time with reference-counted pausing.

    Attributes:
        time: Scaled seconds since creation
        unscaled_time: Real seconds since creation
    """

    def __init__(self, time_scale: float = 1.0):
        if time_scale < 0:
            raise ValueError("time_scale must be >= 0")
        self.time = 0.0
        self.unscaled_time = 0.0
        self._base_scale = time_scale
        self._pause_depth = 0

    # ===========================================================
    # Time Scale
    # ===========================================================

    @property
    def time_scale(self) -> float:
        """Effective scale: 0 while paused, base scale otherwise."""
        if self._pause_depth > 0:
            return 0.0
        return self._base_scale

    @time_scale.setter
    def time_scale(self, value: float):
        if value < 0:
            raise ValueError("time_scale must be >= 0")
        self._base_scale = value

    @property
    def is_paused(self) -> bool:
        return self._pause_depth > 0

    @property
    def pause_depth(self) -> int:
        return self._pause_depth

    def pause(self) -> None:
        """Open a pause region. Nested regions stack."""
        self._pause_depth += 1
        DebugLogger.state(f"Clock paused (depth={self._pause_depth})", category="clock")

    def resume(self) -> None:
        """Close the innermost pause region."""
        if self._pause_depth == 0:
            DebugLogger.fail("Clock resumed without a matching pause", category="clock")
            raise ClockError("resume() called without a matching pause()")
        self._pause_depth -= 1
        DebugLogger.state(f"Clock resumed (depth={self._pause_depth})", category="clock")

    # ===========================================================
    # Advancing
    # ===========================================================

    def advance(self, dt: float) -> float:
        """
        Move both time domains forward.

        Args:
            dt: Real seconds elapsed since the last advance

        Returns:
            float: Scaled delta actually applied to self.time
        """
        scaled = dt * self.time_scale
        self.unscaled_time += dt
        self.time += scaled
        return scaled

    def now(self, unscaled: bool = False) -> float:
        return self.unscaled_time if unscaled else self.time
