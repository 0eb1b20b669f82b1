"""
progress_store.py
-----------------
Level progress storage used by the win callback of the game flow.
"""

from abc import ABC, abstractmethod

from gameflow.core.debug.debug_logger import DebugLogger


class ProgressStore(ABC):
    """Holds the index of the furthest unlocked level."""

    @property
    @abstractmethod
    def level_progress(self) -> int:
        pass

    @level_progress.setter
    @abstractmethod
    def level_progress(self, value: int):
        pass


class MemoryProgressStore(ProgressStore):
    """Keeps progress in memory for the lifetime of the process."""

    def __init__(self, level_progress: int = 0):
        self._level_progress = level_progress

    @property
    def level_progress(self) -> int:
        return self._level_progress

    @level_progress.setter
    def level_progress(self, value: int):
        if value < 0:
            raise ValueError("level_progress must be >= 0")
        self._level_progress = value
        DebugLogger.action(f"Level progress -> {value}", category="progress")
