"""
notifier.py
-----------
UI and audio sinks the flow notifies when states activate.

The flow only names views and sounds; drawing and playback belong to the
embedding game.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from gameflow.core.debug.debug_logger import DebugLogger


class FlowNotifier(ABC):
    """Receives 'show this view' and music requests from flow callbacks."""

    @abstractmethod
    def show_view(self, view_name: str) -> None:
        pass

    @abstractmethod
    def play_music(self, sound_id: str) -> None:
        pass

    @abstractmethod
    def stop_music(self) -> None:
        pass


class LoggingNotifier(FlowNotifier):
    """Default notifier that records requests and logs them."""

    def __init__(self):
        self.current_view: Optional[str] = None
        self.current_music: Optional[str] = None
        self.history: List[str] = []

    def show_view(self, view_name: str) -> None:
        self.current_view = view_name
        self.history.append(view_name)
        DebugLogger.action(f"Show view '{view_name}'", category="ui")

    def play_music(self, sound_id: str) -> None:
        if self.current_music == sound_id:
            return
        self.current_music = sound_id
        DebugLogger.action(f"Play music '{sound_id}'", category="audio")

    def stop_music(self) -> None:
        if self.current_music is None:
            return
        DebugLogger.action(f"Stop music '{self.current_music}'", category="audio")
        self.current_music = None
