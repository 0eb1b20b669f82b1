"""
app_pause_detector.py
---------------------
Turns OS-level focus loss and minimisation into a flow pause event.
"""

import pygame

from gameflow.core.debug.debug_logger import DebugLogger
from gameflow.core.services.game_event import GameEvent


class AppPauseDetector:
    """Fires the pause event when the window loses focus or is minimised."""

    def __init__(self, pause_event: GameEvent):
        self.pause_event = pause_event
        self.is_paused = False

    def on_application_focus(self, has_focus: bool) -> None:
        self.is_paused = not has_focus
        if self.is_paused:
            self.pause_event.fire()

    def on_application_pause(self, paused: bool) -> None:
        self.is_paused = paused
        if self.is_paused:
            self.pause_event.fire()

    def handle_event(self, event) -> bool:
        """
        Inspect a pygame event.

        Returns:
            bool: True if the event was a focus/minimise event
        """
        if event.type == pygame.WINDOWFOCUSLOST:
            DebugLogger.state("Window lost focus", category="loop")
            self.on_application_focus(False)
        elif event.type == pygame.WINDOWFOCUSGAINED:
            self.on_application_focus(True)
        elif event.type == pygame.WINDOWMINIMIZED:
            DebugLogger.state("Window minimised", category="loop")
            self.on_application_pause(True)
        elif event.type == pygame.WINDOWRESTORED:
            self.on_application_pause(False)
        else:
            return False
        return True
