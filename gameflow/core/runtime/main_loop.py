"""
main_loop.py
------------
Fixed-timestep scheduler that drives the flow state machine.

Responsibilities:
- Own the pygame clock and host window
- Route window events (quit, focus loss) to the right collaborator
- Marshal events fired from other threads onto the scheduling thread
- Advance the game clock and tick the state machine once per fixed step
"""

import queue
from typing import Any, Optional

import pygame

from gameflow.core.debug.debug_logger import DebugLogger
from gameflow.core.runtime.game_clock import GameClock
from gameflow.core.runtime.game_settings import Timing, Window
from gameflow.core.services.app_pause_detector import AppPauseDetector
from gameflow.core.services.game_event import GameEvent
from gameflow.statemachine.state_machine import StateMachine


class MainLoop:
    """
    Runtime controller ticking the state machine at a fixed rate.

    Rendering is not the loop's concern; the host window only exists to
    receive quit and focus events.
    """

    # ===========================================================
    # Initialization
    # ===========================================================

    def __init__(self, state_machine: StateMachine, clock: GameClock,
                 pause_detector: Optional[AppPauseDetector] = None,
                 headless: bool = False, fixed_dt: float = Timing.FIXED_DT):
        DebugLogger.section("Initializing MainLoop")

        self.state_machine = state_machine
        self.clock = clock
        self.pause_detector = pause_detector
        self.headless = headless
        self.fixed_dt = fixed_dt

        self._accumulator = 0.0
        self._posted = queue.SimpleQueue()
        self.tick_count = 0
        self.running = False

        self._init_pygame()

    def _init_pygame(self):
        """Initialize pygame and, unless headless, a small host window."""
        pygame.init()
        if not self.headless:
            pygame.display.set_mode((Window.WIDTH, Window.HEIGHT))
            pygame.display.set_caption(Window.CAPTION)
        self.pg_clock = pygame.time.Clock()

        DebugLogger.init_entry("Pygame")
        DebugLogger.init_sub("Headless" if self.headless else "Host window created")
        DebugLogger.init_sub(f"Fixed step {self.fixed_dt:.4f}s")

    # ===========================================================
    # Cross-thread Events
    # ===========================================================

    def post_event(self, event: GameEvent, payload: Any = None) -> None:
        """
        Queue a fire of event for the scheduling thread. Safe from any thread.

        Args:
            event: Event to fire on the next fixed step
            payload: Optional payload passed to fire()
        """
        self._posted.put((event, payload))

    def _drain_posted_events(self):
        while True:
            try:
                event, payload = self._posted.get_nowait()
            except queue.Empty:
                return
            event.fire(payload)

    # ===========================================================
    # Main Loop
    # ===========================================================

    def run(self, max_frames: Optional[int] = None):
        """
        Execute the loop until quit, stop() or max_frames frames.

        Uses an accumulator so the state machine ticks at a fixed rate
        regardless of the frame rate.
        """
        DebugLogger.section("Flow Loop")
        self.running = True
        frames = 0

        try:
            while self.running:
                frame_time = self.pg_clock.tick(Timing.FPS) / 1000.0
                self._handle_events()
                if not self.running:
                    break
                self.step(frame_time)

                frames += 1
                if max_frames is not None and frames >= max_frames:
                    break
        finally:
            self.running = False
            pygame.quit()
            DebugLogger.system("Pygame terminated", category="loop")

    def step(self, frame_time: float) -> int:
        """
        Consume frame_time worth of fixed steps.

        Args:
            frame_time: Seconds since the previous frame (clamped)

        Returns:
            int: Number of state machine ticks performed
        """
        self._accumulator += min(frame_time, Timing.MAX_FRAME_TIME)

        ticks = 0
        while self._accumulator >= self.fixed_dt:
            self._drain_posted_events()
            self.clock.advance(self.fixed_dt)
            self.state_machine.tick()
            self._accumulator -= self.fixed_dt
            ticks += 1

        self.tick_count += ticks
        return ticks

    def stop(self):
        self.running = False

    # ===========================================================
    # Event Handling
    # ===========================================================

    def _handle_events(self):
        """Process pending pygame events: quit, then focus/minimise."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                DebugLogger.action("Quit signal received", category="loop")
                break

            if self.pause_detector is not None:
                self.pause_detector.handle_event(event)
