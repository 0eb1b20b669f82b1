"""
scene_backend.py
----------------
Asynchronous scene operations consumed by the scene controller.

Responsibilities
----------------
- Define the backend interface the flow engine loads and unloads scenes through.
- Report completion as a polled boolean instead of a blocking call.
- Provide an in-memory backend for headless runs and tests.
"""

import itertools
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from gameflow.core.debug.debug_logger import DebugLogger


# ===========================================================
# Data Types
# ===========================================================

@dataclass(frozen=True)
class Scene:
    """Opaque handle to a loaded scene."""
    name: str
    path: str = ""
    handle: int = 0


class AsyncOperation(ABC):
    """
    A long-running backend operation polled once per scheduler step.

    Attributes:
        error: Failure message once the operation finished unsuccessfully
    """

    def __init__(self):
        self.error: Optional[str] = None
        self.progress = 0.0

    @abstractmethod
    def poll(self) -> bool:
        """Advance/check the operation. Returns True once finished (success or failure)."""
        pass

    @property
    def failed(self) -> bool:
        return self.error is not None


# ===========================================================
# Backend Interface
# ===========================================================

class SceneBackend(ABC):
    """Host engine services the SceneController delegates to."""

    @abstractmethod
    def load_scene_async(self, path: str) -> AsyncOperation:
        """Begin loading the scene at path additively."""
        pass

    @abstractmethod
    def unload_scene_async(self, scene: Scene) -> AsyncOperation:
        """Begin unloading a loaded scene."""
        pass

    @abstractmethod
    def create_scene(self, name: str) -> Scene:
        """Create an empty scene immediately."""
        pass

    @abstractmethod
    def get_scene_by_path(self, path: str) -> Optional[Scene]:
        pass

    @abstractmethod
    def is_scene_loaded(self, scene: Scene) -> bool:
        pass

    @abstractmethod
    def get_active_scene(self) -> Scene:
        pass

    @abstractmethod
    def set_active_scene(self, scene: Scene) -> None:
        pass


# ===========================================================
# Simulated Backend
# ===========================================================

class SimulatedOperation(AsyncOperation):
    """Operation that finishes after a fixed number of polls."""

    def __init__(self, frames: int, on_complete: Callable[[], None] = None,
                 error: Optional[str] = None):
        super().__init__()
        self.frames = max(frames, 1)
        self.polls = 0
        self._on_complete = on_complete
        self._pending_error = error
        self.done = False

    def poll(self) -> bool:
        if self.done:
            return True

        self.polls += 1
        self.progress = min(self.polls / self.frames, 1.0)
        if self.polls < self.frames:
            return False

        self.done = True
        if self._pending_error is not None:
            self.error = self._pending_error
        elif self._on_complete is not None:
            self._on_complete()
        return True


class SimulatedSceneBackend(SceneBackend):
    """
    In-memory scene backend.

    Args:
        base_scene_name: Name of the scene that is loaded at startup
        frames_per_operation: Polls each load/unload needs before finishing
        failing_paths: Scene paths whose load reports an error
    """

    def __init__(self, base_scene_name: str = "Boot", frames_per_operation: int = 1,
                 failing_paths: Iterable[str] = ()):
        self.frames_per_operation = frames_per_operation
        self.failing_paths = set(failing_paths)
        self._handles = itertools.count(1)
        self._loaded: List[Scene] = []
        self.operations: List[tuple] = []

        base = Scene(base_scene_name, "", next(self._handles))
        self._loaded.append(base)
        self._active = base
        DebugLogger.init(f"SimulatedSceneBackend ready (base='{base_scene_name}')", category="scene")

    # ===========================================================
    # Operations
    # ===========================================================

    def load_scene_async(self, path: str) -> AsyncOperation:
        self.operations.append(("load", path))
        scene = Scene(_scene_name(path), path, next(self._handles))

        if path in self.failing_paths:
            return SimulatedOperation(self.frames_per_operation,
                                      error=f"Failed to load scene '{path}'")

        return SimulatedOperation(self.frames_per_operation,
                                  on_complete=lambda: self._loaded.append(scene))

    def unload_scene_async(self, scene: Scene) -> AsyncOperation:
        self.operations.append(("unload", scene.path or scene.name))

        if scene not in self._loaded:
            return SimulatedOperation(self.frames_per_operation,
                                      error=f"Scene '{scene.name}' is not loaded")

        def _remove():
            self._loaded.remove(scene)
            if self._active == scene:
                self._active = self._loaded[0]

        return SimulatedOperation(self.frames_per_operation, on_complete=_remove)

    def create_scene(self, name: str) -> Scene:
        self.operations.append(("create", name))
        scene = Scene(name, "", next(self._handles))
        self._loaded.append(scene)
        return scene

    # ===========================================================
    # Queries
    # ===========================================================

    def get_scene_by_path(self, path: str) -> Optional[Scene]:
        for scene in self._loaded:
            if scene.path == path:
                return scene
        return None

    def is_scene_loaded(self, scene: Scene) -> bool:
        return scene in self._loaded

    def get_active_scene(self) -> Scene:
        return self._active

    def set_active_scene(self, scene: Scene) -> None:
        self._active = scene

    @property
    def loaded_scenes(self) -> List[Scene]:
        return list(self._loaded)


def _scene_name(path: str) -> str:
    return os.path.splitext(os.path.basename(path))[0] or path
