"""
scene_controller.py
-------------------
Scene load/unload sequencing that respects a never-unload base scene.

The base scene holds all level-independent managers and is never unloaded.
Every request returns a SceneTask that the calling state polls once per step.
"""

from typing import Callable, List, Optional

from gameflow.core.debug.debug_logger import DebugLogger
from gameflow.core.services.scene_backend import AsyncOperation, Scene, SceneBackend
from gameflow.exceptions import ConfigurationError, SceneOperationError


# ===========================================================
# Scene Task
# ===========================================================

class _Stage:
    """One step of a SceneTask: begin an operation, then react to its completion."""

    def __init__(self, begin: Callable[[], Optional[AsyncOperation]],
                 complete: Callable[[], None] = None):
        self.begin = begin
        self.complete = complete


class SceneTask:
    """
    Sequence of backend operations polled with update().

    A stage whose begin() returns None is synchronous and completes in the
    same update call.
    """

    def __init__(self, description: str, stages: List[_Stage]):
        self.description = description
        self._stages = stages
        self._index = 0
        self._operation: Optional[AsyncOperation] = None

    def update(self) -> bool:
        """Advance the task. Returns True once every stage has completed."""
        while self._index < len(self._stages):
            stage = self._stages[self._index]

            if self._operation is None:
                self._operation = stage.begin()
                if self._operation is None:
                    self._complete_stage(stage)
                    continue

            if not self._operation.poll():
                return False

            if self._operation.failed:
                DebugLogger.fail(f"{self.description}: {self._operation.error}", category="scene")
                raise SceneOperationError(f"{self.description}: {self._operation.error}")

            self._complete_stage(stage)

        return True

    @property
    def is_done(self) -> bool:
        return self._index >= len(self._stages)

    def _complete_stage(self, stage: _Stage):
        if stage.complete is not None:
            stage.complete()
        self._operation = None
        self._index += 1


# ===========================================================
# Scene Controller
# ===========================================================

class SceneController:
    """Loads one level scene at a time on top of the base scene."""

    def __init__(self, backend: SceneBackend, never_unload_scene: Scene = None):
        """
        Args:
            backend: Host scene services
            never_unload_scene: Base scene; defaults to the backend's active scene
        """
        self.backend = backend
        self.never_unload_scene = never_unload_scene or backend.get_active_scene()
        self.last_scene = self.never_unload_scene
        DebugLogger.init_entry("SceneController")
        DebugLogger.init_sub(f"Base scene: '{self.never_unload_scene.name}'")

    # ===========================================================
    # Public API
    # ===========================================================

    def load_scene(self, path: str) -> SceneTask:
        """
        Unload the last scene, then load the scene at path additively.

        Raises:
            ConfigurationError: path is empty or not a string
        """
        self._validate_id(path, "scene path")
        stages = self._unload_last_stages()
        stages.append(_Stage(lambda: self.backend.load_scene_async(path),
                             lambda: self._on_scene_loaded(path)))
        return SceneTask(f"Load '{path}'", stages)

    def load_new_scene(self, name: str) -> SceneTask:
        """
        Unload the last scene, then create an empty scene called name.

        Raises:
            ConfigurationError: name is empty or not a string
        """
        self._validate_id(name, "scene name")
        stages = self._unload_last_stages()
        stages.append(_Stage(lambda: self._create_scene(name)))
        return SceneTask(f"Create '{name}'", stages)

    def unload_last_scene(self) -> SceneTask:
        """Unload the last loaded scene. No-op for the base scene."""
        return SceneTask("Unload last scene", self._unload_last_stages())

    # ===========================================================
    # Stages
    # ===========================================================

    def _unload_last_stages(self) -> List[_Stage]:
        return [_Stage(self._begin_unload_last, self._on_last_unloaded)]

    def _begin_unload_last(self) -> Optional[AsyncOperation]:
        scene = self.last_scene
        if scene == self.never_unload_scene:
            return None
        if not self.backend.is_scene_loaded(scene):
            return None
        DebugLogger.state(f"Unloading '{scene.name}'", category="scene")
        return self.backend.unload_scene_async(scene)

    def _on_last_unloaded(self):
        self.last_scene = self.never_unload_scene

    def _on_scene_loaded(self, path: str):
        scene = self.backend.get_scene_by_path(path)
        if scene is None:
            raise SceneOperationError(f"Scene '{path}' reported loaded but was not found")
        self.last_scene = scene
        self.backend.set_active_scene(scene)
        DebugLogger.state(f"Loaded '{scene.name}'", category="scene")

    def _create_scene(self, name: str) -> None:
        scene = self.backend.create_scene(name)
        self.backend.set_active_scene(scene)
        self.last_scene = scene
        DebugLogger.state(f"Created '{name}'", category="scene")
        return None

    @staticmethod
    def _validate_id(value, label: str):
        if not isinstance(value, str) or not value.strip():
            DebugLogger.fail(f"Invalid {label}: {value!r}", category="scene")
            raise ConfigurationError(f"{label} is invalid: {value!r}")
