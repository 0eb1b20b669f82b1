"""
level_data.py
-------------
Level descriptors the sequence builder turns into load states.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Union

from gameflow.exceptions import ConfigurationError


@dataclass(frozen=True)
class SceneRef:
    """A level stored as a prebuilt scene, loaded by path."""
    scene_path: str


@dataclass(frozen=True)
class LevelDefinition:
    """A level built at runtime inside a fresh, empty scene."""
    name: str
    settings: Dict[str, Any] = field(default_factory=dict, compare=False)


LevelData = Union[SceneRef, LevelDefinition]


def level_from_config(entry: Dict[str, Any]) -> LevelData:
    """
    Build a level descriptor from one entry of the flow config 'levels' list.

    Args:
        entry: {"scene_path": ...} or {"name": ..., **settings}

    Raises:
        ConfigurationError: entry has neither key
    """
    if "scene_path" in entry:
        return SceneRef(entry["scene_path"])
    if "name" in entry:
        settings = {k: v for k, v in entry.items() if k != "name"}
        return LevelDefinition(entry["name"], settings)
    raise ConfigurationError(f"Level entry needs 'scene_path' or 'name': {entry!r}")
