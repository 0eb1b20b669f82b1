"""
Game flow sequence exports.

Provides the level descriptors and the builder for the standard flow graph.
"""

from gameflow.sequence.level_data import SceneRef, LevelDefinition, level_from_config
from gameflow.sequence.sequence_manager import SequenceManager

__all__ = [
    'SceneRef',
    'LevelDefinition',
    'level_from_config',
    'SequenceManager',
]
