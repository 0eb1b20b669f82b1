"""
exceptions.py
-------------
Error types raised by the flow engine.

Configuration errors mean the flow graph itself is malformed and are never
retried. Scene operation errors are raised when an asynchronous collaborator
reports failure for the state that started it.
"""


class GameFlowError(Exception):
    """Base class for all flow engine errors."""


class ConfigurationError(GameFlowError, ValueError):
    """Malformed graph or invalid argument detected while building or running it."""


class StateMachineError(GameFlowError, RuntimeError):
    """The state machine was driven in a way its lifecycle does not allow."""


class SceneOperationError(GameFlowError, RuntimeError):
    """An asynchronous scene load/unload reported failure."""


class ClockError(GameFlowError, RuntimeError):
    """Unbalanced pause/resume on a GameClock."""
