"""
step_status.py
--------------
Result of advancing a state's body by one scheduler step.
"""

from enum import Enum


class StepStatus(Enum):
    """Whether a body needs more steps."""
    RUNNING = "running"     # Call execute() again next tick
    DONE = "done"           # Body finished; links may now be polled
