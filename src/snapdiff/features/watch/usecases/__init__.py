"""Use cases for watch mode."""

from .ports import AcknowledgerPort, GenerateFn, ReadyCallback
from .supervisor import CHANGES_DETECTED_MESSAGE, BuildSupervisor

__all__ = [
    "CHANGES_DETECTED_MESSAGE",
    "AcknowledgerPort",
    "BuildSupervisor",
    "GenerateFn",
    "ReadyCallback",
]
