# Where: snapdiff.features.watch.__init__
# What: Expose the build supervisor and its terminal acknowledger.
# Why: Provide a cohesive import surface for the run service.

from .adapters import TerminalAcknowledger
from .domain import AcknowledgementWait, BuildJob, SupervisorState
from .usecases import CHANGES_DETECTED_MESSAGE, AcknowledgerPort, BuildSupervisor

__all__ = [
    "CHANGES_DETECTED_MESSAGE",
    "AcknowledgementWait",
    "AcknowledgerPort",
    "BuildJob",
    "BuildSupervisor",
    "SupervisorState",
    "TerminalAcknowledger",
]
