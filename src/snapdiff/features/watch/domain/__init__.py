"""Domain types for watch mode."""

from .models import AcknowledgementWait, BuildJob, SupervisorState

__all__ = ["AcknowledgementWait", "BuildJob", "SupervisorState"]
