"""Application services shared by the user interfaces."""

from .run_service import RunContext, RunOptions, RunOutcome, SnapRunService

__all__ = ["RunContext", "RunOptions", "RunOutcome", "SnapRunService"]
