"""Domain types for snapshot generation."""

from .models import (
    EntryPoint,
    ExecutionRequest,
    RenderedTarget,
    SnapPayload,
    TargetResult,
    Viewport,
)
from .report import Report, ReportEntry, construct_report

__all__ = [
    "EntryPoint",
    "ExecutionRequest",
    "RenderedTarget",
    "Report",
    "ReportEntry",
    "SnapPayload",
    "TargetResult",
    "Viewport",
    "construct_report",
]
