"""Display management for CLI interface."""

from snapdiff.ui.cli.display.report import ReportDisplay, outcome_to_dict

__all__ = ["ReportDisplay", "outcome_to_dict"]
