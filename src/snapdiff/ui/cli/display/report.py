"""Display utilities for run outcomes."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, final

from rich.console import Console
from rich.table import Table

from snapdiff.application.services import RunOutcome
from snapdiff.config.file_ops import write_text_file
from snapdiff.features.snapshots import Report, TargetResult
from snapdiff.platform.logging import logger
from snapdiff.shared import AggregateRenderError


def _summarize(result: Any) -> str:
    if result is None:
        return "skipped (no examples)"
    if isinstance(result, dict):
        for key in ("summary", "status", "url", "requestId", "id"):
            if key in result:
                return str(result[key])
        return f"{len(result)} field(s)"
    return str(result)


def outcome_to_dict(outcome: RunOutcome) -> dict[str, Any]:
    """Return the JSON document written by ``--report-file``."""

    if isinstance(outcome, Report):
        return outcome.to_dict()
    return {"acknowledgements": [{"target": r.name, "result": r.result} for r in outcome]}


@final
class ReportDisplay:
    """Render reports, acknowledgments and render failures in the CLI."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_outcome(self, outcome: RunOutcome, *, quiet: bool = False) -> None:
        if quiet:
            return
        if isinstance(outcome, Report):
            self.show_report(outcome)
        else:
            self.show_acknowledgements(outcome)

    def show_report(self, report: Report) -> None:
        table = Table(title="Comparison report")
        table.add_column("Target", style="cyan")
        table.add_column("Result")
        for entry in report:
            table.add_row(entry.target_name, _summarize(entry.result))
        self.console.print(table)

    def show_acknowledgements(self, results: list[TargetResult]) -> None:
        self.console.print(f"\n[bold]Submitted {len(results)} target(s):[/bold]")
        for result in results:
            self.console.print(f"  • {result.name}: {_summarize(result.result)}")

    def show_render_failures(self, error: AggregateRenderError) -> None:
        self.console.print(f"[red]{error.message}[/red]")
        for example, cause in error.failures:
            where = f"{example[0]}/{example[1]}" if example else "unknown example"
            self.console.print(f"[red]  • {where}: {cause}[/red]")

    @staticmethod
    def write_report_file(outcome: RunOutcome, path: Path) -> None:
        write_text_file(path, json.dumps(outcome_to_dict(outcome), indent=2, default=str))
        logger.info("Report written to %s", path)


__all__ = ["ReportDisplay", "outcome_to_dict"]
