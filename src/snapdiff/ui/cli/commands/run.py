"""Run command implementation for the CLI."""

from __future__ import annotations

from typing import final

from snapdiff.application.services import RunOptions, RunOutcome
from snapdiff.ui.cli.args.options import RunArgs
from snapdiff.ui.cli.commands.executor import CommandExecutor


@final
class RunCommand(CommandExecutor):
    """Bundle once, generate screenshots and print the report."""

    args: RunArgs

    def build_options(self) -> RunOptions:
        return RunOptions(only=self.args.only, is_async=self.args.is_async)

    def execute(self) -> RunOutcome | None:
        outcome = self.run_service()
        if outcome is None:
            return None
        self.display.show_outcome(outcome, quiet=self.args.quiet)
        if self.args.report_file is not None:
            self.display.write_report_file(outcome, self.args.report_file)
        return outcome
