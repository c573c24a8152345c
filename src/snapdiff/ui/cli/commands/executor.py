"""src/snapdiff/ui/cli/commands/executor.py
What: Provide shared wiring for CLI command executors.
Why: Reuse configuration, service and presentation helpers across commands.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod

from snapdiff.application.services import RunOptions, RunOutcome, SnapRunService
from snapdiff.config.config import Config
from snapdiff.ui.cli.args.options import CLIArgs
from snapdiff.ui.cli.display.report import ReportDisplay


class CommandExecutor(ABC):
    """Base class for command execution."""

    args: CLIArgs
    config: Config
    app: SnapRunService
    display: ReportDisplay

    def __init__(
        self,
        args: CLIArgs,
        *,
        app: SnapRunService | None = None,
        display: ReportDisplay | None = None,
    ) -> None:
        """Initialize command executor.

        Args:
            args: Command line arguments.
            app: Run service, injectable for tests.
            display: Outcome renderer, injectable for tests.
        """
        self.args = args
        self.config = Config.load(args.config_path)
        self.app = app or SnapRunService()
        self.display = display or ReportDisplay()

    @abstractmethod
    def build_options(self) -> RunOptions:
        """Translate arguments into run options."""

    @abstractmethod
    def execute(self) -> RunOutcome | None:
        """Execute the command.

        Returns:
            The run outcome, or ``None`` when the command watched sources.
        """
        pass

    def run_service(self) -> RunOutcome | None:
        return asyncio.run(self.app.run(self.config, self.build_options()))
