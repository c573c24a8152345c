"""Watch command implementation for the CLI."""

from __future__ import annotations

from typing import final

from snapdiff.application.services import RunOptions, RunOutcome
from snapdiff.features.watch import AcknowledgerPort, TerminalAcknowledger
from snapdiff.platform.logging import logger
from snapdiff.ui.cli.args.options import WatchArgs
from snapdiff.ui.cli.commands.executor import CommandExecutor


@final
class WatchCommand(CommandExecutor):
    """Regenerate screenshots on every source change until interrupted."""

    args: WatchArgs

    def build_options(self) -> RunOptions:
        return RunOptions(
            only=self.args.only,
            is_async=self.args.is_async,
            on_ready=self._on_ready,
            acknowledger=self._acknowledger(),
        )

    def execute(self) -> RunOutcome | None:
        return self.run_service()

    def _on_ready(self, outcome: RunOutcome) -> None:
        self.display.show_outcome(outcome, quiet=self.args.quiet)

    def _acknowledger(self) -> AcknowledgerPort | None:
        if not self.args.acknowledge:
            return None
        if not TerminalAcknowledger.is_supported():
            logger.debug("stdin is not a terminal; superseding builds start without acknowledgment")
            return None
        return TerminalAcknowledger(self.display.console)
