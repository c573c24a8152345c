"""Command execution package for CLI."""

from snapdiff.ui.cli.commands.executor import CommandExecutor
from snapdiff.ui.cli.commands.run import RunCommand
from snapdiff.ui.cli.commands.watch import WatchCommand

__all__ = ["CommandExecutor", "RunCommand", "WatchCommand"]
