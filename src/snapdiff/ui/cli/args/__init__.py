"""Command line argument handling package."""

from snapdiff.ui.cli.args.parser import ArgumentParser
from snapdiff.ui.cli.args.options import CLIArgs, RunArgs, WatchArgs

__all__ = ["ArgumentParser", "CLIArgs", "RunArgs", "WatchArgs"]
