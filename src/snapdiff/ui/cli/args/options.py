"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final


@final
@dataclass(slots=True)
class RunArgs:
    """Command line arguments for the ``run`` subcommand."""

    command: Literal["run"]
    only: str | None
    is_async: bool
    report_file: Path | None
    config_path: Path | None
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class WatchArgs:
    """Command line arguments for the ``watch`` subcommand."""

    command: Literal["watch"]
    only: str | None
    is_async: bool
    config_path: Path | None
    acknowledge: bool
    verbose: bool
    quiet: bool


CLIArgs = RunArgs | WatchArgs

__all__ = ["CLIArgs", "RunArgs", "WatchArgs"]
