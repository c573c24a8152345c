"""Command line interface for snapdiff."""

import sys
from typing import final

from snapdiff.platform.logging import logger
from snapdiff.shared import AggregateRenderError, SnapdiffError
from snapdiff.ui.cli.args import ArgumentParser
from snapdiff.ui.cli.args.options import CLIArgs, RunArgs
from snapdiff.ui.cli.commands import RunCommand, WatchCommand
from snapdiff.ui.cli.display import ReportDisplay


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)

            if isinstance(args, RunArgs):
                _ = RunCommand(args).execute()
                return

            _ = WatchCommand(args).execute()
            return

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except AggregateRenderError as e:
            ReportDisplay().show_render_failures(e)
            sys.exit(1)
        except SnapdiffError as e:
            logger.error("%s", e)
            sys.exit(1)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures exit through
        ``sys.exit(...)`` inside command processing.
    """
    CommandProcessor.process_command()
    return 0
