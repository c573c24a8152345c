"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from snapdiff import __version__
from snapdiff.config.config import Config
from snapdiff.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
from snapdiff.ui.cli.args.options import CLIArgs, RunArgs, WatchArgs


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="snapdiff",
            description="snapdiff - Render UI examples and compare screenshots across targets.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        _ = parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}",
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        run_parser = subparsers.add_parser(
            "run",
            help="Bundle examples once and generate screenshots in every target",
        )
        ArgumentParser._configure_common(run_parser)
        _ = run_parser.add_argument(
            "--report-file",
            type=str,
            metavar="PATH",
            help="Write the resulting report (or acknowledgments) as JSON to PATH",
        )

        watch_parser = subparsers.add_parser(
            "watch",
            help="Rebuild and regenerate screenshots whenever sources change",
        )
        ArgumentParser._configure_common(watch_parser)
        _ = watch_parser.add_argument(
            "--no-ack",
            action="store_true",
            help="Start superseding builds immediately instead of waiting for Enter",
        )

        return parser

    @staticmethod
    def _configure_common(parser: argparse.ArgumentParser) -> None:
        """Apply options shared by every subcommand."""

        _ = parser.add_argument(
            "--only",
            type=str,
            metavar="COMPONENT",
            help="Only include examples whose file name contains COMPONENT",
        )
        _ = parser.add_argument(
            "--async",
            dest="is_async",
            action="store_true",
            help="Submit comparisons without waiting for their results",
        )
        _ = parser.add_argument(
            "--config",
            type=str,
            metavar="PATH",
            help="Configuration file (defaults to snapdiff.toml in the project root)",
        )
        _ = parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed progress information",
        )
        _ = parser.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            Args: Processed command line arguments.

        Raises:
            ConfigError: If the configuration file cannot be read.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        # Set log level based on verbosity flags
        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        config_path = Path(parsed_args.config) if parsed_args.config else None
        configuration = Config.load(config_path)
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        command: str = parsed_args.command

        if command == "run":
            return RunArgs(
                command="run",
                only=parsed_args.only,
                is_async=parsed_args.is_async,
                report_file=Path(parsed_args.report_file) if parsed_args.report_file else None,
                config_path=config_path,
                verbose=is_verbose,
                quiet=is_quiet,
            )

        if command == "watch":
            return WatchArgs(
                command="watch",
                only=parsed_args.only,
                is_async=parsed_args.is_async,
                config_path=config_path,
                acknowledge=not parsed_args.no_ack,
                verbose=is_verbose,
                quiet=is_quiet,
            )

        logger.error("Unsupported command: %s", command)
        sys.exit(2)
