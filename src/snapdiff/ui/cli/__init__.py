"""Command line interface package."""

from snapdiff.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
