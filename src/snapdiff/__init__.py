"""snapdiff: visual-diff snapshot orchestration across rendering targets."""

__version__ = "0.1.0"
