"""Adapters for watch mode."""

from .terminal_ack import TerminalAcknowledger

__all__ = ["TerminalAcknowledger"]
