"""Where: src/snapdiff/features/watch/adapters/terminal_ack.py
What: Acknowledgments read from the terminal with the rich console.
Why: Lets the user inspect output before the next build overwrites it.
"""

from __future__ import annotations

import asyncio
import sys
import threading
from typing import Any

from rich.console import Console

from snapdiff.platform.logging import logger

from ..domain.models import AcknowledgementWait


class TerminalAcknowledger:
    """Resolve every pending wait on the next Enter key press.

    A single daemon reader thread serves all waits requested before the key
    press, so rapid successive requests never stack up blocked readers. The
    reader is a daemon thread and never blocks interpreter exit.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console: Console = console or Console()
        self._signal: asyncio.Future[Any] | None = None

    @staticmethod
    def is_supported() -> bool:
        """Return whether stdin is an interactive terminal."""

        return sys.stdin is not None and sys.stdin.isatty()

    def request(self) -> AcknowledgementWait:
        if self._signal is None or self._signal.done():
            self._signal = self._start_reader()
        return AcknowledgementWait(self._signal)

    def _start_reader(self) -> asyncio.Future[Any]:
        loop = asyncio.get_running_loop()
        signal: asyncio.Future[Any] = loop.create_future()

        def _resolve(value: Any) -> None:
            if not signal.done():
                signal.set_result(value)

        def _read() -> None:
            try:
                line = self._console.input()
            except (EOFError, OSError) as exc:
                # A closed stdin resolves the wait.
                logger.debug("Acknowledgment input unavailable: %s", exc)
                line = None
            try:
                _ = loop.call_soon_threadsafe(_resolve, line)
            except RuntimeError:
                # Event loop already closed; nobody is waiting any more.
                return

        threading.Thread(target=_read, name="snapdiff-ack-reader", daemon=True).start()
        return signal


__all__ = ["TerminalAcknowledger"]
