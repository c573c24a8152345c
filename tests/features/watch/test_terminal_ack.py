"""
Summary: Tests for terminal acknowledgments.
Why: All pending waits must resolve on a single key press.
"""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

from snapdiff.features.watch import TerminalAcknowledger


def test_pending_waits_share_one_reader() -> None:
    console = MagicMock()
    console.input.return_value = ""
    acknowledger = TerminalAcknowledger(console)

    async def scenario() -> None:
        first = acknowledger.request()
        second = acknowledger.request()
        await asyncio.wait_for(asyncio.gather(first, second), timeout=5)

    asyncio.run(scenario())

    assert console.input.call_count == 1


def test_closed_stdin_resolves_the_wait() -> None:
    console = MagicMock()
    console.input.side_effect = EOFError()
    acknowledger = TerminalAcknowledger(console)

    async def scenario() -> None:
        await asyncio.wait_for(acknowledger.request(), timeout=5)

    asyncio.run(scenario())

    console.input.assert_called_once()
