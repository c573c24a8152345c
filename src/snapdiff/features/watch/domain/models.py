"""src/snapdiff/features/watch/domain/models.py
Where: Watch feature domain layer.
What: Build jobs, supervisor states and acknowledgment waits.
Why: Give the supersession state machine explicit, testable pieces.
"""

from __future__ import annotations

import asyncio
from collections.abc import Generator
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any

from snapdiff.platform.logging import BuildLogger
from snapdiff.shared import CancellationToken


class SupervisorState(StrEnum):
    IDLE = "idle"
    BUILDING = "building"
    AWAITING_ACK = "awaiting_ack"


@dataclass(slots=True)
class BuildJob:
    """One orchestration run started for a freshly built bundle."""

    bundle_file: Path
    logger: BuildLogger
    token: CancellationToken = field(default_factory=CancellationToken)

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    def cancel(self) -> None:
        """Flag the job as superseded and silence its output."""

        self.token.cancel("superseded by a newer build")
        self.logger.mute()


class AcknowledgementWait:
    """A cancellable wait on a shared acknowledgment signal.

    Several waits may share one signal; each keeps its own ``cancelled``
    flag so the supervisor can tell a superseded wait from the live one.
    Awaiting a wait never cancels the shared signal.
    """

    def __init__(self, signal: asyncio.Future[Any]) -> None:
        self._signal: asyncio.Future[Any] = signal
        self.cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def done(self) -> bool:
        return self._signal.done()

    def __await__(self) -> Generator[Any, None, None]:
        _ = yield from asyncio.shield(self._signal).__await__()


__all__ = ["AcknowledgementWait", "BuildJob", "SupervisorState"]
