"""
Summary: Ports used by the build supervisor.
Why: Keep terminal I/O out of the supersession state machine.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from snapdiff.platform.logging import BuildLogger
from snapdiff.shared import CancellationToken

from ..domain.models import AcknowledgementWait

GenerateFn = Callable[[Path, BuildLogger, CancellationToken], Awaitable[Any]]
ReadyCallback = Callable[[Any], Awaitable[None] | None]


@runtime_checkable
class AcknowledgerPort(Protocol):
    """Port producing waits that resolve once the user acknowledges."""

    def request(self) -> AcknowledgementWait:
        """Return a new wait bound to the next acknowledgment."""
        ...


__all__ = ["AcknowledgerPort", "GenerateFn", "ReadyCallback"]
