"""
Summary: Cooperative cancellation token for orchestration runs.
Why: A superseded build stops at its next suspension point, never mid-I/O.
"""

from __future__ import annotations

from .errors import BuildCancelledError


class CancellationToken:
    """Flag checked by long-running work at its suspension points."""

    __slots__ = ("_cancelled", "_reason")

    def __init__(self) -> None:
        self._cancelled: bool = False
        self._reason: str | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Mark the owning work as superseded; repeated calls keep the first reason."""

        if not self._cancelled:
            self._cancelled = True
            self._reason = reason

    def raise_if_cancelled(self) -> None:
        """Raise ``BuildCancelledError`` when the token has been cancelled."""

        if self._cancelled:
            raise BuildCancelledError(self._reason or "Build was superseded")


__all__ = ["CancellationToken"]
