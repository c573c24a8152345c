"""Where: src/snapdiff/platform/logging/build_logger.py
What: Step-oriented logger used by one orchestration run.
Why: Watch mode must silence a superseded run without touching global logging.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from .config import logger as app_logger


class BuildEvent(StrEnum):
    """Structured event identifiers emitted by ``BuildLogger``."""

    STEP_START = "build.step.start"
    STEP_SUCCESS = "build.step.success"
    STEP_FAIL = "build.step.fail"
    INFO = "build.info"
    WARNING = "build.warning"
    ERROR = "build.error"
    ARTIFACT = "build.artifact"
    DIVIDER = "build.divider"


def log_tag(project: str | None) -> str:
    """Return the ``[project] `` prefix used on every build line."""

    return f"[{project}] " if project else ""


class BuildLogger:
    """Track the currently running step and emit structured build events.

    A step is opened with ``start`` and closed with ``success`` or ``fail``;
    the elapsed time is attached to the closing record. Once ``mute`` has been
    called the logger drops every further message.
    """

    def __init__(
        self,
        project: str | None = None,
        *,
        base: logging.Logger | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._base: logging.Logger = base or app_logger
        self._clock: Callable[[], float] = clock
        self._tag: str = log_tag(project)
        self._muted: bool = False
        self._step: str | None = None
        self._step_started: float | None = None

    @property
    def muted(self) -> bool:
        return self._muted

    @property
    def tag(self) -> str:
        return self._tag

    def now(self) -> float:
        """Return the clock reading used for step timings."""

        return self._clock()

    def mute(self) -> None:
        """Drop every message logged from now on."""

        self._muted = True

    def start(self, message: str, *, start_time: float | None = None) -> None:
        self._step = f"{self._tag}{message}"
        self._step_started = start_time if start_time is not None else self._clock()
        self._emit(logging.DEBUG, BuildEvent.STEP_START, self._step)

    def success(self, message: str | None = None) -> None:
        step = self._step
        if step is None and message is None:
            return
        text = step or ""
        if message:
            text = f"{text} {message}".strip()
        self._emit(logging.INFO, BuildEvent.STEP_SUCCESS, text, duration_ms=self._elapsed_ms())
        self._clear_step()

    def fail(self, error: BaseException | str | None = None) -> None:
        text = self._step or "Failed"
        extra: dict[str, Any] = {"duration_ms": self._elapsed_ms()}
        if error is not None:
            extra["error_message"] = str(error) or type(error).__name__
        self._emit(logging.ERROR, BuildEvent.STEP_FAIL, text, **extra)
        self._clear_step()

    def info(self, message: str) -> None:
        self._emit(logging.INFO, BuildEvent.INFO, f"{self._tag}{message}")

    def warning(self, message: str) -> None:
        self._emit(logging.WARNING, BuildEvent.WARNING, f"{self._tag}{message}")

    def error(self, error: BaseException | str) -> None:
        if isinstance(error, BaseException):
            message = str(error) or type(error).__name__
            self._emit(logging.ERROR, BuildEvent.ERROR, f"{self._tag}{message}", exc_info=error)
            return
        self._emit(logging.ERROR, BuildEvent.ERROR, f"{self._tag}{error}")

    def artifact(self, message: str, path: object) -> None:
        self._emit(logging.INFO, BuildEvent.ARTIFACT, f"{self._tag}{message}", artifact_path=str(path))

    def divider(self) -> None:
        self._emit(logging.INFO, BuildEvent.DIVIDER, "")

    def _elapsed_ms(self) -> float | None:
        if self._step_started is None:
            return None
        return (self._clock() - self._step_started) * 1000.0

    def _clear_step(self) -> None:
        self._step = None
        self._step_started = None

    def _emit(
        self,
        level: int,
        event: BuildEvent,
        message: str,
        *,
        exc_info: BaseException | None = None,
        **context: Any,
    ) -> None:
        if self._muted:
            return
        extra = {"snapdiff_event": event.value, **context}
        self._base.log(level, "%s", message, extra=extra, exc_info=exc_info)


__all__ = ["BuildEvent", "BuildLogger", "log_tag"]
