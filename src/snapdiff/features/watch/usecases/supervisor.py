"""src/snapdiff/features/watch/usecases/supervisor.py
What: Supersede in-flight orchestration runs when a new bundle is ready.
Why: In watch mode only the newest build may deliver a report.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from pathlib import Path

from snapdiff.platform.logging import BuildLogger
from snapdiff.shared import BuildCancelledError

from ..domain.models import AcknowledgementWait, BuildJob, SupervisorState
from .ports import AcknowledgerPort, GenerateFn, ReadyCallback

CHANGES_DETECTED_MESSAGE = "Changes detected. Press Enter to continue."


class BuildSupervisor:
    """State machine deciding which build may run and report.

    ``on_build_ready`` is called once per bundle. While idle the build starts
    at once. While a build runs, that build is cancelled and muted, and the
    next one waits for an acknowledgment when an acknowledger is configured.
    Results of cancelled builds are discarded, failures included.
    """

    def __init__(
        self,
        generate: GenerateFn,
        on_ready: ReadyCallback,
        *,
        acknowledger: AcknowledgerPort | None,
        logger: BuildLogger,
        logger_factory: Callable[[], BuildLogger],
    ) -> None:
        self._generate: GenerateFn = generate
        self._on_ready: ReadyCallback = on_ready
        self._acknowledger: AcknowledgerPort | None = acknowledger
        self._logger: BuildLogger = logger
        self._logger_factory: Callable[[], BuildLogger] = logger_factory
        self._current: BuildJob | None = None
        self._pending_wait: AcknowledgementWait | None = None

    @property
    def state(self) -> SupervisorState:
        if self._pending_wait is not None:
            return SupervisorState.AWAITING_ACK
        if self._current is not None:
            return SupervisorState.BUILDING
        return SupervisorState.IDLE

    @property
    def current_job(self) -> BuildJob | None:
        return self._current

    async def on_build_ready(self, bundle_file: Path) -> None:
        if self.state is SupervisorState.IDLE:
            self._logger.success()
            await self._run(BuildJob(bundle_file, self._logger_factory()))
            return

        if self._current is not None:
            self._current.cancel()

        if self._acknowledger is not None:
            if self._pending_wait is None:
                self._logger.divider()
                self._logger.info(CHANGES_DETECTED_MESSAGE)
            else:
                self._pending_wait.cancel()
            wait = self._acknowledger.request()
            self._pending_wait = wait
            await wait
            if wait.cancelled:
                return
            self._pending_wait = None

        self._logger.divider()
        await self._run(BuildJob(bundle_file, self._logger_factory()))

    async def _run(self, job: BuildJob) -> None:
        self._current = job
        try:
            report = await self._generate(job.bundle_file, job.logger, job.token)
        except BuildCancelledError:
            return
        except Exception as exc:
            if not job.cancelled:
                self._logger.error(exc)
            return
        finally:
            if self._current is job:
                self._current = None

        if job.cancelled:
            return
        try:
            outcome = self._on_ready(report)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as exc:
            self._logger.error(exc)


__all__ = ["CHANGES_DETECTED_MESSAGE", "BuildSupervisor"]
