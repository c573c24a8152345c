"""
Summary: Tests for build supersession in watch mode.
Why: Only the newest build may deliver a report; superseded ones stay silent.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

from fakes import logged_events
from snapdiff.features.watch import (
    CHANGES_DETECTED_MESSAGE,
    AcknowledgementWait,
    BuildJob,
    BuildSupervisor,
    SupervisorState,
)
from snapdiff.platform.logging import BuildLogger
from snapdiff.shared import CancellationToken

B1 = Path("build-1/bundle.js")
B2 = Path("build-2/bundle.js")
B3 = Path("build-3/bundle.js")


class _FakeAcknowledger:
    """Acknowledger whose waits resolve when ``acknowledge`` is called."""

    def __init__(self) -> None:
        self.signal: asyncio.Future[Any] | None = None
        self.requests = 0

    def request(self) -> AcknowledgementWait:
        self.requests += 1
        if self.signal is None or self.signal.done():
            self.signal = asyncio.get_running_loop().create_future()
        return AcknowledgementWait(self.signal)

    def acknowledge(self) -> None:
        assert self.signal is not None
        self.signal.set_result(None)


class _Harness:
    """Supervisor wired to gated fake builds."""

    def __init__(self, acknowledger: _FakeAcknowledger | None = None) -> None:
        self.gates: dict[Path, asyncio.Event] = {}
        self.failures: dict[Path, Exception] = {}
        self.started: list[Path] = []
        self.tokens: dict[Path, CancellationToken] = {}
        self.reports: list[str] = []
        self.job_loggers: list[BuildLogger] = []
        self.log_base = MagicMock()
        self.supervisor = BuildSupervisor(
            self.generate,
            self.on_ready,
            acknowledger=acknowledger,
            logger=BuildLogger("demo", base=self.log_base),
            logger_factory=self.new_logger,
        )

    def new_logger(self) -> BuildLogger:
        logger = BuildLogger("demo", base=MagicMock())
        self.job_loggers.append(logger)
        return logger

    def gate(self, bundle: Path) -> asyncio.Event:
        return self.gates.setdefault(bundle, asyncio.Event())

    async def generate(self, bundle: Path, logger: BuildLogger, token: CancellationToken) -> str:
        self.started.append(bundle)
        self.tokens[bundle] = token
        _ = await self.gate(bundle).wait()
        if bundle in self.failures:
            raise self.failures[bundle]
        return f"report:{bundle.parent.name}"

    def on_ready(self, report: str) -> None:
        self.reports.append(report)


async def _settle() -> None:
    for _ in range(10):
        await asyncio.sleep(0)


def test_idle_build_starts_immediately_and_reports() -> None:
    async def scenario() -> _Harness:
        harness = _Harness()
        task = asyncio.ensure_future(harness.supervisor.on_build_ready(B1))
        await _settle()
        assert harness.supervisor.state is SupervisorState.BUILDING
        harness.gate(B1).set()
        await task
        return harness

    harness = asyncio.run(scenario())

    assert harness.started == [B1]
    assert harness.reports == ["report:build-1"]
    assert harness.supervisor.state is SupervisorState.IDLE


def test_superseded_build_never_reports_without_acknowledger() -> None:
    async def scenario() -> _Harness:
        harness = _Harness()
        first = asyncio.ensure_future(harness.supervisor.on_build_ready(B1))
        await _settle()
        second = asyncio.ensure_future(harness.supervisor.on_build_ready(B2))
        await _settle()

        assert harness.started == [B1, B2]
        assert harness.tokens[B1].cancelled
        assert harness.job_loggers[0].muted

        harness.gate(B1).set()
        await first
        assert harness.reports == []

        harness.gate(B2).set()
        await second
        return harness

    harness = asyncio.run(scenario())

    assert harness.reports == ["report:build-2"]
    assert harness.supervisor.state is SupervisorState.IDLE


def test_second_build_waits_for_acknowledgment() -> None:
    acknowledger = _FakeAcknowledger()

    async def scenario() -> _Harness:
        harness = _Harness(acknowledger)
        first = asyncio.ensure_future(harness.supervisor.on_build_ready(B1))
        await _settle()
        second = asyncio.ensure_future(harness.supervisor.on_build_ready(B2))
        await _settle()

        assert harness.supervisor.state is SupervisorState.AWAITING_ACK
        assert harness.started == [B1]

        # The superseded build finishes while the prompt is still open.
        harness.gate(B1).set()
        await first
        assert harness.supervisor.state is SupervisorState.AWAITING_ACK

        acknowledger.acknowledge()
        await _settle()
        assert harness.started == [B1, B2]

        harness.gate(B2).set()
        await second
        return harness

    harness = asyncio.run(scenario())

    assert harness.reports == ["report:build-2"]
    events = logged_events(harness.log_base)
    assert ("build.info", f"[demo] {CHANGES_DETECTED_MESSAGE}") in events


def test_rapid_changes_only_run_the_latest_build() -> None:
    acknowledger = _FakeAcknowledger()

    async def scenario() -> _Harness:
        harness = _Harness(acknowledger)
        first = asyncio.ensure_future(harness.supervisor.on_build_ready(B1))
        await _settle()
        second = asyncio.ensure_future(harness.supervisor.on_build_ready(B2))
        await _settle()
        third = asyncio.ensure_future(harness.supervisor.on_build_ready(B3))
        await _settle()

        acknowledger.acknowledge()
        await _settle()
        await second
        harness.gate(B1).set()
        harness.gate(B3).set()
        await asyncio.gather(first, third)
        return harness

    harness = asyncio.run(scenario())

    assert harness.started == [B1, B3]
    assert harness.reports == ["report:build-3"]
    assert acknowledger.requests == 2
    messages = [message for _, message in logged_events(harness.log_base)]
    assert messages.count(f"[demo] {CHANGES_DETECTED_MESSAGE}") == 1


def test_failing_live_build_is_logged_and_returns_to_idle() -> None:
    async def scenario() -> _Harness:
        harness = _Harness()
        harness.failures[B1] = ValueError("renderer crashed")
        harness.gate(B1).set()
        await harness.supervisor.on_build_ready(B1)
        return harness

    harness = asyncio.run(scenario())

    assert harness.reports == []
    assert harness.supervisor.state is SupervisorState.IDLE
    assert ("build.error", "[demo] renderer crashed") in logged_events(harness.log_base)


def test_failure_of_superseded_build_is_discarded() -> None:
    async def scenario() -> _Harness:
        harness = _Harness()
        harness.failures[B1] = ValueError("stale")
        first = asyncio.ensure_future(harness.supervisor.on_build_ready(B1))
        await _settle()
        second = asyncio.ensure_future(harness.supervisor.on_build_ready(B2))
        await _settle()
        harness.gate(B1).set()
        harness.gate(B2).set()
        await asyncio.gather(first, second)
        return harness

    harness = asyncio.run(scenario())

    assert harness.reports == ["report:build-2"]
    assert all(event != "build.error" for event, _ in logged_events(harness.log_base))


def test_build_job_cancel_flags_token_and_mutes_logger() -> None:
    job = BuildJob(B1, BuildLogger(base=MagicMock()))

    job.cancel()

    assert job.cancelled
    assert job.token.cancelled
    assert job.logger.muted


def test_cancelled_wait_keeps_flag() -> None:
    async def scenario() -> AcknowledgementWait:
        signal: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        wait = AcknowledgementWait(signal)
        wait.cancel()
        signal.set_result(None)
        await wait
        return wait

    wait = asyncio.run(scenario())

    assert wait.cancelled
    assert wait.done
