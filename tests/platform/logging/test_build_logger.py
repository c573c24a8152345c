"""
Summary: Tests for the step-oriented build logger.
Why: Muted loggers must stay silent and steps must carry timings.
"""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

from snapdiff.platform.logging import BuildEvent, BuildLogger, log_tag


def _extra(log_base: MagicMock, index: int = -1) -> dict[str, object]:
    return log_base.log.call_args_list[index].kwargs["extra"]


def test_log_tag() -> None:
    assert log_tag("web") == "[web] "
    assert log_tag(None) == ""


def test_step_success_reports_duration() -> None:
    base = MagicMock()
    ticks = iter([1.0, 1.25])
    logger = BuildLogger("web", base=base, clock=lambda: next(ticks))

    logger.start("Creating bundle...")
    logger.success()

    level, _, message = base.log.call_args.args
    assert level == logging.INFO
    assert message == "[web] Creating bundle..."
    extra = _extra(base)
    assert extra["snapdiff_event"] == BuildEvent.STEP_SUCCESS.value
    assert extra["duration_ms"] == 250.0


def test_fail_attaches_error_message() -> None:
    base = MagicMock()
    logger = BuildLogger(base=base)

    logger.start("Generating screenshots")
    logger.fail(ValueError("boom"))

    extra = _extra(base)
    assert extra["snapdiff_event"] == BuildEvent.STEP_FAIL.value
    assert extra["error_message"] == "boom"


def test_success_without_open_step_is_silent() -> None:
    base = MagicMock()

    BuildLogger(base=base).success()

    base.log.assert_not_called()


def test_muted_logger_drops_everything() -> None:
    base = MagicMock()
    logger = BuildLogger("web", base=base)

    logger.mute()
    logger.start("x")
    logger.success()
    logger.info("y")
    logger.error(RuntimeError("z"))
    logger.divider()

    assert logger.muted
    base.log.assert_not_called()


def test_artifact_carries_path() -> None:
    base = MagicMock()

    BuildLogger(base=base).artifact("Recorded CSS in", "/tmp/out.css")

    assert _extra(base)["artifact_path"] == "/tmp/out.css"
