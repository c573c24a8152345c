"""Tests for outcome rendering."""

from io import StringIO

from rich.console import Console

from snapdiff.features.snapshots import TargetResult, construct_report
from snapdiff.shared import AggregateRenderError
from snapdiff.ui.cli.display import ReportDisplay, outcome_to_dict


def _display() -> tuple[ReportDisplay, StringIO]:
    buffer = StringIO()
    return ReportDisplay(Console(file=buffer, width=120)), buffer


def test_report_lists_targets_in_order() -> None:
    display, buffer = _display()

    display.show_outcome(
        construct_report([TargetResult("mobile", {"summary": "ok"}), TargetResult("desktop", None)])
    )

    output = buffer.getvalue()
    assert output.index("mobile") < output.index("desktop")
    assert "skipped (no examples)" in output


def test_quiet_suppresses_output() -> None:
    display, buffer = _display()

    display.show_outcome(construct_report([TargetResult("mobile", None)]), quiet=True)

    assert buffer.getvalue() == ""


def test_acknowledgements_are_listed() -> None:
    display, buffer = _display()

    display.show_outcome([TargetResult("chrome", {"requestId": 12})])

    assert "chrome: 12" in buffer.getvalue()


def test_render_failures_show_each_example() -> None:
    display, buffer = _display()
    error = AggregateRenderError(
        [ValueError("bad markup"), KeyError("prop")],
        "desktop",
        examples=[("Card", "dark"), ("Button", "large")],
    )

    display.show_render_failures(error)

    output = buffer.getvalue()
    assert "2 examples failed to render in target desktop" in output
    assert "Card/dark: bad markup" in output
    assert "Button/large" in output


def test_outcome_to_dict_for_report() -> None:
    report = construct_report([TargetResult("mobile", {"summary": "ok"})])

    assert outcome_to_dict(report) == {"results": [{"target": "mobile", "result": {"summary": "ok"}}]}
