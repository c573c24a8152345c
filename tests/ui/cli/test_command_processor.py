"""Tests for the command processor exit codes."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from snapdiff.shared import AggregateRenderError, BundleError, ExampleRenderError
from snapdiff.ui.cli import CommandProcessor, main
from snapdiff.ui.cli.args.options import RunArgs, WatchArgs


def _run_args() -> RunArgs:
    return RunArgs(
        command="run",
        only=None,
        is_async=False,
        report_file=None,
        config_path=Path("snapdiff.toml"),
        verbose=False,
        quiet=False,
    )


def test_run_success_returns_normally(mocker: MockerFixture) -> None:
    _ = mocker.patch("snapdiff.ui.cli.cli.ArgumentParser.process_args", return_value=_run_args())
    run_command = mocker.patch("snapdiff.ui.cli.cli.RunCommand")

    CommandProcessor.process_command(["run"])

    run_command.return_value.execute.assert_called_once_with()


def test_watch_args_dispatch_to_watch_command(mocker: MockerFixture) -> None:
    args = WatchArgs(
        command="watch",
        only=None,
        is_async=False,
        config_path=None,
        acknowledge=True,
        verbose=False,
        quiet=False,
    )
    _ = mocker.patch("snapdiff.ui.cli.cli.ArgumentParser.process_args", return_value=args)
    watch_command = mocker.patch("snapdiff.ui.cli.cli.WatchCommand")

    CommandProcessor.process_command(["watch"])

    watch_command.assert_called_once_with(args)


def test_snapdiff_errors_exit_with_one(mocker: MockerFixture) -> None:
    _ = mocker.patch("snapdiff.ui.cli.cli.ArgumentParser.process_args", return_value=_run_args())
    run_command = mocker.patch("snapdiff.ui.cli.cli.RunCommand")
    run_command.return_value.execute.side_effect = BundleError("webpack failed")
    log_error = mocker.patch("snapdiff.ui.cli.cli.logger.error")

    with pytest.raises(SystemExit) as exc_info:
        CommandProcessor.process_command(["run"])

    assert exc_info.value.code == 1
    log_error.assert_called_once()


def test_aggregate_errors_list_every_failure(mocker: MockerFixture) -> None:
    _ = mocker.patch("snapdiff.ui.cli.cli.ArgumentParser.process_args", return_value=_run_args())
    run_command = mocker.patch("snapdiff.ui.cli.cli.RunCommand")
    run_command.return_value.execute.side_effect = AggregateRenderError(
        [ExampleRenderError("A", "x"), ExampleRenderError("B", "y")],
        "desktop",
        examples=[("A", "x"), ("B", "y")],
    )
    display_cls = mocker.patch("snapdiff.ui.cli.cli.ReportDisplay")

    with pytest.raises(SystemExit) as exc_info:
        CommandProcessor.process_command(["run"])

    assert exc_info.value.code == 1
    shown = display_cls.return_value.show_render_failures.call_args.args[0]
    assert isinstance(shown, AggregateRenderError)
    assert [example for example, _ in shown.failures] == [("A", "x"), ("B", "y")]


def test_keyboard_interrupt_exits_with_130(mocker: MockerFixture) -> None:
    _ = mocker.patch(
        "snapdiff.ui.cli.cli.ArgumentParser.process_args", side_effect=KeyboardInterrupt()
    )

    with pytest.raises(SystemExit) as exc_info:
        CommandProcessor.process_command(["watch"])

    assert exc_info.value.code == 130


def test_unexpected_errors_exit_with_one(mocker: MockerFixture) -> None:
    _ = mocker.patch(
        "snapdiff.ui.cli.cli.ArgumentParser.process_args", side_effect=RuntimeError("kaboom")
    )

    with pytest.raises(SystemExit) as exc_info:
        CommandProcessor.process_command(["run"])

    assert exc_info.value.code == 1


def test_main_returns_zero_on_success(mocker: MockerFixture) -> None:
    process = mocker.patch.object(CommandProcessor, "process_command", MagicMock())

    assert main() == 0
    process.assert_called_once_with()
