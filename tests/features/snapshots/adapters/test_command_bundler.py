"""
Summary: Tests for the command bundler adapter.
Why: Bundle failures must surface as BundleError and watch must rebuild on change.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest

from snapdiff.features.snapshots.adapters import CommandBundler
from snapdiff.shared import BundleError

WRITE_BUNDLE = (
    "import os, pathlib; "
    "out = pathlib.Path(os.environ['SNAPDIFF_OUTPUT']); "
    "out.parent.mkdir(parents=True, exist_ok=True); "
    "out.write_text('bundle of ' + os.environ['SNAPDIFF_ENTRY'])"
)


def _bundler(tmp_path: Path, command: list[str], interval: float = 1.0) -> CommandBundler:
    return CommandBundler(
        command,
        output_dir=tmp_path / ".snapdiff",
        watch_root=tmp_path,
        interval=interval,
    )


def test_build_runs_command_with_entry_and_output(tmp_path: Path) -> None:
    bundler = _bundler(tmp_path, [sys.executable, "-c", WRITE_BUNDLE])
    entry = tmp_path / ".snapdiff" / "entry.json"

    bundle_file = asyncio.run(bundler.build(entry))

    assert bundle_file == tmp_path / ".snapdiff" / "bundle.js"
    assert bundle_file.read_text() == f"bundle of {entry}"


def test_non_zero_exit_raises_bundle_error(tmp_path: Path) -> None:
    bundler = _bundler(tmp_path, [sys.executable, "-c", "import sys; print('syntax error'); sys.exit(3)"])

    with pytest.raises(BundleError, match="status 3"):
        _ = asyncio.run(bundler.build(tmp_path / "entry.json"))


def test_missing_command_raises_bundle_error(tmp_path: Path) -> None:
    with pytest.raises(BundleError):
        _ = asyncio.run(_bundler(tmp_path, []).build(tmp_path / "entry.json"))


def test_unknown_executable_raises_bundle_error(tmp_path: Path) -> None:
    bundler = _bundler(tmp_path, ["snapdiff-no-such-bundler-binary"])

    with pytest.raises(BundleError):
        _ = asyncio.run(bundler.build(tmp_path / "entry.json"))


def test_watch_rebuilds_when_sources_change(tmp_path: Path) -> None:
    _ = (tmp_path / "Button-snapdiff.js").write_text("v1")
    bundler = _bundler(tmp_path, [sys.executable, "-c", WRITE_BUNDLE], interval=0.01)
    ready: list[Path] = []

    async def scenario() -> None:
        second_build = asyncio.Event()

        async def on_ready(bundle_file: Path) -> None:
            ready.append(bundle_file)
            if len(ready) == 1:
                _ = (tmp_path / "Card-snapdiff.js").write_text("new example")
            else:
                second_build.set()

        watcher = asyncio.ensure_future(bundler.watch(tmp_path / "entry.json", on_ready))
        try:
            _ = await asyncio.wait_for(second_build.wait(), timeout=30)
        finally:
            _ = watcher.cancel()
            _ = await asyncio.gather(watcher, return_exceptions=True)

    asyncio.run(scenario())

    assert len(ready) >= 2
    assert all(path == tmp_path / ".snapdiff" / "bundle.js" for path in ready)
