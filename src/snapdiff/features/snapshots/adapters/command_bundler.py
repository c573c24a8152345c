"""Where: src/snapdiff/features/snapshots/adapters/command_bundler.py
What: Bundler adapter that shells out to the configured bundle command.
Why: snapdiff stays agnostic of the JavaScript toolchain producing bundles.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from snapdiff.platform.logging import logger
from snapdiff.shared import BundleError

from ..usecases.ports import BuildReadyCallback

BUNDLE_FILE_NAME: Final[str] = "bundle.js"
_IGNORED_DIRS: Final[frozenset[str]] = frozenset({"node_modules", "__pycache__"})

Snapshot = dict[Path, float]


class CommandBundler:
    """Run ``command`` to turn the entry manifest into ``bundle.js``.

    The command receives the manifest and output locations through the
    ``SNAPDIFF_ENTRY`` and ``SNAPDIFF_OUTPUT`` environment variables.
    """

    def __init__(
        self,
        command: Sequence[str],
        *,
        output_dir: Path,
        watch_root: Path,
        interval: float = 1.0,
    ) -> None:
        self._command: list[str] = list(command)
        self._output_dir: Path = output_dir
        self._watch_root: Path = watch_root
        self._interval: float = interval
        self._callbacks: set[asyncio.Task[None]] = set()

    @property
    def bundle_file(self) -> Path:
        return self._output_dir / BUNDLE_FILE_NAME

    async def build(self, entry_file: Path) -> Path:
        """Run the bundle command once.

        Raises:
            BundleError: If no command is configured, it cannot start, exits
                non-zero, or leaves no bundle behind.
        """
        if not self._command:
            raise BundleError("No bundle_command configured")

        env = {
            **os.environ,
            "SNAPDIFF_ENTRY": str(entry_file),
            "SNAPDIFF_OUTPUT": str(self.bundle_file),
        }
        logger.debug("Running bundle command: %s", " ".join(self._command))
        try:
            process = await asyncio.create_subprocess_exec(
                *self._command,
                cwd=str(self._watch_root),
                env=env,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as exc:
            raise BundleError(f"Failed to start bundle command {self._command[0]!r}: {exc}") from exc

        try:
            output, _ = await process.communicate()
        except asyncio.CancelledError:
            if process.returncode is None:
                process.kill()
            raise

        text = output.decode("utf-8", errors="replace").strip() if output else ""
        if process.returncode != 0:
            raise BundleError(f"Bundle command exited with status {process.returncode}: {text[-2000:]}")
        if text:
            logger.debug("Bundle command output:\n%s", text)
        if not self.bundle_file.exists():
            raise BundleError(f"Bundle command did not produce {self.bundle_file}")
        return self.bundle_file

    async def watch(self, entry_file: Path, on_build_ready: BuildReadyCallback) -> None:
        """Rebuild whenever a source file changes, forever.

        Build failures are logged and the watch carries on. ``on_build_ready``
        is scheduled as a task so a slow consumer never delays change
        detection.
        """
        previous: Snapshot | None = None
        try:
            while True:
                current = await asyncio.to_thread(self._snapshot)
                if current != previous:
                    previous = current
                    await self._rebuild(entry_file, on_build_ready)
                await asyncio.sleep(self._interval)
        finally:
            for task in self._callbacks:
                _ = task.cancel()

    async def _rebuild(self, entry_file: Path, on_build_ready: BuildReadyCallback) -> None:
        try:
            bundle_file = await self.build(entry_file)
        except BundleError as exc:
            logger.error("%s", exc)
            return
        task = asyncio.ensure_future(on_build_ready(bundle_file))
        self._callbacks.add(task)
        task.add_done_callback(self._callbacks.discard)

    def _snapshot(self) -> Snapshot:
        output_dir = self._output_dir.resolve()
        snapshot: Snapshot = {}
        for dirpath, dirnames, filenames in os.walk(self._watch_root):
            current = Path(dirpath)
            dirnames[:] = [
                name
                for name in dirnames
                if not name.startswith(".")
                and name not in _IGNORED_DIRS
                and (current / name).resolve() != output_dir
            ]
            for filename in filenames:
                path = current / filename
                try:
                    snapshot[path] = path.stat().st_mtime
                except FileNotFoundError:
                    continue
        return snapshot


__all__ = ["BUNDLE_FILE_NAME", "CommandBundler"]
