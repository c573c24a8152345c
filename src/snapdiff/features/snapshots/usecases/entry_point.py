"""src/snapdiff/features/snapshots/usecases/entry_point.py
What: Discover example files and write the entry manifest the bundler reads.
Why: The bundle must contain exactly the examples selected for this run.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Final

from snapdiff.config.file_ops import write_text_file
from snapdiff.platform.logging import logger

from ..domain.models import EntryPoint

ENTRY_FILE_NAME: Final[str] = "entry.json"
DEBUG_INDEX_FILE_NAME: Final[str] = "index.html"
_SKIPPED_DIRS: Final[frozenset[str]] = frozenset({"node_modules", ".git", ".snapdiff"})

_DEBUG_INDEX_HTML: Final[str] = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <title>snapdiff debug</title>
  </head>
  <body>
    <div id="snapdiff-root"></div>
    <script src="bundle.js"></script>
  </body>
</html>
"""


def _matches_only(path: Path, only: str | None) -> bool:
    if not only:
        return True
    return only.lower() in path.stem.lower()


def discover_example_files(root_dir: Path, include: str, only: str | None = None) -> list[Path]:
    """Return example files under ``root_dir`` matching ``include`` and ``only``."""

    files: list[Path] = []
    for path in sorted(root_dir.glob(include)):
        relative_parts = path.relative_to(root_dir).parts
        if any(part in _SKIPPED_DIRS for part in relative_parts[:-1]):
            continue
        if path.is_file() and _matches_only(path, only):
            files.append(path)
    return files


def _write_entry(root_dir: Path, include: str, only: str | None, tmpdir: Path) -> EntryPoint:
    files = discover_example_files(root_dir, include, only)
    entry_file = tmpdir / ENTRY_FILE_NAME
    manifest = {
        "root": str(root_dir),
        "only": only,
        "files": [path.relative_to(root_dir).as_posix() for path in files],
    }
    write_text_file(entry_file, json.dumps(manifest, indent=2))
    logger.debug("Wrote entry manifest with %d file(s) to %s", len(files), entry_file)
    return EntryPoint(entry_file=entry_file, files=tuple(files))


async def create_dynamic_entry_point(
    *,
    root_dir: Path,
    include: str,
    tmpdir: Path,
    only: str | None = None,
) -> EntryPoint:
    """Discover example files and write ``entry.json`` into ``tmpdir``.

    Finding no example is not an error; the run then has nothing to render.
    """
    return await asyncio.to_thread(_write_entry, root_dir, include, only, tmpdir)


def write_debug_index(tmpdir: Path) -> Path:
    """Write the HTML page used to inspect the bundle in a browser."""

    path = tmpdir / DEBUG_INDEX_FILE_NAME
    write_text_file(path, _DEBUG_INDEX_HTML)
    return path


__all__ = [
    "DEBUG_INDEX_FILE_NAME",
    "ENTRY_FILE_NAME",
    "create_dynamic_entry_point",
    "discover_example_files",
    "write_debug_index",
]
