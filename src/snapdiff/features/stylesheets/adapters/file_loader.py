"""Where: src/snapdiff/features/stylesheets/adapters/file_loader.py
What: Load stylesheet sources from the local filesystem.
Why: Keep blocking file reads off the event loop.
"""

from __future__ import annotations

import asyncio
from pathlib import Path


class FileStylesheetLoader:
    """Read UTF-8 stylesheets relative to a base directory."""

    def __init__(self, base_dir: Path) -> None:
        self._base_dir: Path = base_dir

    def resolve(self, source: str) -> Path:
        path = Path(source).expanduser()
        return path if path.is_absolute() else self._base_dir / path

    async def load(self, source: str) -> str:
        path = self.resolve(source)
        return await asyncio.to_thread(path.read_text, encoding="utf-8")


__all__ = ["FileStylesheetLoader"]
