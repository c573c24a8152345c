"""
Summary: Ports for stylesheet loading.
Why: Let the resolver run against files, URLs or in-memory fakes alike.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class StylesheetLoaderPort(Protocol):
    """Port returning the CSS text behind a declared source."""

    async def load(self, source: str) -> str:
        """Return the stylesheet text for ``source``."""
        ...


__all__ = ["StylesheetLoaderPort"]
