"""
Summary: Ports defining snapshot orchestration collaborators.
Why: Decouple the coordinator from renderers, bundlers and remote services.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from ..domain.models import ExecutionRequest, RenderedTarget, Viewport


@runtime_checkable
class DomProviderPort(Protocol):
    """Port rendering every example of a bundle for one viewport."""

    async def render(
        self,
        bundle_file: Path,
        *,
        target_name: str,
        viewport: Viewport,
        public_folders: Sequence[Path],
    ) -> RenderedTarget:
        """Render all examples; failing examples are flagged, not raised."""
        ...


@runtime_checkable
class RemoteTargetPort(Protocol):
    """Port for a rendering environment able to run comparisons."""

    viewport: Viewport

    async def execute(self, request: ExecutionRequest) -> Any:
        """Run the comparison, or submit it when ``request.async_results`` is set."""
        ...


BuildReadyCallback = Callable[[Path], Awaitable[None]]


@runtime_checkable
class BundlerPort(Protocol):
    """Port producing the bundle that DOM providers and targets consume."""

    async def build(self, entry_file: Path) -> Path:
        """Build once and return the bundle file."""
        ...

    async def watch(self, entry_file: Path, on_build_ready: BuildReadyCallback) -> None:
        """Rebuild on every source change, notifying ``on_build_ready`` each time."""
        ...


__all__ = ["BuildReadyCallback", "BundlerPort", "DomProviderPort", "RemoteTargetPort"]
