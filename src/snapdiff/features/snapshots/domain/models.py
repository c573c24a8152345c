"""src/snapdiff/features/snapshots/domain/models.py
Where: Snapshots feature domain layer.
What: Value objects exchanged between rendering, packaging and targets.
Why: Keep the coordinator lean by centralising type definitions.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from snapdiff.features.stylesheets import CSSBlock
from snapdiff.shared import ConfigError, Credentials

_VIEWPORT_PATTERN = re.compile(r"^\s*(\d+)\s*[xX]\s*(\d+)\s*$")


@dataclass(slots=True, frozen=True)
class Viewport:
    """Viewport dimensions in CSS pixels."""

    width: int
    height: int

    @classmethod
    def parse(cls, raw: "str | Viewport") -> "Viewport":
        """Parse ``"1024x768"`` into a viewport.

        Raises:
            ConfigError: If the value is not ``<width>x<height>``.
        """
        if isinstance(raw, Viewport):
            return raw
        match = _VIEWPORT_PATTERN.match(str(raw))
        if match is None:
            raise ConfigError(f"Invalid viewport {raw!r}, expected e.g. '1024x768'")
        width, height = int(match.group(1)), int(match.group(2))
        if width <= 0 or height <= 0:
            raise ConfigError(f"Viewport dimensions must be positive: {raw!r}")
        return cls(width=width, height=height)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(slots=True)
class SnapPayload:
    """One rendered example awaiting comparison.

    ``asset_paths`` lists public files the markup references; it is cleared
    once the payload has been packaged so it never leaks into another target.
    """

    component: str
    variant: str
    html: str = ""
    is_error: bool = False
    error: Exception | None = None
    asset_paths: list[str] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def has_error(self) -> bool:
        return self.is_error or self.error is not None

    def strip_asset_paths(self) -> None:
        self.asset_paths = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form shipped to the comparison service."""

        data: dict[str, Any] = {
            "component": self.component,
            "variant": self.variant,
            "html": self.html,
        }
        data.update(self.extra)
        return data


@dataclass(slots=True)
class RenderedTarget:
    """What a DOM provider produced for one target: target CSS and payloads."""

    css: str
    snap_payloads: list[SnapPayload]


@dataclass(slots=True, frozen=True)
class ExecutionRequest:
    """Everything a remote target needs to run its comparison."""

    target_name: str
    global_css: Sequence[CSSBlock]
    credentials: Credentials
    endpoint: str
    async_results: bool
    snap_payloads: Sequence[SnapPayload] = ()
    assets_package: str | None = None
    static_package: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body for the service's snap-request API."""

        payload: dict[str, Any] = {
            "targetName": self.target_name,
            "globalCSS": [block.to_dict() for block in self.global_css],
            "asyncResults": self.async_results,
        }
        if self.snap_payloads:
            payload["snapPayloads"] = [snap.to_dict() for snap in self.snap_payloads]
        if self.assets_package is not None:
            payload["assetsPackage"] = self.assets_package
        if self.static_package is not None:
            payload["staticPackage"] = self.static_package
        return payload


@dataclass(slots=True, frozen=True)
class TargetResult:
    """Outcome of one target: a comparison result or an async acknowledgment."""

    name: str
    result: Any


@dataclass(slots=True, frozen=True)
class EntryPoint:
    """The generated entry file handed to the bundler."""

    entry_file: Path
    files: tuple[Path, ...]

    @property
    def number_of_files_processed(self) -> int:
        return len(self.files)


__all__ = [
    "EntryPoint",
    "ExecutionRequest",
    "RenderedTarget",
    "SnapPayload",
    "TargetResult",
    "Viewport",
]
