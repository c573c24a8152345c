"""
Summary: Ports defining asset packaging and upload dependencies.
Why: Decouple the cache and packaging from transport and payload types.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class UploaderPort(Protocol):
    """Port that stores an archive remotely and returns where it lives."""

    async def upload(self, buffer: bytes, package_hash: str) -> str:
        """Upload ``buffer`` and return its location."""
        ...


@runtime_checkable
class PackageablePayload(Protocol):
    """Subset of a snapshot payload needed to build an assets archive."""

    asset_paths: Sequence[str] | None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-serialisable form stored in the archive."""
        ...


__all__ = ["PackageablePayload", "UploaderPort"]
