"""
Summary: Content-addressed asset bundles.
Why: Identity is the archive hash, never the target that produced it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class AssetsPackage:
    """A zipped bundle awaiting upload, identified by its content hash."""

    buffer: bytes
    hash: str

    @property
    def size(self) -> int:
        return len(self.buffer)

    def __repr__(self) -> str:
        return f"AssetsPackage(hash={self.hash!r}, size={self.size})"


__all__ = ["AssetsPackage"]
