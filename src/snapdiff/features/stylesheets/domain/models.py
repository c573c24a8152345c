"""
Summary: Stylesheet descriptors and resolved CSS blocks.
Why: Give the resolver and packaging code one ordered, typed representation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from snapdiff.shared import ConfigError


@dataclass(slots=True, frozen=True)
class StylesheetDescriptor:
    """A declared stylesheet source with its optional id and conditional flag."""

    source: str
    id: str | None = None
    conditional: bool = False

    @classmethod
    def parse(cls, raw: str | Mapping[str, Any]) -> "StylesheetDescriptor":
        """Accept the string shorthand or a ``{source, id, conditional}`` table."""

        if isinstance(raw, str):
            if not raw.strip():
                raise ConfigError("Stylesheet source must not be empty")
            return cls(source=raw)

        source = raw.get("source")
        if not isinstance(source, str) or not source.strip():
            raise ConfigError(f"Stylesheet entry is missing a source: {dict(raw)!r}")
        sheet_id = raw.get("id")
        return cls(
            source=source,
            id=str(sheet_id) if sheet_id else None,
            conditional=bool(raw.get("conditional", False)),
        )


@dataclass(slots=True, frozen=True)
class CSSBlock:
    """One block of global CSS; later blocks may override earlier ones."""

    css: str
    source: str | None = None
    id: str | None = None
    conditional: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialise the block, omitting keys that were never set."""

        data: dict[str, Any] = {}
        if self.source is not None:
            data["source"] = self.source
        if self.id is not None:
            data["id"] = self.id
        if self.conditional:
            data["conditional"] = True
        data["css"] = self.css
        return data


__all__ = ["CSSBlock", "StylesheetDescriptor"]
