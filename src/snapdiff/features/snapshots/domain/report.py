"""
Summary: Report assembled from per-target results.
Why: Ship one ordered document once every synchronous comparison finished.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from .models import TargetResult


@dataclass(slots=True, frozen=True)
class ReportEntry:
    """One target's comparison outcome."""

    target_name: str
    result: Any


@dataclass(slots=True, frozen=True)
class Report:
    """Ordered collection of target outcomes, in declared target order."""

    entries: tuple[ReportEntry, ...]

    def __iter__(self) -> Iterator[ReportEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def target_names(self) -> list[str]:
        return [entry.target_name for entry in self.entries]

    def to_dict(self) -> dict[str, Any]:
        return {
            "results": [
                {"target": entry.target_name, "result": entry.result} for entry in self.entries
            ]
        }


def construct_report(results: Sequence[TargetResult]) -> Report:
    """Build a report from target results, keeping the order given."""

    return Report(entries=tuple(ReportEntry(target_name=r.name, result=r.result) for r in results))


__all__ = ["Report", "ReportEntry", "construct_report"]
