"""
Summary: Decide how render failures of one target pass are surfaced.
Why: One failure keeps its own traceback; several are raised together.
"""

from __future__ import annotations

from collections.abc import Sequence

from snapdiff.shared import AggregateRenderError, ExampleRenderError

from ..domain.models import SnapPayload


def collect_render_errors(
    snap_payloads: Sequence[SnapPayload],
    target_name: str | None = None,
) -> list[tuple[SnapPayload, Exception]]:
    """Pair every failing payload with the error that describes it."""

    failures: list[tuple[SnapPayload, Exception]] = []
    for payload in snap_payloads:
        if not payload.has_error:
            continue
        error = payload.error
        if error is None:
            error = ExampleRenderError(payload.component, payload.variant, target_name)
        failures.append((payload, error))
    return failures


def raise_for_render_errors(
    snap_payloads: Sequence[SnapPayload],
    target_name: str | None = None,
) -> None:
    """Raise if any payload failed to render.

    Raises:
        Exception: The failing example's own error when exactly one failed.
        AggregateRenderError: Every error, in payload order, when two or more failed.
    """
    failures = collect_render_errors(snap_payloads, target_name)
    if not failures:
        return
    if len(failures) == 1:
        raise failures[0][1]
    raise AggregateRenderError(
        [error for _, error in failures],
        target_name,
        examples=[(payload.component, payload.variant) for payload, _ in failures],
    )


__all__ = ["collect_render_errors", "raise_for_render_errors"]
