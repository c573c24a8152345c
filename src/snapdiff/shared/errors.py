"""
Summary: Error taxonomy shared by every snapdiff layer.
Why: Let the CLI and supervisor tell domain failures apart from crashes.
"""

from __future__ import annotations

from collections.abc import Sequence


class SnapdiffError(Exception):
    """Base class for all expected snapdiff failures."""


class ConfigError(SnapdiffError):
    """Raised when configuration is missing, malformed or inconsistent."""


class StylesheetLoadError(SnapdiffError):
    """Raised when a declared stylesheet source cannot be loaded."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Failed to load stylesheet {source}: {reason}")
        self.source: str = source


class ExampleRenderError(SnapdiffError):
    """A single example failed to render for a target."""

    def __init__(
        self,
        component: str,
        variant: str,
        target_name: str | None = None,
        message: str | None = None,
    ) -> None:
        where = f"{component}/{variant}"
        if target_name:
            where = f"{where} in target {target_name}"
        detail = message or "render failed"
        super().__init__(f"Error rendering {where}: {detail}")
        self.component: str = component
        self.variant: str = variant
        self.target_name: str | None = target_name


def _summarize(errors: Sequence[Exception], target_name: str | None) -> str:
    suffix = f" in target {target_name}" if target_name else ""
    return f"{len(errors)} examples failed to render{suffix}"


class AggregateRenderError(SnapdiffError, ExceptionGroup):
    """Several examples failed in one target pass.

    The underlying errors stay available, in payload order, through
    ``exceptions``; ``failures`` pairs each one with its example.
    """

    def __new__(
        cls,
        errors: Sequence[Exception],
        target_name: str | None = None,
        examples: Sequence[tuple[str, str]] | None = None,
    ) -> "AggregateRenderError":
        instance = super().__new__(cls, _summarize(errors, target_name), list(errors))
        return instance

    def __init__(
        self,
        errors: Sequence[Exception],
        target_name: str | None = None,
        examples: Sequence[tuple[str, str]] | None = None,
    ) -> None:
        super().__init__(_summarize(errors, target_name), list(errors))
        self.target_name: str | None = target_name
        self.examples: list[tuple[str, str]] = list(examples or [])

    @property
    def failures(self) -> list[tuple[tuple[str, str] | None, Exception]]:
        """Return ``((component, variant), error)`` pairs for every failure."""

        pairs: list[tuple[tuple[str, str] | None, Exception]] = []
        for index, error in enumerate(self.exceptions):
            example = self.examples[index] if index < len(self.examples) else None
            pairs.append((example, error))
        return pairs

    def derive(self, excs: Sequence[Exception]) -> "AggregateRenderError":  # type: ignore[override]
        examples_by_error = {id(error): example for example, error in self.failures if example is not None}
        examples = [examples_by_error[id(exc)] for exc in excs if id(exc) in examples_by_error]
        return AggregateRenderError(
            excs,
            self.target_name,
            examples=examples if len(examples) == len(excs) else None,
        )


class PackagingError(SnapdiffError):
    """Raised when assets could not be bundled or hashed."""


class UploadError(SnapdiffError):
    """Raised when an asset or static package upload fails."""


class RemoteExecutionError(SnapdiffError):
    """Raised when a target rejects or fails its execute contract."""

    def __init__(self, target_name: str, reason: str) -> None:
        super().__init__(f"Target {target_name} failed: {reason}")
        self.target_name: str = target_name


class BundleError(SnapdiffError):
    """Raised when the bundler command fails."""


class BuildCancelledError(SnapdiffError):
    """Raised at a suspension point once a newer build superseded this one."""


__all__ = [
    "AggregateRenderError",
    "BuildCancelledError",
    "BundleError",
    "ConfigError",
    "ExampleRenderError",
    "PackagingError",
    "RemoteExecutionError",
    "SnapdiffError",
    "StylesheetLoadError",
    "UploadError",
]
