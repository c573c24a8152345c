# Where: snapdiff.shared.__init__
# What: Provide a concise import surface for shared errors and value objects.
# Why: Encourage consistent reuse of shared helpers across features.

"""Shared cross-cutting utilities exposed at the package level."""

from .errors import (
    AggregateRenderError,
    BuildCancelledError,
    BundleError,
    ConfigError,
    ExampleRenderError,
    PackagingError,
    RemoteExecutionError,
    SnapdiffError,
    StylesheetLoadError,
    UploadError,
)
from .cancellation import CancellationToken
from .models import Credentials

__all__ = [
    "AggregateRenderError",
    "BuildCancelledError",
    "BundleError",
    "CancellationToken",
    "ConfigError",
    "Credentials",
    "ExampleRenderError",
    "PackagingError",
    "RemoteExecutionError",
    "SnapdiffError",
    "StylesheetLoadError",
    "UploadError",
]
