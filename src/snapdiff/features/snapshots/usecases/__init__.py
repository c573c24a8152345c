"""Use cases for snapshot orchestration."""

from .coordinator import TargetExecutionCoordinator
from .entry_point import create_dynamic_entry_point, discover_example_files, write_debug_index
from .error_aggregation import collect_render_errors, raise_for_render_errors
from .ports import BuildReadyCallback, BundlerPort, DomProviderPort, RemoteTargetPort

__all__ = [
    "BuildReadyCallback",
    "BundlerPort",
    "DomProviderPort",
    "RemoteTargetPort",
    "TargetExecutionCoordinator",
    "collect_render_errors",
    "create_dynamic_entry_point",
    "discover_example_files",
    "raise_for_render_errors",
    "write_debug_index",
]
