# Where: snapdiff.features.snapshots.__init__
# What: Expose snapshot orchestration types, use cases and adapters.
# Why: Provide a cohesive import surface for the run service and CLI.

from .adapters import (
    CommandBundler,
    HttpRemoteTarget,
    build_targets,
    load_plugins,
    plugin_css,
    resolve_dom_provider,
)
from .domain import (
    EntryPoint,
    ExecutionRequest,
    RenderedTarget,
    Report,
    ReportEntry,
    SnapPayload,
    TargetResult,
    Viewport,
    construct_report,
)
from .usecases import (
    BuildReadyCallback,
    BundlerPort,
    DomProviderPort,
    RemoteTargetPort,
    TargetExecutionCoordinator,
    create_dynamic_entry_point,
    raise_for_render_errors,
    write_debug_index,
)

__all__ = [
    "BuildReadyCallback",
    "BundlerPort",
    "CommandBundler",
    "DomProviderPort",
    "EntryPoint",
    "ExecutionRequest",
    "HttpRemoteTarget",
    "RemoteTargetPort",
    "RenderedTarget",
    "Report",
    "ReportEntry",
    "SnapPayload",
    "TargetExecutionCoordinator",
    "TargetResult",
    "Viewport",
    "build_targets",
    "construct_report",
    "create_dynamic_entry_point",
    "load_plugins",
    "plugin_css",
    "raise_for_render_errors",
    "resolve_dom_provider",
    "write_debug_index",
]
