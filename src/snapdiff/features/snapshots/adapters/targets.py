"""
Summary: Build remote targets from the ``[targets]`` configuration tables.
Why: Each table becomes either an HTTP target or a factory-built custom one.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from snapdiff.shared import ConfigError

from ..domain.models import Viewport
from ..usecases.ports import RemoteTargetPort
from .plugins import import_object
from .remote_target import HttpRemoteTarget


def ensure_target(target: Any, name: str) -> RemoteTargetPort:
    """Check that ``target`` honours the remote target contract.

    Raises:
        ConfigError: If ``execute`` or ``viewport`` is missing.
    """
    if not isinstance(target, RemoteTargetPort):
        raise ConfigError(f"Target {name} must provide a viewport and an execute() coroutine")
    if isinstance(target.viewport, str):
        target.viewport = Viewport.parse(target.viewport)
    return target


def build_target(name: str, options: Mapping[str, Any]) -> RemoteTargetPort:
    settings = dict(options)
    factory_path = settings.pop("factory", None)
    if factory_path:
        factory = import_object(str(factory_path))
        if not callable(factory):
            raise ConfigError(f"Target factory {factory_path!r} is not callable")
        return ensure_target(factory(name, **settings), name)

    viewport = settings.pop("viewport", None)
    if viewport is None:
        raise ConfigError(f"Target {name} needs a viewport")
    browser_type = str(settings.pop("browser_type", "chrome"))
    if settings:
        raise ConfigError(f"Unknown options for target {name}: {', '.join(sorted(settings))}")
    return HttpRemoteTarget(name, Viewport.parse(str(viewport)), browser_type)


def build_targets(config_targets: Mapping[str, Mapping[str, Any]]) -> dict[str, RemoteTargetPort]:
    """Return targets keyed by name, preserving declaration order."""

    return {name: build_target(name, options) for name, options in config_targets.items()}


__all__ = ["build_target", "build_targets", "ensure_target"]
