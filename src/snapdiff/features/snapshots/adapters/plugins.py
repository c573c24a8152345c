"""
Summary: Resolve plugins, custom targets and DOM providers from import paths.
Why: Configuration names collaborators as ``"module:attribute"`` strings.
"""

from __future__ import annotations

import importlib
from collections.abc import Sequence
from typing import Any

from snapdiff.shared import ConfigError

from ..usecases.ports import DomProviderPort


def import_object(spec: str) -> Any:
    """Import ``"package.module:attribute"`` and return the attribute.

    Raises:
        ConfigError: If the path is malformed or cannot be imported.
    """
    module_name, sep, attribute = spec.partition(":")
    if not sep or not module_name or not attribute:
        raise ConfigError(f"Invalid import path {spec!r}, expected 'module:attribute'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"Cannot import module {module_name!r}: {exc}") from exc

    obj: Any = module
    for part in attribute.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ConfigError(f"Module {module_name!r} has no attribute {attribute!r}") from exc
    return obj


def _instantiate(obj: Any) -> Any:
    return obj() if isinstance(obj, type) else obj


def load_plugins(specs: Sequence[str]) -> list[Any]:
    """Import every configured plugin, instantiating classes."""

    return [_instantiate(import_object(spec)) for spec in specs]


def plugin_css(plugins: Sequence[Any]) -> list[str]:
    """Collect the CSS contributed by plugins, in plugin order."""

    css: list[str] = []
    for plugin in plugins:
        value = getattr(plugin, "css", None)
        if callable(value):
            value = value()
        if value:
            css.append(str(value))
    return css


def resolve_dom_provider(plugins: Sequence[Any], configured: str | None = None) -> DomProviderPort | None:
    """Return the first plugin offering a DOM provider, else the configured one.

    Raises:
        ConfigError: If the configured object does not implement ``render``.
    """
    for plugin in plugins:
        candidate = getattr(plugin, "dom_provider", None)
        if isinstance(candidate, DomProviderPort):
            return candidate

    if not configured:
        return None
    provider = _instantiate(import_object(configured))
    if not isinstance(provider, DomProviderPort):
        raise ConfigError(f"DOM provider {configured!r} does not implement render()")
    return provider


__all__ = ["import_object", "load_plugins", "plugin_css", "resolve_dom_provider"]
