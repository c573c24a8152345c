"""Adapters for snapshot orchestration."""

from .command_bundler import BUNDLE_FILE_NAME, CommandBundler
from .plugins import import_object, load_plugins, plugin_css, resolve_dom_provider
from .remote_target import HttpRemoteTarget
from .targets import build_target, build_targets, ensure_target

__all__ = [
    "BUNDLE_FILE_NAME",
    "CommandBundler",
    "HttpRemoteTarget",
    "build_target",
    "build_targets",
    "ensure_target",
    "import_object",
    "load_plugins",
    "plugin_css",
    "resolve_dom_provider",
]
