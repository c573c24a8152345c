"""Shared path utilities for configuration and data locations.

This module centralizes how the application discovers locations for
config, log and scratch files.

Policy (portable by default):
- Config: repository-root ``<repo_root>/snapdiff.toml`` unless overridden by
  ``SNAPDIFF_CONFIG``.
- Logs: repository-root ``<repo_root>/logs/snapdiff.log``.
- Scratch: ``<repo_root>/.snapdiff`` unless overridden by ``SNAPDIFF_TMPDIR``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Callable, Final


_ENV_CONFIG_FILE: Final[str] = "SNAPDIFF_CONFIG"
_ENV_TMP_DIR: Final[str] = "SNAPDIFF_TMPDIR"
CONFIG_FILE_NAME: Final[str] = "snapdiff.toml"


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
) -> Path:
    """Resolve a configuration path honoring explicit and environment overrides."""

    if explicit_path is not None:
        return Path(explicit_path).expanduser().resolve()

    mapping = env if env is not None else os.environ
    if env_var:
        candidate = mapping.get(env_var) or ""
        candidate = candidate.strip()
        if candidate:
            return Path(candidate).expanduser().resolve()

    default_path = default_factory()
    return default_path.expanduser().resolve()


def _detect_repo_root(start: Path | None = None) -> Path:
    """Detect the repository root by walking up from the working directory.

    Looks for markers like ``pyproject.toml``, ``package.json`` or ``.git``.

    Args:
        start: Starting directory. Defaults to the current working directory.

    Returns:
        Path: Detected repository root, or the current working directory
        if no marker is found.
    """
    here = (start or Path.cwd()).resolve()
    for p in [here, *here.parents]:
        for marker in ("pyproject.toml", "package.json", ".git"):
            if (p / marker).exists():
                return p
    return Path.cwd()


def default_config_path(explicit_path: Path | str | None = None) -> Path:
    """Get the path to the main TOML config file."""

    return resolve_overridable_path(
        explicit_path=explicit_path,
        env=None,
        env_var=_ENV_CONFIG_FILE,
        default_factory=lambda: _detect_repo_root() / CONFIG_FILE_NAME,
    )


def default_tmp_dir() -> Path:
    """Get the default scratch directory for entry points and bundles."""

    return resolve_overridable_path(
        explicit_path=None,
        env=None,
        env_var=_ENV_TMP_DIR,
        default_factory=lambda: _detect_repo_root() / ".snapdiff",
    )


def default_log_dir() -> Path:
    """Get the default directory for log files."""

    return (_detect_repo_root() / "logs").resolve()


def default_log_file() -> Path:
    """Get the default log file path."""

    return (default_log_dir() / "snapdiff.log").resolve()


__all__ = [
    "CONFIG_FILE_NAME",
    "default_config_path",
    "default_log_dir",
    "default_log_file",
    "default_tmp_dir",
    "resolve_overridable_path",
]
