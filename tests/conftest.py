"""Shared pytest fixtures for the snapdiff test suite."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from snapdiff.config.config import Config
from snapdiff.features.snapshots.domain import SnapPayload
from snapdiff.platform.logging import BuildLogger


@pytest.fixture
def log_base() -> MagicMock:
    """Stand-in for the application logger receiving build events."""

    return MagicMock(spec=logging.Logger)


@pytest.fixture
def build_logger(log_base: MagicMock) -> BuildLogger:
    return BuildLogger("demo", base=log_base)


@pytest.fixture
def make_payload() -> Callable[..., SnapPayload]:
    def _make(
        component: str,
        variant: str = "default",
        *,
        error: Exception | None = None,
        is_error: bool = False,
        asset_paths: list[str] | None = None,
    ) -> SnapPayload:
        return SnapPayload(
            component=component,
            variant=variant,
            html=f"<div>{component}-{variant}</div>",
            is_error=is_error,
            error=error,
            asset_paths=asset_paths,
        )

    return _make


@pytest.fixture
def repo_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Force the portable repo root to a temporary directory for isolation."""

    _ = (tmp_path / "pyproject.toml").write_text("[project]\nname='tmp'\n")

    import snapdiff.config.paths as paths

    def _fake_detect_repo_root(_start: Path | None = None) -> Path:
        return tmp_path

    monkeypatch.setattr(paths, "_detect_repo_root", _fake_detect_repo_root, raising=True)
    monkeypatch.delenv("SNAPDIFF_CONFIG", raising=False)
    monkeypatch.delenv("SNAPDIFF_TMPDIR", raising=False)
    return tmp_path


@pytest.fixture(autouse=True)
def reset_config_singleton() -> Iterator[None]:
    """Reset the configuration singleton around every test."""

    original_instance = Config._instance  # pyright: ignore[reportPrivateUsage]
    original_loaded_from = Config._loaded_from  # pyright: ignore[reportPrivateUsage]
    Config._instance = None  # pyright: ignore[reportPrivateUsage]
    Config._loaded_from = None  # pyright: ignore[reportPrivateUsage]
    try:
        yield None
    finally:
        Config._instance = original_instance  # pyright: ignore[reportPrivateUsage]
        Config._loaded_from = original_loaded_from  # pyright: ignore[reportPrivateUsage]
