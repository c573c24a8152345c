"""
Summary: Architecture checks keeping feature use cases free of transport code.
Why: Use cases talk to ports; adapters alone may reach HTTP or subprocesses.
"""

from __future__ import annotations

from pathlib import Path

import pytest

FEATURES: tuple[str, ...] = ("assets", "snapshots", "stylesheets", "watch")
FORBIDDEN_IMPORTS: tuple[str, ...] = ("snapdiff.platform.http", "import requests", "from .. import adapters", "..adapters")


@pytest.mark.parametrize("feature", FEATURES)
def test_usecases_do_not_import_adapters_or_http(feature: str) -> None:
    """Ensure use case modules depend on ports rather than concrete transports."""

    repo_root = Path(__file__).resolve().parents[2]
    usecases_dir = repo_root / "src" / "snapdiff" / "features" / feature / "usecases"
    offending_files: list[Path] = []
    for path in usecases_dir.rglob("*.py"):
        contents = path.read_text(encoding="utf-8")
        if any(marker in contents for marker in FORBIDDEN_IMPORTS):
            offending_files.append(path)
    assert offending_files == [], (
        "Use case modules must not import adapters or HTTP clients; found in: "
        f"{', '.join(str(path.relative_to(repo_root)) for path in offending_files)}"
    )


@pytest.mark.parametrize("feature", FEATURES)
def test_domain_does_not_import_usecases(feature: str) -> None:
    """Ensure domain modules stay at the bottom of the dependency graph."""

    repo_root = Path(__file__).resolve().parents[2]
    domain_dir = repo_root / "src" / "snapdiff" / "features" / feature / "domain"
    offending_files = [
        path
        for path in domain_dir.rglob("*.py")
        if "usecases" in path.read_text(encoding="utf-8") or "adapters" in path.read_text(encoding="utf-8")
    ]
    assert offending_files == []
