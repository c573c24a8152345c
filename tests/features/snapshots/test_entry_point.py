"""
Summary: Tests for example discovery and the entry manifest.
Why: The bundle must contain exactly the examples selected for a run.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

from snapdiff.features.snapshots.usecases import (
    create_dynamic_entry_point,
    discover_example_files,
    write_debug_index,
)


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text("export default {};", encoding="utf-8")
    return path


def test_discovers_matching_files_and_skips_node_modules(tmp_path: Path) -> None:
    button = _touch(tmp_path / "src" / "Button-snapdiff.js")
    card = _touch(tmp_path / "src" / "cards" / "Card-snapdiff.js")
    _ = _touch(tmp_path / "node_modules" / "lib" / "Lib-snapdiff.js")
    _ = _touch(tmp_path / "src" / "Button.js")

    files = discover_example_files(tmp_path, "**/*-snapdiff.js")

    assert files == sorted([button, card])


def test_only_filters_on_file_stem(tmp_path: Path) -> None:
    _ = _touch(tmp_path / "Button-snapdiff.js")
    card = _touch(tmp_path / "Card-snapdiff.js")

    files = discover_example_files(tmp_path, "**/*-snapdiff.js", only="card")

    assert files == [card]


def test_entry_manifest_is_written(tmp_path: Path) -> None:
    root = tmp_path / "project"
    tmpdir = tmp_path / "scratch"
    _ = _touch(root / "src" / "Button-snapdiff.js")

    entry_point = asyncio.run(
        create_dynamic_entry_point(root_dir=root, include="**/*-snapdiff.js", tmpdir=tmpdir)
    )

    assert entry_point.number_of_files_processed == 1
    manifest = json.loads(entry_point.entry_file.read_text(encoding="utf-8"))
    assert manifest["files"] == ["src/Button-snapdiff.js"]
    assert manifest["only"] is None


def test_no_examples_is_not_an_error(tmp_path: Path) -> None:
    entry_point = asyncio.run(
        create_dynamic_entry_point(root_dir=tmp_path, include="**/*-snapdiff.js", tmpdir=tmp_path / "out")
    )

    assert entry_point.number_of_files_processed == 0
    assert entry_point.entry_file.exists()


def test_debug_index_references_bundle(tmp_path: Path) -> None:
    path = write_debug_index(tmp_path)

    assert path.name == "index.html"
    assert 'src="bundle.js"' in path.read_text(encoding="utf-8")
