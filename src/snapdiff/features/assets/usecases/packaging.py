"""src/snapdiff/features/assets/usecases/packaging.py
What: Build deterministic ZIP archives for prerendered and static assets.
Why: Equal content must always hash equal so the cache can dedupe uploads.
"""

from __future__ import annotations

import asyncio
import hashlib
import io
import json
import zipfile
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from typing import Final

from snapdiff.features.stylesheets import CSSBlock
from snapdiff.platform.logging import logger
from snapdiff.shared import PackagingError

from ..domain.models import AssetsPackage
from .ports import PackageablePayload

# Zip timestamps cannot predate 1980; a fixed value keeps archives reproducible.
_FIXED_TIMESTAMP: Final[tuple[int, int, int, int, int, int]] = (1980, 1, 1, 0, 0, 0)
GLOBAL_CSS_ENTRY: Final[str] = "global-css.json"
SNAP_PAYLOADS_ENTRY: Final[str] = "snap-payloads.json"


def _dump_json(value: object) -> bytes:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _write_entry(archive: zipfile.ZipFile, name: str, data: bytes) -> None:
    info = zipfile.ZipInfo(name, date_time=_FIXED_TIMESTAMP)
    info.compress_type = zipfile.ZIP_DEFLATED
    info.external_attr = 0o644 << 16
    archive.writestr(info, data)


def _finalize(entries: dict[str, bytes]) -> AssetsPackage:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name in sorted(entries):
            _write_entry(archive, name, entries[name])
    data = buffer.getvalue()
    return AssetsPackage(buffer=data, hash=hashlib.sha256(data).hexdigest())


def _asset_name(asset_path: str) -> str:
    return asset_path.split("?", 1)[0].split("#", 1)[0].lstrip("/")


def _find_public_file(asset_path: str, public_folders: Sequence[Path]) -> Path | None:
    relative = _asset_name(asset_path)
    if not relative:
        return None
    for folder in public_folders:
        candidate = (folder / relative).resolve()
        if not candidate.is_relative_to(folder.resolve()):
            continue
        if candidate.is_file():
            return candidate
    return None


def _iter_files(root: Path) -> Iterator[tuple[str, Path]]:
    for path in sorted(root.rglob("*")):
        if path.is_file():
            yield path.relative_to(root).as_posix(), path


def build_assets_package(
    global_css: Sequence[CSSBlock],
    snap_payloads: Sequence[PackageablePayload],
    public_folders: Sequence[Path],
) -> AssetsPackage:
    """Zip CSS, payloads and referenced public files into one hashed archive.

    Raises:
        PackagingError: If serialisation or reading a referenced file fails.
    """
    try:
        entries: dict[str, bytes] = {
            GLOBAL_CSS_ENTRY: _dump_json([block.to_dict() for block in global_css]),
            SNAP_PAYLOADS_ENTRY: _dump_json([payload.to_dict() for payload in snap_payloads]),
        }
        for payload in snap_payloads:
            for asset_path in payload.asset_paths or ():
                name = _asset_name(asset_path)
                if not name or name in entries:
                    continue
                found = _find_public_file(asset_path, public_folders)
                if found is None:
                    logger.warning("Asset %s was not found in any public folder, skipping", asset_path)
                    continue
                entries[name] = found.read_bytes()
        return _finalize(entries)
    except (OSError, TypeError, ValueError) as exc:
        raise PackagingError(f"Failed to package assets: {exc}") from exc


def build_static_package(bundle_dir: Path, public_folders: Iterable[Path]) -> AssetsPackage:
    """Zip the bundle directory and every public folder for direct mode.

    Files from the bundle directory take precedence over public files that
    share the same relative name.

    Raises:
        PackagingError: If a directory cannot be read.
    """
    try:
        entries: dict[str, bytes] = {}
        for root in (bundle_dir, *public_folders):
            if not root.is_dir():
                logger.warning("Static package folder %s does not exist, skipping", root)
                continue
            for name, path in _iter_files(root):
                if name not in entries:
                    entries[name] = path.read_bytes()
        return _finalize(entries)
    except OSError as exc:
        raise PackagingError(f"Failed to create static package: {exc}") from exc


async def prepare_assets_package(
    global_css: Sequence[CSSBlock],
    snap_payloads: Sequence[PackageablePayload],
    public_folders: Sequence[Path],
) -> AssetsPackage:
    """Build the assets archive in a worker thread."""

    return await asyncio.to_thread(build_assets_package, global_css, snap_payloads, public_folders)


async def create_static_package(bundle_dir: Path, public_folders: Sequence[Path]) -> AssetsPackage:
    """Build the static archive in a worker thread."""

    return await asyncio.to_thread(build_static_package, bundle_dir, public_folders)


__all__ = [
    "GLOBAL_CSS_ENTRY",
    "SNAP_PAYLOADS_ENTRY",
    "build_assets_package",
    "build_static_package",
    "create_static_package",
    "prepare_assets_package",
]
