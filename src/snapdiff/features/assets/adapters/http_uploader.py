"""Where: src/snapdiff/features/assets/adapters/http_uploader.py
What: Upload asset archives to the comparison service.
Why: Keep transport details behind ``UploaderPort``.
"""

from __future__ import annotations

import asyncio
from typing import Any

from snapdiff.platform.http import HTTPClient, join_url
from snapdiff.platform.logging import logger
from snapdiff.shared import UploadError


class HttpAssetUploader:
    """Store archives through the service's snap-request assets API.

    The service is asked first whether it already holds the hash, which
    avoids re-sending payloads across separate CLI invocations.
    """

    def __init__(self, http: HTTPClient, endpoint: str) -> None:
        self._http: HTTPClient = http
        self._endpoint: str = endpoint

    async def upload(self, buffer: bytes, package_hash: str) -> str:
        return await asyncio.to_thread(self._upload_sync, buffer, package_hash)

    def _upload_sync(self, buffer: bytes, package_hash: str) -> str:
        existing = self._http.get_json(
            join_url(self._endpoint, f"/api/snap-requests/assets-data/{package_hash}")
        )
        known_path = _extract_path(existing.data) if existing.ok else None
        if known_path:
            logger.debug("Reusing remote assets package %s at %s", package_hash, known_path)
            return known_path

        result = self._http.post_file(
            join_url(self._endpoint, f"/api/snap-requests/assets/{package_hash}"),
            "payload",
            f"{package_hash}.zip",
            buffer,
        )
        if not result.ok:
            reason = result.error or f"HTTP {result.status}"
            raise UploadError(f"Failed to upload assets package {package_hash}: {reason}")

        path = _extract_path(result.data)
        if not path:
            raise UploadError(f"Upload of assets package {package_hash} returned no path")
        logger.debug("Uploaded assets package %s (%d bytes) to %s", package_hash, len(buffer), path)
        return path


def _extract_path(data: Any) -> str | None:
    if isinstance(data, dict):
        path = data.get("path")
        if isinstance(path, str) and path:
            return path
    return None


__all__ = ["HttpAssetUploader"]
