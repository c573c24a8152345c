"""Where: src/snapdiff/features/assets/usecases/cache.py
What: Soft, append-only cache from package hash to uploaded location.
Why: Identical bundles produced by different targets are uploaded once.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from snapdiff.platform.logging import logger


def _consume_exception(task: asyncio.Task[str]) -> None:
    # Waiters may all be cancelled before a failed upload settles.
    if not task.cancelled():
        _ = task.exception()


class AssetPackageCache:
    """Remember where each content hash was uploaded for the cache's lifetime.

    Entries are never evicted. Concurrent requests for the same unseen hash
    share one in-flight upload; a failed upload records nothing, so a later
    request retries it.
    """

    def __init__(self) -> None:
        self._locations: dict[str, str] = {}
        self._in_flight: dict[str, asyncio.Task[str]] = {}

    def __contains__(self, package_hash: object) -> bool:
        return package_hash in self._locations

    def __len__(self) -> int:
        return len(self._locations)

    def get(self, package_hash: str) -> str | None:
        return self._locations.get(package_hash)

    async def get_or_upload(
        self,
        package_hash: str,
        upload: Callable[[], Awaitable[str]],
    ) -> str:
        """Return the known location for ``package_hash`` or upload it once.

        Args:
            package_hash: Content hash identifying the archive.
            upload: Zero-argument coroutine factory performing the upload.

        Returns:
            The uploaded location.
        """
        location = self._locations.get(package_hash)
        if location is not None:
            logger.debug("Assets package %s has already been uploaded", package_hash)
            return location

        task = self._in_flight.get(package_hash)
        if task is None:
            logger.debug("Uploading assets package %s", package_hash)
            task = asyncio.ensure_future(self._upload(package_hash, upload))
            task.add_done_callback(_consume_exception)
            self._in_flight[package_hash] = task
        else:
            logger.debug("Joining in-flight upload of assets package %s", package_hash)
        return await asyncio.shield(task)

    async def _upload(
        self,
        package_hash: str,
        upload: Callable[[], Awaitable[str]],
    ) -> str:
        try:
            location = await upload()
        finally:
            _ = self._in_flight.pop(package_hash, None)
        self._locations[package_hash] = location
        return location


__all__ = ["AssetPackageCache"]
