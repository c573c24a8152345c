"""
Summary: Tests for the asset package cache upload deduplication.
Why: Identical content must reach the uploader at most once per hash.
"""

from __future__ import annotations

import asyncio
import gc
from functools import partial

import pytest

from fakes import FakeUploader
from snapdiff.features.assets import AssetPackageCache
from snapdiff.shared import UploadError


def test_known_hash_is_served_from_cache() -> None:
    cache = AssetPackageCache()
    uploader = FakeUploader()

    async def scenario() -> tuple[str, str]:
        first = await cache.get_or_upload("abc", partial(uploader.upload, b"zip", "abc"))
        second = await cache.get_or_upload("abc", partial(uploader.upload, b"zip", "abc"))
        return first, second

    first, second = asyncio.run(scenario())

    assert first == second == "/assets/abc.zip"
    assert uploader.calls == ["abc"]
    assert "abc" in cache
    assert len(cache) == 1
    assert cache.get("abc") == "/assets/abc.zip"


def test_concurrent_requests_share_one_upload() -> None:
    cache = AssetPackageCache()
    uploader = FakeUploader(delay=0.01)

    async def scenario() -> list[str]:
        return list(
            await asyncio.gather(
                *(cache.get_or_upload("same", partial(uploader.upload, b"zip", "same")) for _ in range(3))
            )
        )

    locations = asyncio.run(scenario())

    assert locations == ["/assets/same.zip"] * 3
    assert uploader.calls == ["same"]


def test_distinct_hashes_upload_separately() -> None:
    cache = AssetPackageCache()
    uploader = FakeUploader()

    async def scenario() -> None:
        _ = await cache.get_or_upload("one", partial(uploader.upload, b"1", "one"))
        _ = await cache.get_or_upload("two", partial(uploader.upload, b"2", "two"))

    asyncio.run(scenario())

    assert uploader.calls == ["one", "two"]
    assert len(cache) == 2


def test_failed_upload_is_not_cached_and_can_be_retried() -> None:
    cache = AssetPackageCache()
    failing = FakeUploader(error=UploadError("storage down"))
    working = FakeUploader()

    async def scenario() -> str:
        with pytest.raises(UploadError):
            _ = await cache.get_or_upload("h", partial(failing.upload, b"zip", "h"))
        assert "h" not in cache
        return await cache.get_or_upload("h", partial(working.upload, b"zip", "h"))

    location = asyncio.run(scenario())

    assert location == "/assets/h.zip"
    assert failing.calls == ["h"]
    assert working.calls == ["h"]


def test_failed_upload_without_waiters_is_not_reported_as_unretrieved() -> None:
    cache = AssetPackageCache()
    failing = FakeUploader(delay=0.01, error=UploadError("storage down"))
    reported: list[dict[str, object]] = []

    async def scenario() -> None:
        asyncio.get_running_loop().set_exception_handler(lambda _loop, context: reported.append(context))
        waiter = asyncio.ensure_future(cache.get_or_upload("h", partial(failing.upload, b"zip", "h")))
        await asyncio.sleep(0)
        _ = waiter.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiter
        await asyncio.sleep(0.05)
        _ = gc.collect()

    asyncio.run(scenario())

    assert failing.calls == ["h"]
    assert "h" not in cache
    assert reported == []
