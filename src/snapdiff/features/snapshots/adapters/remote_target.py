"""Where: src/snapdiff/features/snapshots/adapters/remote_target.py
What: Remote target that runs comparisons through the service HTTP API.
Why: Default ``RemoteTargetPort`` implementation for configured targets.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

from snapdiff.config.settings import POLL_INTERVAL_SECONDS
from snapdiff.platform.http import HTTPClient, HTTPResult, SnapdiffHTTPClient, join_url
from snapdiff.platform.logging import logger
from snapdiff.shared import Credentials, RemoteExecutionError

from ..domain.models import ExecutionRequest, Viewport

HTTPClientFactory = Callable[[Credentials], HTTPClient]


def _default_http_factory(credentials: Credentials) -> HTTPClient:
    return SnapdiffHTTPClient(credentials)


class HttpRemoteTarget:
    """Submit snap requests and, unless async, wait for their comparison."""

    def __init__(
        self,
        name: str,
        viewport: Viewport | str,
        browser_type: str = "chrome",
        *,
        http_factory: HTTPClientFactory | None = None,
        poll_interval: float = POLL_INTERVAL_SECONDS,
    ) -> None:
        self.name: str = name
        self.viewport: Viewport = Viewport.parse(viewport)
        self.browser_type: str = browser_type
        self._http_factory: HTTPClientFactory = http_factory or _default_http_factory
        self._poll_interval: float = poll_interval

    def __repr__(self) -> str:
        return f"HttpRemoteTarget(name={self.name!r}, viewport='{self.viewport}', browser_type={self.browser_type!r})"

    async def execute(self, request: ExecutionRequest) -> Any:
        http = self._http_factory(request.credentials)
        body = request.to_payload()
        body["viewport"] = str(self.viewport)
        body["type"] = self.browser_type

        submitted = await asyncio.to_thread(
            http.post_json, join_url(request.endpoint, "/api/snap-requests"), body
        )
        self._raise_for_result(submitted, "submitting snap request")
        if request.async_results:
            return submitted.data

        request_id = _extract_request_id(submitted.data)
        if request_id is None:
            raise RemoteExecutionError(self.name, "snap request response carried no request id")
        return await self._wait_for_result(http, request.endpoint, request_id)

    async def _wait_for_result(self, http: HTTPClient, endpoint: str, request_id: str) -> Any:
        url = join_url(endpoint, f"/api/snap-requests/{request_id}")
        while True:
            polled = await asyncio.to_thread(http.get_json, url)
            self._raise_for_result(polled, f"polling snap request {request_id}")
            data = polled.data if isinstance(polled.data, dict) else {}
            status = data.get("status")
            if status == "done":
                return data.get("result", data)
            if status == "failed":
                reason = data.get("message") or f"snap request {request_id} failed"
                raise RemoteExecutionError(self.name, str(reason))
            logger.debug("Snap request %s for %s is %s", request_id, self.name, status or "pending")
            await asyncio.sleep(self._poll_interval)

    def _raise_for_result(self, result: HTTPResult, action: str) -> None:
        if result.ok:
            return
        reason = result.error or f"HTTP {result.status}"
        raise RemoteExecutionError(self.name, f"{action}: {reason}")


def _extract_request_id(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    for key in ("requestId", "id"):
        value = data.get(key)
        if value is not None and str(value):
            return str(value)
    return None


__all__ = ["HTTPClientFactory", "HttpRemoteTarget"]
