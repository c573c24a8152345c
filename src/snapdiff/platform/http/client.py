"""Where: src/snapdiff/platform/http/client.py
What: HTTP adapter with retry logic for the comparison service API.
Why: Decouple network concerns from upload and target execution logic.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Protocol, cast

import requests

from snapdiff.config.settings import (
    HTTP_CONNECT_TIMEOUT,
    HTTP_MAX_ATTEMPTS,
    HTTP_READ_TIMEOUT,
)
from snapdiff.platform.logging import logger
from snapdiff.shared import Credentials

from .user_agent import resolve_user_agent


@dataclass(slots=True)
class HTTPResult:
    """Represent an HTTP response payload relevant to the service clients."""

    status: int
    headers: dict[str, str]
    data: Any | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class HTTPClient(Protocol):
    """Protocol for HTTP clients able to exchange JSON payloads."""

    def get_json(self, url: str, params: dict[str, str] | None = None) -> HTTPResult:
        ...

    def post_json(self, url: str, payload: dict[str, Any]) -> HTTPResult:
        ...

    def post_file(self, url: str, field_name: str, filename: str, content: bytes) -> HTTPResult:
        ...


class SnapdiffHTTPClient:
    """Perform authenticated requests with retries on 429 and 5xx."""

    def __init__(
        self,
        credentials: Credentials,
        *,
        project: str | None = None,
        session: requests.Session | None = None,
        max_attempts: int = HTTP_MAX_ATTEMPTS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._session: requests.Session = session or requests.Session()
        self._session.auth = credentials.as_auth()
        self._session.headers.update(
            {"Accept": "application/json", "User-Agent": resolve_user_agent(project)}
        )
        self._max_attempts: int = max(1, max_attempts)
        self._sleep: Callable[[float], None] = sleep

    def get_json(self, url: str, params: dict[str, str] | None = None) -> HTTPResult:
        return self._request("GET", url, params=params)

    def post_json(self, url: str, payload: dict[str, Any]) -> HTTPResult:
        return self._request("POST", url, json=payload)

    def post_file(self, url: str, field_name: str, filename: str, content: bytes) -> HTTPResult:
        return self._request(
            "POST",
            url,
            files={field_name: (filename, content, "application/zip")},
        )

    def _request(self, method: str, url: str, **kwargs: Any) -> HTTPResult:
        for attempt in range(self._max_attempts):
            try:
                response = self._session.request(
                    method,
                    url,
                    timeout=(HTTP_CONNECT_TIMEOUT, HTTP_READ_TIMEOUT),
                    **kwargs,
                )
            except requests.RequestException as exc:
                logger.warning("%s %s failed: %s", method, url, exc)
                return HTTPResult(status=0, headers={}, data=None, error=str(exc))

            result = self._to_result(response)
            if self._should_retry(result.status):
                if attempt < self._max_attempts - 1:
                    delay = self._retry_delay(result.headers)
                    logger.warning(
                        "Service rate-limited/server error (status=%s). Retrying in %.1fs.",
                        result.status,
                        delay,
                    )
                    self._sleep(delay)
                    continue

                logger.warning(
                    "Service rate-limited/server error (status=%s). Giving up.",
                    result.status,
                )
            elif not result.ok:
                logger.warning("%s %s returned HTTP %s", method, url, result.status)
            return result

        return HTTPResult(status=0, headers={}, data=None, error="no attempt made")

    @staticmethod
    def _to_result(response: requests.Response) -> HTTPResult:
        status = int(response.status_code)
        header_items = cast(Iterable[tuple[str, str]], response.headers.items())
        response_headers = {str(key): str(value) for key, value in header_items}

        if not 200 <= status < 300:
            return HTTPResult(
                status=status,
                headers=response_headers,
                data=None,
                error=response.text[:500] if response.text else None,
            )

        if not response.content:
            return HTTPResult(status=status, headers=response_headers, data=None)

        try:
            data = response.json()
        except ValueError as exc:
            logger.warning("Service JSON parse error: %s", exc)
            return HTTPResult(status=status, headers=response_headers, data=None, error=str(exc))

        return HTTPResult(status=status, headers=response_headers, data=data)

    @staticmethod
    def _should_retry(status: int) -> bool:
        return status == 429 or status >= 500

    @staticmethod
    def _retry_delay(headers: dict[str, str]) -> float:
        retry_after = _parse_retry_after(headers.get("Retry-After"))
        return max(1.0, min(10.0, retry_after or 1.0))


def _parse_retry_after(value: str | None) -> float | None:
    if not value:
        return None
    stripped = value.strip()
    if stripped.isdigit():
        return float(int(stripped))
    try:
        dt = parsedate_to_datetime(stripped)
    except (TypeError, ValueError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = (dt - datetime.now(timezone.utc)).total_seconds()
    return max(0.0, delta)


def join_url(endpoint: str, path: str) -> str:
    """Join an endpoint base URL and an API path without doubling slashes."""

    return f"{endpoint.rstrip('/')}/{path.lstrip('/')}"


__all__ = [
    "HTTPClient",
    "HTTPResult",
    "SnapdiffHTTPClient",
    "join_url",
]
