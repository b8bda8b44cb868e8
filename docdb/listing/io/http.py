"""HTTP client helper."""

from __future__ import annotations

import asyncio
from typing import Any

import aiohttp

from ..core.constants import DEFAULT_TIMEOUT_SECONDS, RETRYABLE_HTTP_STATUSES
from ..core.exceptions import TransportError


class HTTPClient:
    """Async HTTP client wrapper.

    Failures are raised as TransportError. Connection problems, timeouts,
    truncated bodies and transient statuses are flagged retryable; a body
    that is not JSON is not.
    """

    def __init__(self, base_url: str | None = None, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def _url(self, url: str) -> str:
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url}{url}"
        return url

    async def get(
        self,
        url: str,
        params: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET request."""
        return await self._request("GET", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """POST request with a JSON body."""
        return await self._request("POST", url, json=json, headers=headers)

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            async with self.session.request(method, self._url(url), **kwargs) as response:
                if response.status >= 400:
                    body = await response.text()
                    raise TransportError(
                        f"{method} {url} failed with HTTP {response.status}: {body}",
                        retryable=response.status in RETRYABLE_HTTP_STATUSES,
                        status_code=response.status,
                    )
                try:
                    return await response.json()
                except (aiohttp.ContentTypeError, ValueError) as e:
                    raise TransportError(
                        f"{method} {url} returned a non-JSON body: {e}",
                        status_code=response.status,
                    ) from e
        except (aiohttp.ClientConnectionError, aiohttp.ClientPayloadError, asyncio.TimeoutError) as e:
            raise TransportError(
                f"{method} {url} failed: {str(e) or type(e).__name__}", retryable=True
            ) from e

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
