"""Low-level World Bank HTTP client.

This module provides a small client responsible for:
- Applying an optional in-flight request cap.
- Performing a single HTTP GET attempt per call (no retries).
- Mapping transport, status and JSON failures onto the World Bank exceptions.
- Returning decoded JSON (no business mapping).
"""

import asyncio
import json
import logging
from types import TracebackType
from typing import Any

import aiohttp

from country_enrichment.api_helpers.request_limiter import RequestLimiter
from country_enrichment.exceptions import (
    WorldBankDecodeError,
    WorldBankNetworkError,
)

logger = logging.getLogger(__name__)


class WorldBankClient:
    """HTTP client for World Bank API requests.

    Args:
        session: An aiohttp-style session supporting `session.get(...)` as an async
            context manager. When omitted, the client opens its own session on
            `__aenter__` and closes it on `__aexit__`.
        limiter: Optional in-flight cap. Defaults to an unlimited limiter.
        timeout_seconds: Total per-request timeout in seconds.
    """

    def __init__(
        self,
        *,
        session: Any | None = None,
        limiter: RequestLimiter | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self._limiter = limiter or RequestLimiter()
        self._timeout = float(timeout_seconds)

    @property
    def limiter(self) -> RequestLimiter:
        return self._limiter

    async def get_json(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """GET a URL once and decode its JSON body.

        The deadline starts once a limiter slot is held, so time spent queued
        behind the in-flight cap never counts against it.

        Args:
            url: Absolute URL to fetch.
            params: Optional query parameters.
            timeout: Optional tighter deadline in seconds for this call. The
                client's own timeout still applies when it is shorter.

        Returns:
            The decoded JSON document (World Bank responses are top-level arrays).

        Raises:
            WorldBankNetworkError: On connection errors, timeouts or a non-200 status.
            WorldBankDecodeError: If the body is not valid JSON.
        """
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True

        deadline = self._timeout if timeout is None else min(self._timeout, timeout)

        async with self._limiter:
            try:
                return await asyncio.wait_for(
                    self._fetch(url, params, deadline), timeout=deadline
                )
            except (WorldBankNetworkError, WorldBankDecodeError):
                raise
            except asyncio.TimeoutError as e:
                raise WorldBankNetworkError(
                    f"Timed out after {deadline}s for {url}"
                ) from e
            except aiohttp.ClientError as e:
                raise WorldBankNetworkError(f"Request failed for {url}: {e}") from e

    async def _fetch(
        self, url: str, params: dict[str, Any] | None, deadline: float
    ) -> Any:
        async with self._session.get(
            url,
            params=params,
            timeout=aiohttp.ClientTimeout(total=deadline),
        ) as response:
            if response.status != 200:
                raise WorldBankNetworkError(f"HTTP {response.status} for {url}")
            try:
                return await response.json(content_type=None)
            except (json.JSONDecodeError, ValueError) as e:
                raise WorldBankDecodeError(f"Invalid JSON from {url}: {e}") from e

    async def close(self) -> None:
        """Close the underlying session if this client opened it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "WorldBankClient":
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool:
        await self.close()
        return False
