"""Request concurrency limiting for World Bank calls.

The enrichment burst issues two requests per country at once. A limiter
caps how many of them are in flight together; it does not change which
requests are made or what they return.
"""

import asyncio
from types import TracebackType


class RequestLimiter:
    """Asynchronous cap on in-flight requests.

    Acquire it around each request with `async with limiter:`. A limit of 0
    means unlimited, in which case entering the limiter never waits.

    Args:
        max_in_flight: Maximum number of requests allowed to run together.
    """

    def __init__(self, *, max_in_flight: int = 0) -> None:
        if max_in_flight < 0:
            raise ValueError("max_in_flight must be non-negative")
        self._max_in_flight = int(max_in_flight)
        self._semaphore = (
            asyncio.Semaphore(self._max_in_flight) if self._max_in_flight else None
        )
        self._in_flight = 0
        self._peak = 0

    @property
    def max_in_flight(self) -> int:
        return self._max_in_flight

    @property
    def in_flight(self) -> int:
        """Number of requests currently holding the limiter."""
        return self._in_flight

    @property
    def peak(self) -> int:
        """Highest number of requests observed in flight at once."""
        return self._peak

    async def __aenter__(self) -> "RequestLimiter":
        if self._semaphore is not None:
            await self._semaphore.acquire()
        self._in_flight += 1
        self._peak = max(self._peak, self._in_flight)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool:
        self._in_flight -= 1
        if self._semaphore is not None:
            self._semaphore.release()
        return False
