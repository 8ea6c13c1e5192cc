"""
Root test configuration for all tests.

Provides World Bank payload builders and aiohttp session fakes so no test
touches the network.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from country_enrichment.programmatic.config import EnrichmentConfig


def _ref(value: str, ref_id: str = "", iso2code: str = "") -> dict[str, str]:
    return {"id": ref_id, "iso2code": iso2code, "value": value}


def make_country_record(
    iso2_code: str, name: str, region: str, *, record_id: str | None = None
) -> dict[str, Any]:
    """Build a raw country record shaped like the World Bank listing endpoint."""
    return {
        "id": record_id or f"{iso2_code}X",
        "iso2Code": iso2_code,
        "name": name,
        "region": _ref(region),
        "adminregion": _ref(""),
        "incomeLevel": _ref("High income", "HIC", "XD"),
        "lendingType": _ref("Not classified", "LNX", "XX"),
        "capitalCity": "",
        "longitude": "",
        "latitude": "",
    }


def make_country_payload(records: list[dict[str, Any]]) -> list[Any]:
    """Wrap country records in the `[metadata, records]` listing envelope."""
    metadata = {"page": 1, "pages": 1, "per_page": "300", "total": len(records)}
    return [metadata, records]


def make_indicator_payload(value: float | None, date: str = "2023") -> list[Any]:
    """Build an indicator response with a single observation."""
    metadata = {"page": 1, "pages": 1, "per_page": 1, "total": 1}
    return [metadata, [{"value": value, "date": date}]]


def mock_response(status: int = 200, payload: Any = None) -> AsyncMock:
    resp = AsyncMock()
    resp.status = status
    resp.json = AsyncMock(return_value=payload)
    return resp


def response_cm(response: Any) -> AsyncMock:
    """Wrap a response in the async context manager returned by `session.get`."""
    cm = AsyncMock()
    cm.__aenter__ = AsyncMock(return_value=response)
    cm.__aexit__ = AsyncMock(return_value=None)
    return cm


def raising_cm(error: BaseException) -> AsyncMock:
    """Async context manager whose `__aenter__` raises, like a failed connection."""
    cm = AsyncMock()
    cm.__aenter__ = AsyncMock(side_effect=error)
    cm.__aexit__ = AsyncMock(return_value=None)
    return cm


@dataclass
class Delayed:
    """Routing outcome for a response that arrives after `delay` seconds, or never if None."""

    response: Any = None
    delay: float | None = None


def delayed_cm(response: Any, delay: float | None) -> AsyncMock:
    """Async context manager that yields `response` after `delay` seconds."""

    async def _enter() -> Any:
        if delay is None:
            await asyncio.Event().wait()
        else:
            await asyncio.sleep(delay)
        return response

    cm = AsyncMock()
    cm.__aenter__ = AsyncMock(side_effect=_enter)
    cm.__aexit__ = AsyncMock(return_value=None)
    return cm


@pytest.fixture
def config() -> EnrichmentConfig:
    """Enrichment config with a fixed, test-only base URL."""
    return EnrichmentConfig(base_url="https://api.example.test/v2")


@pytest.fixture
def sample_country_payload() -> list[Any]:
    """Listing payload with two real countries and one aggregate."""
    return make_country_payload(
        [
            make_country_record("US", "United States", "North America"),
            make_country_record("1W", "World", "Aggregates"),
            make_country_record("FR", "France", "Europe & Central Asia"),
        ]
    )


@pytest.fixture
def session_factory() -> Callable[[Callable[[str, dict[str, Any] | None], Any]], MagicMock]:
    """
    Build a fake aiohttp session from a routing function.

    The routing function receives `(url, params)` and returns a response object,
    a `Delayed` wrapper around one, or an exception instance, which is raised
    when the request is entered.
    """

    def _factory(route: Callable[[str, dict[str, Any] | None], Any]) -> MagicMock:
        def _get(url: str, params: dict[str, Any] | None = None, **_: Any) -> AsyncMock:
            outcome = route(url, params)
            if isinstance(outcome, BaseException):
                return raising_cm(outcome)
            if isinstance(outcome, Delayed):
                return delayed_cm(outcome.response, outcome.delay)
            return response_cm(outcome)

        session = MagicMock()
        session.get = MagicMock(side_effect=_get)
        session.close = AsyncMock()
        return session

    return _factory
