"""
Parallel detail fetcher for country enrichment.
Fans out one detail fetch per country and waits for all of them.
Turns a few hundred sequential lookups into a single concurrent burst.
"""

import asyncio
import logging
import time
from collections.abc import Iterable
from types import TracebackType
from typing import Any

from atlas_common.models import Country, DetailRecord

from country_enrichment.api_helpers.indicator_helper import IndicatorHelper
from country_enrichment.api_helpers.request_limiter import RequestLimiter
from country_enrichment.api_helpers.worldbank_client import WorldBankClient

from .config import EnrichmentConfig

logger = logging.getLogger(__name__)


class ParallelDetailFetcher:
    """
    Fetches population and GDP for every country in parallel.
    Implements graceful degradation - a stalled request only blanks its own
    value, and a country whose fetch fails is dropped without affecting the others.
    """

    def __init__(
        self,
        config: EnrichmentConfig | None = None,
        indicator_helper: IndicatorHelper | None = None,
    ):
        """
        Initialize the ParallelDetailFetcher.

        Parameters:
            config (Optional[EnrichmentConfig]): Enrichment configuration; a default EnrichmentConfig() is created when omitted.
            indicator_helper (Optional[IndicatorHelper]): Helper used for each country's lookups. When omitted, one is created lazily with its own client, which this fetcher closes on exit.
        """
        self.config = config or EnrichmentConfig()
        self.indicator_helper = indicator_helper
        self._owned_client: WorldBankClient | None = None

        # Track per-country performance for the latest run
        self.api_timings: dict[str, float] = {}
        self.api_errors: dict[str, str] = {}

    async def initialize_helpers(self) -> None:
        """Lazily create the indicator helper and its client if none was injected."""
        if not self.indicator_helper:
            self._owned_client = WorldBankClient(
                limiter=RequestLimiter(
                    max_in_flight=self.config.max_concurrent_requests
                ),
                timeout_seconds=self.config.request_timeout,
            )
            self.indicator_helper = IndicatorHelper(self._owned_client, self.config)

    async def enrich(self, countries: Iterable[Country]) -> list[DetailRecord]:
        """
        Fetch detail records for every distinct country code concurrently.

        Returns only after every spawned fetch has finished or failed. Stragglers are
        bounded per request by `enrichment_timeout`, counted from the moment the
        request holds a slot, so the optional in-flight cap never drops records.

        Parameters:
            countries (Iterable[Country]): The base collection; only `iso2_code` is read.

        Returns:
            list[DetailRecord]: One record per code whose fetch completed, in no particular order.
        """
        await self.initialize_helpers()

        self.api_timings = {}
        self.api_errors = {}
        start_time = time.time()

        codes = list(dict.fromkeys(country.iso2_code for country in countries))
        logger.info(f"Fetching details for {len(codes)} countries")

        tasks = [(code, self._fetch_detail(code)) for code in codes]
        results = await self._gather_results(tasks)
        details = [detail for detail in results.values() if detail is not None]

        elapsed = time.time() - start_time
        logger.info(
            f"Fetched {len(details)}/{len(codes)} detail records in {elapsed:.2f} seconds"
        )
        self._log_performance_metrics(elapsed)

        return details

    async def _fetch_detail(self, code: str) -> DetailRecord:
        """Fetch one country's detail record and record how long it took."""
        if self.indicator_helper is None:
            raise RuntimeError("Indicator helper not initialized")
        start = time.time()
        detail = await self.indicator_helper.fetch_detail(code)
        self.api_timings[code] = time.time() - start
        return detail

    async def _gather_results(self, tasks: list[tuple[str, Any]]) -> dict[str, Any]:
        """
        Run named coroutines concurrently and wait for all of them.

        If a coroutine raises, its entry in the returned mapping is None and the error
        string is recorded in self.api_errors. The other coroutines keep running.

        Parameters:
            tasks (List[Tuple[str, Any]]): List of (name, coroutine) pairs identifying each task.

        Returns:
            Dict[str, Any]: Mapping from task name to the coroutine result, or None for failed tasks.
        """
        results: dict[str, Any] = {}
        task_names = [name for name, _ in tasks]

        task_results = await asyncio.gather(
            *(coro for _, coro in tasks), return_exceptions=True
        )

        for name, result in zip(task_names, task_results):
            if isinstance(result, Exception):
                logger.error(f"Detail fetch for {name} failed with error: {result}")
                results[name] = None
                self.api_errors[name] = str(result)
            else:
                results[name] = result

        return results

    def _log_performance_metrics(self, total_time: float) -> None:
        """
        Log fetch performance: total runtime, the slowest countries, errors and success rate.

        Parameters:
            total_time (float): Total elapsed time in seconds for the whole burst.
        """
        logger.info("Detail Fetch Performance Metrics:")
        logger.info(f"  Total Time: {total_time:.2f}s")

        slowest = sorted(self.api_timings.items(), key=lambda item: item[1], reverse=True)
        for code, timing in slowest[:5]:
            logger.info(f"  {code}: {timing:.2f}s")

        if self.api_errors:
            logger.warning("Detail Fetch Errors:")
            for code, error in self.api_errors.items():
                logger.warning(f"  {code}: {error}")

        total = len(self.api_timings) + len(self.api_errors)
        success_rate = (len(self.api_timings) / total * 100) if total > 0 else 0
        logger.info(f"  Success Rate: {success_rate:.1f}%")

    def get_performance_report(self) -> str:
        """
        Produce a human-readable report of the latest enrichment run.

        Returns:
            report (str): A multi-line string with counts, the slowest lookups and any errors.
        """
        report = ["Performance Report:"]
        report.append(f"  Completed: {len(self.api_timings)}")
        report.append(f"  Failed: {len(self.api_errors)}")
        report.append(
            f"  Max concurrent requests: {self.config.max_concurrent_requests or 'unlimited'}"
        )

        if self.api_timings:
            report.append("\nSlowest Lookups:")
            slowest = sorted(
                self.api_timings.items(), key=lambda item: item[1], reverse=True
            )
            for code, time_taken in slowest[:10]:
                report.append(f"  {code}: {time_taken:.2f}s")

        if self.api_errors:
            report.append("\nErrors:")
            for code, error in self.api_errors.items():
                report.append(f"  {code}: {error}")

        return "\n".join(report)

    async def __aenter__(self) -> "ParallelDetailFetcher":
        """
        Initialize the helper and return the fetcher for use as an async context manager.

        Returns:
            ParallelDetailFetcher: The same fetcher instance.
        """
        await self.initialize_helpers()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool:
        """
        Close the client this fetcher created, if any, and reset the helper for reuse.

        An injected helper is left untouched; its owner closes it.

        Returns:
            bool: `False` to indicate exceptions (if any) should not be suppressed.
        """
        if self._owned_client:
            await self._owned_client.close()
            self._owned_client = None
            self.indicator_helper = None
        return False
