from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterable, List, Optional, Set

from .config import DEFAULT_MAX_CONCURRENT, HarvestSettings
from .controller import ThreadPoolController
from .crawler import ProvinceCrawler, discover_provinces
from .errors import CrawlError
from .extractor import WeatherExtractor, compile_selector
from .metrics import OutcomeCollector
from .models import HarvestSummary
from .permits import PermitPool
from .rate_limiter import RequestDelay
from .reporting import ConsoleReporter
from .scrapers import WeatherDetailScraper
from .transport import create_session

logger = logging.getLogger(__name__)


class Harvester:
    """Runs one harvesting pass over a list of provinces.

    Provinces are crawled one at a time in order. Every detail URL found is
    dispatched as its own task on the thread pool; all tasks share one
    PermitPool and one HTTP session. harvest() returns only after every
    dispatched task has settled, whatever its outcome.

    Every selector is compiled in the constructor, so a malformed one raises
    SelectorParseError before any request is made.
    """

    def __init__(
        self,
        settings: Optional[HarvestSettings] = None,
        session: Any = None,
        reporter: Optional[ConsoleReporter] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._settings = settings or HarvestSettings()
        s = self._settings

        self._extractor = WeatherExtractor(s.area_name_selector, s.temperature_selector)
        compile_selector(s.province_index_selector)

        self._owns_session = session is None
        self._session = session if session is not None else create_session(s.impersonate)
        self._crawler = ProvinceCrawler(
            self._session,
            listing_url_template=s.listing_url_template,
            hot_city_selector=s.hot_city_selector,
            timeout=s.timeout_secs,
        )
        self._reporter = reporter or ConsoleReporter()
        self._sleep = sleep

    def __enter__(self) -> "Harvester":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP session if this harvester created it."""
        if self._owns_session:
            self._session.close()

    def harvest(self, provinces: Optional[Iterable[str]] = None) -> HarvestSummary:
        """Crawl every province, run every detail task, and return the tally."""
        s = self._settings
        province_list = self._resolve_provinces(provinces)
        permits = PermitPool(s.max_concurrent)
        metrics = OutcomeCollector()
        scraper = WeatherDetailScraper(
            session=self._session,
            extractor=self._extractor,
            timeout=s.timeout_secs,
            permits=permits,
            delay=RequestDelay(s.delay_secs, sleep=self._sleep),
            reporter=self._reporter,
            metrics=metrics,
        )

        logger.info(
            "harvesting %d provinces (permits=%d, delay=%.1fs)",
            len(province_list), permits.capacity, s.delay_secs,
        )
        controller = ThreadPoolController(max_workers=s.worker_count)
        controller.start()
        seen: Set[str] = set()
        try:
            for province in province_list:
                self._dispatch_province(province, controller, scraper, metrics, seen)
            controller.join()
        finally:
            controller.stop(wait=True)

        summary = metrics.summary(dispatched=controller.dispatched, peak_concurrency=permits.peak)
        self._reporter.done()
        logger.info(
            "harvest finished: dispatched=%d succeeded=%d failed=%d failed_provinces=%d avg_latency_ms=%.0f",
            summary.dispatched, summary.succeeded, summary.failed,
            len(summary.failed_provinces), metrics.avg_latency_ms(),
        )
        return summary

    def _dispatch_province(
        self,
        province: str,
        controller: ThreadPoolController,
        scraper: WeatherDetailScraper,
        metrics: OutcomeCollector,
        seen: Set[str],
    ) -> None:
        count = 0
        try:
            for url in self._crawler.list_detail_urls(province):
                if url in seen:
                    logger.debug("skipping duplicate detail url %s", url)
                    continue
                seen.add(url)
                controller.submit(scraper.run, url)
                count += 1
        except CrawlError as exc:
            logger.warning("province %s failed after %d urls: %s", province, count, exc)
            metrics.record_province_failure(province)
            self._reporter.failure(self._crawler.listing_url(province), f"{type(exc).__name__}: {exc}")
            return
        logger.info("province %s: dispatched %d detail urls", province, count)

    def _resolve_provinces(self, provinces: Optional[Iterable[str]]) -> List[str]:
        if provinces is not None:
            return list(provinces)
        s = self._settings
        if s.discover_provinces:
            try:
                found = discover_provinces(
                    self._session, s.index_url, s.province_index_selector, timeout=s.timeout_secs
                )
            except CrawlError as exc:
                logger.warning("province discovery failed, using static list: %s", exc)
            else:
                if found:
                    return found
                logger.warning("province discovery found nothing, using static list")
        return list(s.provinces)


def harvest(
    provinces: Iterable[str],
    max_concurrent: int = DEFAULT_MAX_CONCURRENT,
    session: Any = None,
    reporter: Optional[ConsoleReporter] = None,
    sleep: Callable[[float], None] = time.sleep,
    **settings: Any,
) -> HarvestSummary:
    """Run one pass over provinces and return the tally.

    A fresh session and console output are used unless session or reporter
    is given; remaining keyword arguments become HarvestSettings fields.
    """
    harvest_settings = HarvestSettings(max_concurrent=max_concurrent, **settings)
    with Harvester(harvest_settings, session=session, reporter=reporter, sleep=sleep) as harvester:
        return harvester.harvest(provinces)
