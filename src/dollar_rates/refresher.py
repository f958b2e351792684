"""Background refresh loop feeding the snapshot cache."""

from __future__ import annotations

import threading
from typing import Optional

from dollar_rates.cache import SnapshotCache
from dollar_rates.config import DEFAULT_SOURCE_URL
from dollar_rates.fetcher import FetchError, Fetcher
from dollar_rates.logger import get_logger
from dollar_rates.parser import ExtractionError, RateRowExtractor
from dollar_rates.rates import AssemblyError, RateRecord, assemble_rates

LOGGER = get_logger(__name__)

# The BCV site does not serve a verifiable certificate chain. Validation is
# skipped for this host only.
INSECURE_HOSTS = ("www.bcv.org.ve",)

SCRAPE_ERRORS = (FetchError, ExtractionError, AssemblyError)


class RateRefresher:
    """Scrape the source once at start, then again every ``interval_seconds``."""

    def __init__(
        self,
        cache: SnapshotCache,
        interval_seconds: float,
        fetcher: Fetcher | None = None,
        extractor: RateRowExtractor | None = None,
        url: str = DEFAULT_SOURCE_URL,
    ) -> None:
        self.cache = cache
        self.interval_seconds = interval_seconds
        self.fetcher = fetcher or Fetcher(insecure_hosts=INSECURE_HOSTS)
        self.extractor = extractor or RateRowExtractor()
        self.url = url
        self._stop = threading.Event()
        self._scraping = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_scraping(self) -> bool:
        return self._scraping.is_set()

    def scrape(self) -> RateRecord:
        """Fetch, extract and assemble one record. Raises on any failure."""
        html = self.fetcher.get(self.url)
        fields = self.extractor.extract(html)
        return assemble_rates(fields)

    def refresh_once(self) -> bool:
        """Run one scrape attempt and publish the result if it succeeds."""
        self._scraping.set()
        try:
            record = self.scrape()
        except SCRAPE_ERRORS as exc:
            LOGGER.error("Scrape of %s failed: %s", self.url, exc)
            return False
        finally:
            self._scraping.clear()
        self.cache.write(record)
        LOGGER.info("Scraped dollar rates: %s", record)
        return True

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                self.refresh_once()
            except Exception:  # noqa: BLE001
                LOGGER.exception("Unexpected error during scrape of %s", self.url)
            self._stop.wait(self.interval_seconds)

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("Refresher already started")
        self._thread = threading.Thread(target=self._run, name="rate-refresher", daemon=True)
        self._thread.start()
        LOGGER.info("Refreshing %s every %.1fs", self.url, self.interval_seconds)

    def stop(self, timeout: float | None = None) -> None:
        """Stop scheduling new ticks and wait for the loop to exit."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
