"""Scrape a single event page into a structured record."""
import logging
import time
from datetime import datetime, timezone
from typing import Optional

from processor.event_processor import EventProcessor, iso_timestamp
from processor.models import EventScrapeResult, ScrapeMetadata
from scraper.event_page import EventPageFetcher, FetchError
from scraper.extractor import EventExtractor

logger = logging.getLogger(__name__)


class EventScraper:
    """Fetches, extracts and assembles an event page in one call."""

    def __init__(
        self,
        fetcher: Optional[EventPageFetcher] = None,
        extractor: Optional[EventExtractor] = None,
        processor: Optional[EventProcessor] = None,
        timeout: float = 15
    ):
        """
        Initialize the scraper.

        Args:
            fetcher: Page fetcher (default: EventPageFetcher with ``timeout``)
            extractor: Field extractor (default: EventExtractor)
            processor: Record assembler (default: EventProcessor)
            timeout: HTTP request timeout in seconds for the default fetcher
        """
        self.fetcher = fetcher or EventPageFetcher(timeout=timeout)
        self.extractor = extractor or EventExtractor()
        self.processor = processor or EventProcessor()

    def scrape_event(self, url: str) -> EventScrapeResult:
        """
        Scrape an event page.

        Never raises: fetch failures and unexpected errors are returned as
        an unsuccessful result.

        Args:
            url: Syntactically valid event page URL

        Returns:
            EventScrapeResult with the event record or an error message
        """
        start = time.monotonic()

        try:
            html = self.fetcher.fetch(url)
            fields = self.extractor.extract(html, url)
            event = self.processor.assemble(fields, url, datetime.now(timezone.utc))
        except FetchError as e:
            logger.warning(
                f"Failed to fetch event page {url}: {e}",
                extra={'url': url, 'error_type': e.kind, 'status_code': e.status}
            )
            return EventScrapeResult.failure(str(e), self._metadata(url, start))
        except Exception as e:
            logger.error(
                f"Unexpected error scraping {url}: {e}",
                extra={'url': url, 'error_type': type(e).__name__},
                exc_info=True
            )
            message = str(e) or f"Unexpected {type(e).__name__} while scraping event page"
            return EventScrapeResult.failure(message, self._metadata(url, start))

        metadata = self._metadata(url, start, scraped_at=event.scraped_at)
        logger.info(
            f"Scraped event '{event.title}' from {url}",
            extra={'url': url, 'processing_time_ms': metadata.processing_time}
        )
        return EventScrapeResult.ok(event, metadata)

    def _metadata(self, url: str, start: float, scraped_at: Optional[str] = None) -> ScrapeMetadata:
        elapsed_ms = max(0, int(round((time.monotonic() - start) * 1000)))
        return ScrapeMetadata(
            url=url,
            scraped_at=scraped_at or iso_timestamp(datetime.now(timezone.utc)),
            processing_time=elapsed_ms
        )
