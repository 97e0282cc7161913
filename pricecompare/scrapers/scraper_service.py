"""Scraper orchestration service.

This service connects the classifier, the fetch client and the extractor
registry. It handles the end-to-end flow for one URL and fans a batch of
URLs out concurrently, recording each URL's outcome independently.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import structlog

from pricecompare.core.exceptions import ScraperError, UnsupportedPlatformError
from pricecompare.scrapers.base import ScrapedProduct
from pricecompare.scrapers.factory import ExtractorRegistry
from pricecompare.scrapers.fetcher import FetchClient
from pricecompare.scrapers.platforms import classify_url, supported_platform_names

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ScrapeFailure:
    """A URL that could not be scraped and the human-readable reason."""

    url: str
    error: str
    kind: str = "unknown"

    def to_dict(self) -> Dict[str, str]:
        return {"url": self.url, "error": self.error}


@dataclass
class ScrapeResult:
    """Outcome of a batch: successful records and per-URL failures.

    Successes are not guaranteed to follow input order; match them back to
    their URL by ``ScrapedProduct.url``.
    """

    successes: List[ScrapedProduct] = field(default_factory=list)
    failures: List[ScrapeFailure] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "products": [product.to_dict() for product in self.successes],
            "errors": [failure.to_dict() for failure in self.failures],
        }


class ScraperService:
    """Service for scraping product pages across platforms.

    Flow per URL: classify -> look up extractor -> fetch (cache or network)
    -> extract. No step is retried; retry is the caller's decision, driven
    by the error kind.
    """

    def __init__(
        self,
        fetch_client: FetchClient,
        registry: ExtractorRegistry,
        max_concurrency: Optional[int] = None,
    ):
        """Initialize scraper service.

        Args:
            fetch_client: Client used for all page fetches
            registry: Extractor registry populated at startup
            max_concurrency: Ceiling on simultaneous per-URL pipelines in
                scrape_many; None means every URL starts at once
        """
        self.fetch_client = fetch_client
        self.registry = registry
        self.max_concurrency = max_concurrency
        self.logger = logger.bind(service="scraper_service")

    async def scrape_one(self, url: str) -> ScrapedProduct:
        """Scrape a single product URL.

        Args:
            url: Product page URL

        Returns:
            ScrapedProduct

        Raises:
            InvalidUrlError: URL is malformed
            UnsupportedPlatformError: Host belongs to no known platform
            PlatformNotImplementedError: Platform has no extractor
            NetworkError, FetchTimeoutError, BotDetectedError, NotFoundError:
                The fetch failed
            ExtractionError: A mandatory field is missing from the page
        """
        platform = classify_url(url)
        if platform is None:
            self.logger.info("unsupported_platform", url=url)
            raise UnsupportedPlatformError(url, supported_platform_names())

        extractor = self.registry.get(platform, url)

        html = await self.fetch_client.fetch(url)
        product = extractor.extract(html, url)

        self.logger.info(
            "scrape_succeeded",
            url=url,
            platform=platform.value,
            price=product.price,
            in_stock=product.in_stock,
        )
        return product

    async def scrape_many(self, urls: Sequence[str]) -> ScrapeResult:
        """Scrape multiple product URLs concurrently.

        A failure on one URL never cancels or affects the others; every
        per-URL error is recorded as a ScrapeFailure.

        Args:
            urls: Product page URLs

        Returns:
            ScrapeResult with successes and failures
        """
        self.logger.info("scrape_many_started", url_count=len(urls))

        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None

        async def run(url: str) -> ScrapedProduct:
            if semaphore is None:
                return await self.scrape_one(url)
            async with semaphore:
                return await self.scrape_one(url)

        outcomes = await asyncio.gather(*(run(url) for url in urls), return_exceptions=True)

        result = ScrapeResult()
        for url, outcome in zip(urls, outcomes):
            if isinstance(outcome, ScrapedProduct):
                result.successes.append(outcome)
            elif isinstance(outcome, ScraperError):
                self.logger.warning("scrape_failed", url=url, kind=outcome.kind, error=outcome.message)
                result.failures.append(ScrapeFailure(url=url, error=outcome.message, kind=outcome.kind))
            elif isinstance(outcome, Exception):
                self.logger.error(
                    "scrape_failed_unexpectedly",
                    url=url,
                    error=str(outcome),
                    exc_info=outcome,
                )
                result.failures.append(ScrapeFailure(url=url, error=str(outcome) or "Unknown error"))
            else:
                # BaseException such as CancelledError is not a per-URL outcome
                raise outcome

        self.logger.info(
            "scrape_many_complete",
            url_count=len(urls),
            succeeded=len(result.successes),
            failed=len(result.failures),
        )
        return result
