"""Manual scraper runner for testing and debugging extractors.

This script scrapes one or more product URLs and prints the normalized
records and the per-URL failures.

Usage:
    python scripts/run_scraper.py https://www.amazon.in/dp/B0CHX1W1XY
    python scripts/run_scraper.py URL1 URL2 --retries 3
    python scripts/run_scraper.py URL1 --no-delay
"""

import asyncio
import argparse
import logging
from typing import List

import structlog

from pricecompare.config import settings
from pricecompare.core.exceptions import ScraperError
from pricecompare.dependencies import build_scraper_service
from pricecompare.scrapers.base import ScrapedProduct
from pricecompare.scrapers.fetcher import FetchClient
from pricecompare.scrapers.scraper_service import ScrapeFailure, ScrapeResult, ScraperService
from pricecompare.scrapers.utils.retry import transient_retry
from pricecompare.services.cache_service import CacheService


def configure_logging() -> None:
    """Console-friendly structlog output for interactive runs."""
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


log = structlog.get_logger("run_scraper")


async def _scrape_with_retries(service: ScraperService, urls: List[str], retries: int) -> ScrapeResult:
    """Scrape each URL, retrying network errors and timeouts only."""

    @transient_retry(attempts=retries)
    async def scrape(url: str) -> ScrapedProduct:
        return await service.scrape_one(url)

    async def settle(url: str):
        try:
            return await scrape(url)
        except ScraperError as e:
            return ScrapeFailure(url=url, error=e.message, kind=e.kind)
        except Exception as e:
            log.error("scrape_failed_unexpectedly", url=url, error=str(e), exc_info=e)
            return ScrapeFailure(url=url, error=str(e) or "Unknown error")

    result = ScrapeResult()
    for outcome in await asyncio.gather(*(settle(url) for url in urls)):
        if isinstance(outcome, ScrapeFailure):
            result.failures.append(outcome)
        else:
            result.successes.append(outcome)
    return result


def build_cli_service(no_delay: bool = False) -> ScraperService:
    """Build a scraper service with its own cache, configured from settings."""
    cache = CacheService(
        default_ttl=settings.CACHE_DEFAULT_TTL_SECONDS,
        sweep_interval=settings.CACHE_SWEEP_INTERVAL_SECONDS,
    )
    if no_delay:
        fetch_client = FetchClient(cache, min_delay_ms=0, max_delay_ms=0)
    else:
        fetch_client = FetchClient(cache)
    return build_scraper_service(cache=cache, fetch_client=fetch_client)


async def run_scraper(urls: List[str], retries: int = 1, no_delay: bool = False) -> int:
    """Scrape the URLs and display the results.

    Args:
        urls: Product page URLs
        retries: Attempts per URL for retryable errors (1 = no retry)
        no_delay: Skip the randomized pre-request delay

    Returns:
        Process exit code: 0 when every URL succeeded, 1 otherwise
    """
    service = build_cli_service(no_delay)
    cache = service.fetch_client.cache

    print(f"\n{'='*70}")
    print(f"  Scraping {len(urls)} URL(s)")
    print(f"{'='*70}\n")

    if retries > 1:
        result = await _scrape_with_retries(service, urls, retries)
    else:
        result = await service.scrape_many(urls)

    for i, product in enumerate(result.successes, 1):
        print(f"[{i}] {product.title}")
        print(f"    Platform: {product.platform.display_name}")
        print(f"    Price: {product.price:,}")
        if product.original_price and product.original_price != product.price:
            print(f"    Original: {product.original_price:,}")
        if product.rating is not None:
            reviews = f" ({product.review_count:,} reviews)" if product.review_count else ""
            print(f"    Rating: {product.rating:.1f}{reviews}")
        print(f"    In stock: {'yes' if product.in_stock else 'no'}")
        print(f"    URL: {product.url[:80]}")
        print()

    if result.failures:
        print("Failures:")
        for failure in result.failures:
            print(f"  - {failure.url[:80]}")
            print(f"    [{failure.kind}] {failure.error}")
        print()

    print(f"{'='*70}")
    print(f"  Scraped {len(result.successes)} out of {len(urls)} products")
    print(f"{'='*70}\n")

    log.info("cache_stats", **cache.stats())
    return 0 if not result.failures else 1


def main():
    """Parse arguments and run the scraper."""
    parser = argparse.ArgumentParser(
        description="Scrape product pages from supported platforms",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/run_scraper.py https://www.amazon.in/dp/B0CHX1W1XY
  python scripts/run_scraper.py URL1 URL2 --retries 3
        """,
    )

    parser.add_argument(
        "urls",
        nargs="+",
        help="Product page URLs",
    )

    parser.add_argument(
        "--retries",
        type=int,
        default=1,
        help="Attempts per URL for network errors and timeouts (default: 1, no retry)",
    )

    parser.add_argument(
        "--no-delay",
        action="store_true",
        help="Skip the randomized pre-request delay",
    )

    args = parser.parse_args()

    configure_logging()

    raise SystemExit(asyncio.run(run_scraper(args.urls, args.retries, args.no_delay)))


if __name__ == "__main__":
    main()
