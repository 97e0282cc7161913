"""Tests for the scraper orchestration service and caller-side retry."""

import asyncio

import httpx
import pytest

from pricecompare.core.exceptions import (
    NetworkError,
    NotFoundError,
    PlatformNotImplementedError,
    UnsupportedPlatformError,
)
from pricecompare.scrapers.base import BaseExtractor, ScrapedProduct
from pricecompare.scrapers.factory import ExtractorRegistry
from pricecompare.scrapers.platforms import Platform
from pricecompare.scrapers.register_extractors import register_all_extractors
from pricecompare.scrapers.scraper_service import ScrapeFailure, ScrapeResult, ScraperService
from pricecompare.scrapers.utils.retry import is_retryable, transient_retry

from conftest import AMAZON_HTML, AMAZON_URL, FLIPKART_URL, UNSUPPORTED_URL


MYNTRA_URL = "https://www.myntra.com/tshirts/roadster/123/buy"


class ConcurrencyProbe:
    """Sleep stand-in that tracks how many callers are inside it at once."""

    def __init__(self):
        self.active = 0
        self.peak = 0

    async def __call__(self, seconds: float) -> None:
        self.active += 1
        self.peak = max(self.peak, self.active)
        await asyncio.sleep(0.01)
        self.active -= 1


# ============================================================================
# TESTS: SINGLE URL
# ============================================================================

class TestScrapeOne:
    """Tests for ScraperService.scrape_one."""

    async def test_amazon_product(self, scraper_service):
        product = await scraper_service.scrape_one(AMAZON_URL)

        assert product.platform == Platform.AMAZON
        assert product.price == 71290
        assert product.url == AMAZON_URL

    async def test_unsupported_platform_raises(self, scraper_service, pages):
        with pytest.raises(UnsupportedPlatformError) as exc_info:
            await scraper_service.scrape_one(UNSUPPORTED_URL)

        assert "Amazon" in exc_info.value.message
        assert pages.requests == []

    async def test_recognized_but_unimplemented_platform_skips_fetch(
        self, scraper_service, pages
    ):
        with pytest.raises(PlatformNotImplementedError):
            await scraper_service.scrape_one(MYNTRA_URL)

        assert pages.requests == []

    async def test_fetch_errors_propagate(self, scraper_service):
        with pytest.raises(NotFoundError):
            await scraper_service.scrape_one("https://www.amazon.in/dp/MISSING")


# ============================================================================
# TESTS: BATCH
# ============================================================================

class TestScrapeMany:
    """Tests for ScraperService.scrape_many."""

    async def test_mixed_batch_isolates_failures(self, scraper_service):
        result = await scraper_service.scrape_many([AMAZON_URL, UNSUPPORTED_URL, FLIPKART_URL])

        assert len(result.successes) == 2
        assert {p.url for p in result.successes} == {AMAZON_URL, FLIPKART_URL}
        assert result.failures == [
            ScrapeFailure(
                url=UNSUPPORTED_URL,
                error="Unsupported platform. Please use Amazon, Flipkart, Myntra, Snapdeal, Ajio URLs.",
                kind="unsupported_platform",
            )
        ]

    async def test_every_url_is_accounted_for_once(self, scraper_service):
        urls = [AMAZON_URL, "not a url", MYNTRA_URL, FLIPKART_URL, "https://www.amazon.in/dp/GONE"]

        result = await scraper_service.scrape_many(urls)

        seen = [p.url for p in result.successes] + [f.url for f in result.failures]
        assert sorted(seen) == sorted(urls)
        kinds = {f.url: f.kind for f in result.failures}
        assert kinds == {
            "not a url": "invalid_url",
            MYNTRA_URL: "platform_not_implemented",
            "https://www.amazon.in/dp/GONE": "not_found",
        }

    async def test_unrequestable_urls_are_invalid_not_unknown(self, scraper_service, pages):
        urls = [
            "  https://www.amazon.in/dp/X  ",
            "https://www.amazon.in/dp/B0\nX",
            "https://www.amazon.in x.com/dp/B0",
            FLIPKART_URL,
        ]

        result = await scraper_service.scrape_many(urls)

        assert [p.url for p in result.successes] == [FLIPKART_URL]
        assert {f.url: f.kind for f in result.failures} == {
            url: "invalid_url" for url in urls[:3]
        }
        assert [str(r.url) for r in pages.requests] == [FLIPKART_URL]

    async def test_bot_detection_affects_only_its_url(self, make_fetch_client, pages):
        blocked = "https://www.amazon.in/dp/BLOCKED"
        pages.pages[blocked] = (403, "Forbidden")
        service = ScraperService(make_fetch_client(pages.transport()), register_all_extractors())

        result = await service.scrape_many([blocked, FLIPKART_URL])

        assert [p.url for p in result.successes] == [FLIPKART_URL]
        assert result.failures[0].kind == "bot_detected"
        assert result.failures[0].error == "Access forbidden - possible bot detection"

    async def test_empty_batch(self, scraper_service):
        result = await scraper_service.scrape_many([])

        assert result.successes == []
        assert result.failures == []

    async def test_duplicate_urls_processed_independently(self, scraper_service):
        result = await scraper_service.scrape_many([AMAZON_URL, AMAZON_URL])

        assert len(result.successes) == 2

    async def test_unexpected_error_becomes_unknown_failure(self, make_fetch_client, pages):
        class BrokenExtractor(BaseExtractor):
            platform = Platform.AMAZON

            def extract(self, html: str, url: str) -> ScrapedProduct:
                raise RuntimeError("parser exploded")

        registry = ExtractorRegistry()
        registry.register(BrokenExtractor())
        service = ScraperService(make_fetch_client(pages.transport()), registry)

        result = await service.scrape_many([AMAZON_URL])

        assert result.failures == [ScrapeFailure(url=AMAZON_URL, error="parser exploded", kind="unknown")]

    @pytest.mark.parametrize("max_concurrency, expected_peak", [(2, 2), (None, 6)])
    async def test_concurrency_ceiling(self, make_fetch_client, max_concurrency, expected_peak):
        probe = ConcurrencyProbe()
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text=AMAZON_HTML))
        service = ScraperService(
            make_fetch_client(transport, sleep=probe),
            register_all_extractors(),
            max_concurrency=max_concurrency,
        )

        urls = [f"https://www.amazon.in/dp/B0{i}" for i in range(6)]
        result = await service.scrape_many(urls)

        assert len(result.successes) == 6
        assert probe.peak == expected_peak

    async def test_result_serialization(self, scraper_service):
        result = await scraper_service.scrape_many([AMAZON_URL, UNSUPPORTED_URL])

        data = result.to_dict()

        assert data["products"][0]["originalPrice"] == 79900
        assert data["products"][0]["platform"] == "Amazon"
        assert data["errors"] == [
            {
                "url": UNSUPPORTED_URL,
                "error": "Unsupported platform. Please use Amazon, Flipkart, Myntra, Snapdeal, Ajio URLs.",
            }
        ]

    def test_empty_result_serialization(self):
        assert ScrapeResult().to_dict() == {"products": [], "errors": []}


# ============================================================================
# TESTS: CALLER-SIDE RETRY
# ============================================================================

class TestTransientRetry:
    """Tests for the retry helper callers wrap around scrape calls."""

    async def test_retries_network_errors_until_success(self):
        calls = []

        @transient_retry(attempts=3, min_wait=0, max_wait=0)
        async def flaky():
            calls.append(1)
            if len(calls) < 3:
                raise NetworkError(AMAZON_URL, "HTTP 502")
            return "ok"

        assert await flaky() == "ok"
        assert len(calls) == 3

    async def test_gives_up_after_attempts(self):
        calls = []

        @transient_retry(attempts=2, min_wait=0, max_wait=0)
        async def always_down():
            calls.append(1)
            raise NetworkError(AMAZON_URL, "HTTP 503")

        with pytest.raises(NetworkError):
            await always_down()
        assert len(calls) == 2

    async def test_does_not_retry_permanent_errors(self):
        calls = []

        @transient_retry(attempts=3, min_wait=0, max_wait=0)
        async def missing():
            calls.append(1)
            raise NotFoundError(AMAZON_URL)

        with pytest.raises(NotFoundError):
            await missing()
        assert len(calls) == 1

    def test_is_retryable(self):
        assert is_retryable(NetworkError(AMAZON_URL, "x"))
        assert not is_retryable(NotFoundError(AMAZON_URL))
        assert not is_retryable(ValueError("x"))
