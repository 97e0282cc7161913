"""Tests for the command-line scraper runner."""

import importlib.util
from pathlib import Path

import pytest

from pricecompare.config import settings
from pricecompare.scrapers.base import BaseExtractor, ScrapedProduct
from pricecompare.scrapers.extractors import FlipkartExtractor
from pricecompare.scrapers.factory import ExtractorRegistry
from pricecompare.scrapers.platforms import Platform
from pricecompare.scrapers.scraper_service import ScraperService

from conftest import AMAZON_URL, FLIPKART_URL


SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "run_scraper.py"


@pytest.fixture(scope="module")
def run_scraper():
    """The runner script loaded as a module."""
    spec = importlib.util.spec_from_file_location("run_scraper", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class BrokenAmazonExtractor(BaseExtractor):
    platform = Platform.AMAZON

    def extract(self, html: str, url: str) -> ScrapedProduct:
        raise RuntimeError("parser exploded")


class TestScrapeWithRetries:
    """Tests for the --retries batch path."""

    async def test_one_bad_url_does_not_abort_the_batch(self, run_scraper, make_fetch_client, pages):
        registry = ExtractorRegistry()
        registry.register(BrokenAmazonExtractor())
        registry.register(FlipkartExtractor())
        service = ScraperService(make_fetch_client(pages.transport()), registry)
        bad_url = "https://www.amazon.in/dp/B0\nX"

        result = await run_scraper._scrape_with_retries(
            service, [FLIPKART_URL, AMAZON_URL, bad_url], retries=2
        )

        assert [p.url for p in result.successes] == [FLIPKART_URL]
        assert {f.url: f.kind for f in result.failures} == {
            AMAZON_URL: "unknown",
            bad_url: "invalid_url",
        }
        assert result.failures[0].error == "parser exploded"


class TestBuildCliService:
    """Tests for the CLI service wiring."""

    def test_cache_uses_configured_ttl(self, run_scraper, monkeypatch):
        monkeypatch.setattr(settings, "CACHE_DEFAULT_TTL_SECONDS", 600)
        monkeypatch.setattr(settings, "CACHE_SWEEP_INTERVAL_SECONDS", 30)

        service = run_scraper.build_cli_service()

        cache = service.fetch_client.cache
        assert cache.default_ttl == 600
        assert cache.sweep_interval == 30

    def test_no_delay_disables_jitter(self, run_scraper):
        service = run_scraper.build_cli_service(no_delay=True)

        assert service.fetch_client.min_delay_ms == 0
        assert service.fetch_client.max_delay_ms == 0
