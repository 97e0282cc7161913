"""Dependency providers wiring the scraper service together."""

from typing import Optional

from pricecompare.config import settings
from pricecompare.scrapers.fetcher import FetchClient
from pricecompare.scrapers.register_extractors import register_all_extractors
from pricecompare.scrapers.scraper_service import ScraperService
from pricecompare.services.cache_service import CacheService, get_cache_service

_scraper_service: Optional[ScraperService] = None


def build_scraper_service(
    cache: Optional[CacheService] = None,
    fetch_client: Optional[FetchClient] = None,
) -> ScraperService:
    """Construct a fully wired scraper service.

    Args:
        cache: Cache to inject; the process-wide instance when omitted
        fetch_client: Fetch client to use; built from settings when omitted

    Returns:
        ScraperService with every extractor registered
    """
    cache = cache or get_cache_service()
    fetch_client = fetch_client or FetchClient(cache)
    return ScraperService(
        fetch_client=fetch_client,
        registry=register_all_extractors(),
        max_concurrency=settings.get_max_concurrency(),
    )


def get_scraper_service() -> ScraperService:
    """FastAPI dependency returning the process-wide scraper service.

    Usage:
        @router.post("/scrape")
        async def scrape(service: ScraperService = Depends(get_scraper_service)):
            ...
    """
    global _scraper_service

    if _scraper_service is None:
        _scraper_service = build_scraper_service()

    return _scraper_service
