"""Services module for shared runtime state.

Services here are constructed once at process start and injected into the
scraper layer.
"""

from pricecompare.services.cache_service import (
    CacheEntry,
    CacheService,
    get_cache_service,
    product_cache_key,
    search_cache_key,
)

__all__ = [
    "CacheEntry",
    "CacheService",
    "get_cache_service",
    "product_cache_key",
    "search_cache_key",
]
