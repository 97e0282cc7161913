"""Scraper system for fetching live product data from e-commerce platforms.

This package provides:
- Platform classification of product URLs
- A fetch client with caching, jitter and User-Agent rotation
- Base extractor classes and per-platform extractors with fallback chains
- A registry mapping platforms to extractors
- The scraper service orchestrating single and batch scrapes
"""

from .platforms import Platform, classify_url, is_valid_url, extract_product_id
from .base import BaseExtractor, Rule, ScrapedProduct
from .factory import ExtractorRegistry
from .fetcher import FetchClient
from .scraper_service import ScraperService, ScrapeResult, ScrapeFailure

__all__ = [
    # Classification
    "Platform",
    "classify_url",
    "is_valid_url",
    "extract_product_id",
    # Base classes
    "BaseExtractor",
    "Rule",
    # Data structures
    "ScrapedProduct",
    "ScrapeResult",
    "ScrapeFailure",
    # Wiring
    "ExtractorRegistry",
    "FetchClient",
    "ScraperService",
]
