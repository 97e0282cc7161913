"""Register all extractors with a registry.

This module should be used during application startup to populate the
extractor registry handed to the scraper service.
"""

from typing import Optional

import structlog

from pricecompare.scrapers.factory import ExtractorRegistry
from pricecompare.scrapers.extractors import AmazonExtractor, FlipkartExtractor

logger = structlog.get_logger(__name__)


def register_all_extractors(registry: Optional[ExtractorRegistry] = None) -> ExtractorRegistry:
    """Register all available extractors.

    Myntra, Snapdeal and Ajio are recognized by the classifier but have no
    extractor yet, so scraping them fails with PlatformNotImplementedError.

    Args:
        registry: Registry to populate; a new one is created when omitted

    Returns:
        The populated registry
    """
    registry = registry if registry is not None else ExtractorRegistry()

    for extractor_class in (AmazonExtractor, FlipkartExtractor):
        registry.register(extractor_class())

    logger.info(
        "all_extractors_registered",
        count=len(registry.get_registered_platforms()),
        platforms=[p.value for p in registry.get_registered_platforms()],
    )

    return registry
