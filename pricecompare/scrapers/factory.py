"""Registry mapping platforms to their extractor instances."""

from typing import Dict, Optional

import structlog

from pricecompare.core.exceptions import PlatformNotImplementedError
from pricecompare.scrapers.base import BaseExtractor
from pricecompare.scrapers.platforms import Platform


logger = structlog.get_logger(__name__)


class ExtractorRegistry:
    """Registry of extractor implementations keyed by platform.

    Dispatch goes through get(); adding a platform means registering a
    new extractor, never editing the dispatch path.
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._extractors: Dict[Platform, BaseExtractor] = {}

    def register(self, extractor: BaseExtractor) -> None:
        """Register an extractor for its platform.

        Re-registering a platform replaces the previous extractor.

        Args:
            extractor: Extractor instance (must inherit from BaseExtractor)
        """
        if not isinstance(extractor, BaseExtractor):
            raise ValueError(f"Extractor must inherit from BaseExtractor: {extractor!r}")

        self._extractors[extractor.platform] = extractor
        logger.info(
            "extractor_registered",
            platform=extractor.platform.value,
            extractor=type(extractor).__name__,
        )

    def find(self, platform: Platform) -> Optional[BaseExtractor]:
        """Return the extractor for a platform, or None if not registered."""
        return self._extractors.get(platform)

    def get(self, platform: Platform, url: str = "") -> BaseExtractor:
        """Return the extractor for a platform.

        Args:
            platform: Platform identifier
            url: URL being scraped, carried into the error

        Raises:
            PlatformNotImplementedError: If no extractor is registered
        """
        extractor = self._extractors.get(platform)
        if extractor is None:
            logger.warning("extractor_not_found", platform=platform.value)
            raise PlatformNotImplementedError(url, platform.display_name)
        return extractor

    def get_registered_platforms(self) -> list[Platform]:
        """Get list of platforms with a registered extractor."""
        return list(self._extractors.keys())

    def has_extractor(self, platform: Platform) -> bool:
        """Check if an extractor is registered for a platform."""
        return platform in self._extractors
