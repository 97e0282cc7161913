"""Pydantic schemas for the PriceCompare API.

All request/response models are defined here for easy import.
"""

from pricecompare.schemas.common import ApiResponse
from pricecompare.schemas.health import HealthCheckResponse
from pricecompare.schemas.scrape import (
    ScrapeErrorItem,
    ScrapeRequest,
    ScrapeResponseData,
    ScrapedProductResponse,
)

__all__ = [
    # Common
    "ApiResponse",
    # Health
    "HealthCheckResponse",
    # Scrape
    "ScrapeErrorItem",
    "ScrapeRequest",
    "ScrapeResponseData",
    "ScrapedProductResponse",
]
