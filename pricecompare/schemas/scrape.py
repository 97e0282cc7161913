"""Pydantic schemas for the scrape endpoint.

Field names mirror ScrapedProduct.to_dict() so the API speaks the same
camelCase shape the comparison UI consumes.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ScrapeRequest(BaseModel):
    """Batch of product URLs to scrape.

    ``urls`` is optional at the schema level so an empty or missing list is
    reported as a 400 by the endpoint rather than a validation error.
    """

    urls: Optional[List[str]] = Field(
        None,
        description="Product page URLs on supported platforms",
        examples=[["https://www.amazon.in/dp/B0CHX1W1XY"]],
    )


class ScrapedProductResponse(BaseModel):
    """A successfully scraped product."""

    title: str
    price: int = Field(..., ge=0)
    originalPrice: Optional[int] = None
    imageUrl: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    reviewCount: Optional[int] = Field(None, ge=0)
    inStock: bool
    url: str
    platform: str


class ScrapeErrorItem(BaseModel):
    """A URL that failed and the human-readable reason."""

    url: str
    error: str


class ScrapeResponseData(BaseModel):
    """Successes and failures of one batch."""

    products: List[ScrapedProductResponse] = []
    errors: List[ScrapeErrorItem] = []
