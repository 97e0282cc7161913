"""Scrape API endpoint.

Accepts a small batch of product URLs and returns normalized product
records for the ones that could be scraped, plus a reason for each URL
that could not.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from pricecompare.config import settings
from pricecompare.dependencies import get_scraper_service
from pricecompare.schemas import ApiResponse, ScrapeRequest, ScrapeResponseData
from pricecompare.scrapers.scraper_service import ScraperService

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.post("", response_model=ApiResponse[ScrapeResponseData])
async def scrape_products(
    body: ScrapeRequest,
    service: ScraperService = Depends(get_scraper_service),
):
    """Scrape every URL in the batch concurrently.

    The URL-count ceiling is enforced here, not in the scraper service.
    Per-URL failures never fail the request; they are listed in
    ``data.errors``.
    """
    urls = body.urls or []

    if not urls:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please provide an array of product URLs",
        )

    if len(urls) > settings.SCRAPE_MAX_URLS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Maximum {settings.SCRAPE_MAX_URLS} URLs allowed per request",
        )

    result = await service.scrape_many(urls)

    logger.info(
        "scrape_request_complete",
        url_count=len(urls),
        succeeded=len(result.successes),
    )

    return ApiResponse(
        status="success",
        data=ScrapeResponseData.model_validate(result.to_dict()),
        message=f"Successfully scraped {len(result.successes)} out of {len(urls)} products",
    )
