"""Health check endpoint."""

from fastapi import APIRouter, Depends

from pricecompare.dependencies import get_scraper_service
from pricecompare.schemas import HealthCheckResponse
from pricecompare.scrapers.scraper_service import ScraperService

router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(service: ScraperService = Depends(get_scraper_service)):
    """Report the platforms with a registered extractor and cache counters."""
    return HealthCheckResponse(
        status="ok",
        platforms=[p.value for p in service.registry.get_registered_platforms()],
        cache=service.fetch_client.cache.stats(),
    )
