"""PriceCompare scraping API -- FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from pricecompare.api.v1.router import api_v1_router
from pricecompare.config import settings
from pricecompare.dependencies import get_scraper_service
from pricecompare.services.cache_service import get_cache_service

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.DEBUG else logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    # Startup
    logger.info("Starting PriceCompare API server...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    # Builds the service and registers every extractor
    service = get_scraper_service()
    logger.info(
        f"Extractors registered for: "
        f"{', '.join(p.value for p in service.registry.get_registered_platforms())}"
    )

    cache = get_cache_service()
    cache.start()

    yield

    # Shutdown
    logger.info("Shutting down PriceCompare API server...")
    await cache.close()


app = FastAPI(
    title="PriceCompare API",
    description="Live cross-platform product price, stock and rating scraping",
    version="0.1.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

app.include_router(api_v1_router, prefix="/api/v1")
