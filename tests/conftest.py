"""Pytest configuration and shared fixtures."""

import asyncio
import random
from typing import Callable, Dict, List, Tuple

import httpx
import pytest

from pricecompare.scrapers.fetcher import FetchClient
from pricecompare.scrapers.register_extractors import register_all_extractors
from pricecompare.scrapers.scraper_service import ScraperService
from pricecompare.services.cache_service import CacheService


AMAZON_URL = "https://www.amazon.in/Apple-iPhone-15-128-GB/dp/B0CHX1W1XY?ref=sr_1_1"
FLIPKART_URL = "https://www.flipkart.com/apple-iphone-15-black-128-gb/p/itm6ac6485515ae4"
UNSUPPORTED_URL = "https://www.example.com/products/iphone-15"


AMAZON_HTML = """
<html>
  <head><title>Amazon.in</title></head>
  <body>
    <span id="productTitle">
        Apple iPhone 15 (128 GB) - Black
    </span>
    <div id="corePrice">
      <span class="a-price"><span class="a-offscreen">₹71,290.00</span>
        <span class="a-price-whole">71,290.</span>
      </span>
      <span class="a-price a-text-price"><span class="a-offscreen">₹79,900</span></span>
    </div>
    <img id="landingImage" src="https://m.media-amazon.com/images/I/71d7rfSl0wL._SX679_.jpg">
    <span class="a-icon-alt">4.3 out of 5 stars</span>
    <span id="acrCustomerReviewText">2,345 ratings</span>
    <div id="availability"><span>In stock</span></div>
  </body>
</html>
"""

FLIPKART_HTML = """
<html>
  <body>
    <h1><span class="VU-ZEz">Apple iPhone 15 (Black, 128 GB)</span></h1>
    <div class="Nx9bqj CxhGGd">₹1,23,456</div>
    <div class="yRaY8j A6+E6v">₹1,49,900</div>
    <img class="DByuf4 IZexXJ jLEJ7H" src="//rukminim2.flixcart.com/image/iphone.jpeg">
    <img class="_396cs4 _2amPTt _3qGmMb" src="//rukminim2.flixcart.com/image/iphone.jpeg">
    <div class="XQDdHH">4.6</div>
    <span class="Wphh3N">1,02,345 Ratings &amp; 5,678 Reviews</span>
  </body>
</html>
"""


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Async sleep stand-in that records requested delays and yields once."""

    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        await asyncio.sleep(0)


class PageTransport:
    """Builds an httpx.MockTransport serving canned pages by URL.

    Unknown URLs answer 404. Every request is recorded.
    """

    def __init__(self, pages: Dict[str, Tuple[int, str]]):
        self.pages = pages
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, body = self.pages.get(str(request.url), (404, "Not Found"))
        return httpx.Response(status_code, text=body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> CacheService:
    """An isolated cache on a fake clock."""
    return CacheService(default_ttl=24 * 60 * 60, sweep_interval=60, clock=clock)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def pages() -> PageTransport:
    return PageTransport({
        AMAZON_URL: (200, AMAZON_HTML),
        FLIPKART_URL: (200, FLIPKART_HTML),
    })


@pytest.fixture
def make_fetch_client(
    cache: CacheService, recording_sleep: RecordingSleep
) -> Callable[..., FetchClient]:
    """Factory for fetch clients with a seeded random source and fake sleep."""

    def factory(transport: httpx.AsyncBaseTransport, **kwargs) -> FetchClient:
        kwargs.setdefault("rng", random.Random(42))
        kwargs.setdefault("sleep", recording_sleep)
        return FetchClient(cache, transport=transport, **kwargs)

    return factory


@pytest.fixture
def scraper_service(make_fetch_client, pages: PageTransport) -> ScraperService:
    """Scraper service wired to canned Amazon and Flipkart pages."""
    return ScraperService(
        fetch_client=make_fetch_client(pages.transport()),
        registry=register_all_extractors(),
    )
