"""HTTP fetch client for product pages.

Checks the page cache first, then applies a randomized pre-request delay,
rotates the User-Agent, and classifies transport and HTTP failures into
scraper errors. Successful responses are cached under the product key.
"""

import asyncio
import random
from typing import Awaitable, Callable, Dict, Optional

import httpx
import structlog

from pricecompare.config import settings
from pricecompare.core.exceptions import (
    BotDetectedError,
    FetchTimeoutError,
    InvalidUrlError,
    NetworkError,
    NotFoundError,
)
from pricecompare.scrapers.utils.user_agents import get_random_delay_ms, get_random_user_agent
from pricecompare.services.cache_service import CacheService, product_cache_key


logger = structlog.get_logger(__name__)


# Fixed browser-like headers sent with every request; User-Agent is added per call
DEFAULT_HEADERS: Dict[str, str] = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate, br",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}


class FetchClient:
    """Fetches raw product pages with caching and anti-detection measures.

    The cache is injected so every component in a process shares one
    instance, and tests can use an isolated one. The random source and the
    sleep function are injectable for deterministic tests.

    Concurrent fetches of the same uncached URL each hit the network unless
    ``single_flight`` is enabled, in which case callers share one in-flight
    request per cache key.
    """

    def __init__(
        self,
        cache: CacheService,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        min_delay_ms: Optional[int] = None,
        max_delay_ms: Optional[int] = None,
        timeout: Optional[float] = None,
        single_flight: Optional[bool] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize fetch client.

        Settings are read when the client is built, so omitted arguments
        follow the current configuration.

        Args:
            cache: Page cache shared with the rest of the process
            rng: Random source for jitter and User-Agent selection
            sleep: Coroutine function used for the pre-request delay
            min_delay_ms: Lower bound of the pre-request jitter
            max_delay_ms: Upper bound of the pre-request jitter
            timeout: Per-request timeout in seconds
            single_flight: Coalesce concurrent fetches of the same URL
            transport: Optional httpx transport (used by tests)
        """
        if min_delay_ms is None:
            min_delay_ms = settings.SCRAPER_MIN_DELAY_MS
        if max_delay_ms is None:
            max_delay_ms = settings.SCRAPER_MAX_DELAY_MS
        if timeout is None:
            timeout = settings.SCRAPER_TIMEOUT_SECONDS
        if single_flight is None:
            single_flight = settings.SCRAPER_SINGLE_FLIGHT

        if min_delay_ms < 0 or max_delay_ms < min_delay_ms:
            raise ValueError("delay bounds must satisfy 0 <= min_delay_ms <= max_delay_ms")

        self.cache = cache
        self.rng = rng or random.Random()
        self._sleep = sleep
        self.min_delay_ms = min_delay_ms
        self.max_delay_ms = max_delay_ms
        self.timeout = timeout
        self.single_flight = single_flight
        self._transport = transport
        self._inflight: Dict[str, asyncio.Task] = {}
        self.logger = logger.bind(service="fetch_client")

    def build_headers(self) -> Dict[str, str]:
        """Fixed headers plus a User-Agent drawn from the pool."""
        return {**DEFAULT_HEADERS, "User-Agent": get_random_user_agent(self.rng)}

    async def fetch(self, url: str) -> str:
        """Fetch raw page content for a URL.

        Args:
            url: Product page URL

        Returns:
            Page content as string

        Raises:
            BotDetectedError: Upstream answered 403
            NotFoundError: Upstream answered 404
            InvalidUrlError: httpx cannot build a request for the URL
            FetchTimeoutError: Request exceeded the timeout
            NetworkError: Any other transport failure or error status
        """
        key = product_cache_key(url)

        cached = await self.cache.get(key)
        if cached is not None:
            self.logger.info("cache_hit", url=url)
            return cached

        if not self.single_flight:
            return await self._fetch_and_store(url, key)

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fetch_and_store(url, key))
            self._inflight[key] = task
            task.add_done_callback(lambda _: self._inflight.pop(key, None))
        else:
            self.logger.debug("fetch_coalesced", url=url)

        return await asyncio.shield(task)

    async def _fetch_and_store(self, url: str, key: str) -> str:
        delay_ms = get_random_delay_ms(self.min_delay_ms, self.max_delay_ms, self.rng)
        await self._sleep(delay_ms / 1000)

        headers = self.build_headers()
        self.logger.info("fetch_started", url=url, delay_ms=delay_ms)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(url, headers=headers)

        except httpx.InvalidURL as e:
            self.logger.warning("fetch_invalid_url", url=url, error=str(e))
            raise InvalidUrlError(url) from e

        except httpx.TimeoutException as e:
            self.logger.warning("fetch_timeout", url=url, error=str(e))
            raise FetchTimeoutError(url) from e

        except httpx.HTTPError as e:
            self.logger.warning("fetch_network_error", url=url, error=str(e))
            raise NetworkError(url, str(e) or type(e).__name__) from e

        if response.status_code == 403:
            self.logger.warning("bot_detected", url=url)
            raise BotDetectedError(url)

        if response.status_code == 404:
            self.logger.warning("product_not_found", url=url)
            raise NotFoundError(url)

        if response.is_error:
            self.logger.warning("fetch_http_error", url=url, status_code=response.status_code)
            raise NetworkError(url, f"HTTP {response.status_code}")

        html = response.text
        await self.cache.set(key, html)

        self.logger.info(
            "fetch_succeeded",
            url=url,
            status_code=response.status_code,
            content_length=len(html),
        )
        return html
