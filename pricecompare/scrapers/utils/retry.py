"""Caller-side retry with exponential backoff for scraping calls.

The scraping pipeline itself never retries. Callers that want to retry
transient failures wrap their own call with one of these decorators; only
errors whose kind is marked retryable (network errors and timeouts) are
retried, everything else is re-raised on the first attempt.
"""

import logging

from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception,
    before_sleep_log,
)
import structlog

from pricecompare.core.exceptions import ScraperError


logger = structlog.get_logger(__name__)


def is_retryable(exc: BaseException) -> bool:
    """Return True for scraper errors whose kind is worth retrying."""
    return isinstance(exc, ScraperError) and exc.retryable


def transient_retry(attempts: int = 3, min_wait: float = 2, max_wait: float = 30):
    """Build a retry decorator for retryable scraper errors.

    Args:
        attempts: Total attempts including the first call
        min_wait: Minimum backoff in seconds
        max_wait: Maximum backoff in seconds

    Returns:
        tenacity retry decorator
    """
    return retry(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception(is_retryable),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
