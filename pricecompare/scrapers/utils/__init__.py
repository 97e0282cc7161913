"""Scraper utilities for user-agent rotation, data normalization and retry."""

from .user_agents import (
    get_random_user_agent,
    get_random_delay_ms,
    USER_AGENTS,
)
from .normalizer import (
    clean_text,
    parse_price,
    parse_rating,
    parse_count,
    contains_any,
)
from .retry import is_retryable, transient_retry


__all__ = [
    # User agents
    "get_random_user_agent",
    "get_random_delay_ms",
    "USER_AGENTS",
    # Normalization
    "clean_text",
    "parse_price",
    "parse_rating",
    "parse_count",
    "contains_any",
    # Retry decorators
    "is_retryable",
    "transient_retry",
]
