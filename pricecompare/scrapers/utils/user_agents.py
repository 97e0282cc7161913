"""User-Agent rotation utilities for anti-detection."""

import random
from typing import List, Optional


# Fixed pool of realistic desktop-browser strings
# Chrome on Windows/macOS/Linux, Firefox on Windows, Safari on macOS
USER_AGENTS: List[str] = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.1 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
]


def get_random_user_agent(rng: Optional[random.Random] = None) -> str:
    """Get a random user-agent string from the pool.

    Args:
        rng: Random source; the module-level generator when omitted

    Returns:
        Random user-agent string
    """
    return (rng or random).choice(USER_AGENTS)


def get_random_delay_ms(
    min_ms: int, max_ms: int, rng: Optional[random.Random] = None
) -> int:
    """Pick a jitter interval in milliseconds, inclusive of both bounds.

    Args:
        min_ms: Lower bound
        max_ms: Upper bound

    Returns:
        Delay in milliseconds
    """
    return (rng or random).randint(min_ms, max_ms)
