"""Platform identifiers and URL classification.

Maps a product URL's host to one of the supported e-commerce platforms.
Classification is pure: it never touches the network.
"""

import re
from enum import Enum
from typing import Dict, Optional, Tuple
from urllib.parse import urlparse

from pricecompare.core.exceptions import InvalidUrlError


class Platform(str, Enum):
    """Supported e-commerce sources."""

    AMAZON = "amazon"
    FLIPKART = "flipkart"
    MYNTRA = "myntra"
    SNAPDEAL = "snapdeal"
    AJIO = "ajio"

    @property
    def display_name(self) -> str:
        return PLATFORM_NAMES[self]


PLATFORM_NAMES: Dict[Platform, str] = {
    Platform.AMAZON: "Amazon",
    Platform.FLIPKART: "Flipkart",
    Platform.MYNTRA: "Myntra",
    Platform.SNAPDEAL: "Snapdeal",
    Platform.AJIO: "Ajio",
}

# Checked in this order; first match wins
PLATFORM_HOST_FRAGMENTS: Tuple[Tuple[Platform, Tuple[str, ...]], ...] = (
    (Platform.AMAZON, ("amazon.in", "amazon.com")),
    (Platform.FLIPKART, ("flipkart.com",)),
    (Platform.MYNTRA, ("myntra.com",)),
    (Platform.SNAPDEAL, ("snapdeal.com",)),
    (Platform.AJIO, ("ajio.com",)),
)


def _has_control_chars(url: str) -> bool:
    return any(ord(ch) < 32 or ord(ch) == 127 for ch in url)


def _parse_host(url: str) -> Optional[str]:
    """Return the lowercased host of an absolute URL, or None if malformed.

    The URL must be requestable exactly as given: surrounding whitespace,
    control characters and spaces in the host are rejected.
    """
    if not url or not isinstance(url, str):
        return None
    if url != url.strip() or _has_control_chars(url):
        return None
    try:
        parsed = urlparse(url)
        # Accessing .port validates the netloc
        parsed.port
    except ValueError:
        return None
    if not parsed.scheme or not parsed.hostname or " " in parsed.netloc:
        return None
    return parsed.hostname.lower()


def is_valid_url(url: str) -> bool:
    """Check whether the string parses as an absolute URL with a host."""
    return _parse_host(url) is not None


def classify_url(url: str) -> Optional[Platform]:
    """Map a URL to its platform.

    Args:
        url: Product page URL

    Returns:
        Matching Platform, or None when the host is not supported

    Raises:
        InvalidUrlError: If the URL cannot be parsed
    """
    host = _parse_host(url)
    if host is None:
        raise InvalidUrlError(url)

    for platform, fragments in PLATFORM_HOST_FRAGMENTS:
        if any(fragment in host for fragment in fragments):
            return platform

    return None


def extract_product_id(url: str, platform: Platform) -> str:
    """Extract the shop-specific product identifier from a URL.

    Amazon: /dp/<ID> or /gp/product/<ID>
    Flipkart: /<slug>/p/<ID>
    Other platforms: the URL path

    Returns:
        Product identifier, the path when no pattern matches, or the raw
        URL when it cannot be parsed
    """
    if not is_valid_url(url):
        return url

    path = urlparse(url).path

    if platform == Platform.AMAZON:
        match = re.search(r"/(?:dp|gp/product)/([A-Z0-9]+)", path)
        return match.group(1) if match else path

    if platform == Platform.FLIPKART:
        match = re.search(r"/p/([^/?]+)", path)
        return match.group(1) if match else path

    return path


def supported_platform_names() -> list[str]:
    """Display names of every platform the classifier recognizes."""
    return [platform.display_name for platform, _ in PLATFORM_HOST_FRAGMENTS]
