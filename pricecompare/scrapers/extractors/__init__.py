"""Platform-specific extractor implementations.

Each extractor module should implement a class that inherits from
BaseExtractor and declares its per-field fallback chains.
"""

from .amazon import AmazonExtractor
from .flipkart import FlipkartExtractor

__all__ = [
    "AmazonExtractor",
    "FlipkartExtractor",
]
