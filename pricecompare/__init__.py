"""PriceCompare: live price, stock and rating scraping across e-commerce platforms."""

__version__ = "0.1.0"
