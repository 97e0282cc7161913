"""Base extractor interface.

All platform-specific extractors should inherit from BaseExtractor and
declare their fallback chains of lookup rules. The base class walks the
chains, normalizes the raw text and validates the mandatory fields.
"""

from abc import ABC
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import structlog
from bs4 import BeautifulSoup

from pricecompare.core.exceptions import ExtractionError
from pricecompare.scrapers.platforms import Platform
from pricecompare.scrapers.utils.normalizer import (
    clean_text,
    contains_any,
    parse_count,
    parse_price,
    parse_rating,
)


@dataclass(frozen=True)
class ScrapedProduct:
    """Normalized product data structure returned by all extractors."""

    title: str
    price: int
    url: str
    platform: Platform
    original_price: Optional[int] = None
    image_url: Optional[str] = None
    rating: Optional[float] = None  # 0.0 - 5.0
    review_count: Optional[int] = None
    in_stock: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys used by the HTTP surface."""
        return {
            "title": self.title,
            "price": self.price,
            "originalPrice": self.original_price,
            "imageUrl": self.image_url,
            "rating": self.rating,
            "reviewCount": self.review_count,
            "inStock": self.in_stock,
            "url": self.url,
            "platform": self.platform.display_name,
        }


@dataclass(frozen=True)
class Rule:
    """One lookup in a fallback chain.

    Reads the text of the first element matching ``selector``, or the
    value of ``attr`` on it when set.
    """

    selector: str
    attr: Optional[str] = None

    def apply(self, soup: BeautifulSoup) -> str:
        element = soup.select_one(self.selector)
        if element is None:
            return ""
        if self.attr:
            value = element.get(self.attr)
            if isinstance(value, list):
                value = " ".join(value)
            return (value or "").strip()
        return clean_text(element.get_text())


Chain = Tuple[Rule, ...]


class BaseExtractor(ABC):
    """Abstract base class for all platform extractors.

    Subclasses set ``platform`` and the per-field rule chains. Rules in a
    chain are ranked from most to least specific; the first one yielding a
    non-empty string wins. Extraction is a pure function of its input.
    """

    platform: Platform

    title_rules: Chain = ()
    price_rules: Chain = ()
    original_price_rules: Chain = ()
    image_rules: Chain = ()
    rating_rules: Chain = ()
    review_count_rules: Chain = ()
    availability_rules: Chain = ()

    # Any of these in the availability text marks the product unavailable
    out_of_stock_keywords: Tuple[str, ...] = ("out of stock", "currently unavailable")

    def __init__(self):
        """Initialize the extractor with a platform-bound logger."""
        self.logger = structlog.get_logger(__name__).bind(platform=self.platform.value)

    @staticmethod
    def parse_document(html: str) -> BeautifulSoup:
        return BeautifulSoup(html, "html.parser")

    @staticmethod
    def first_match(soup: BeautifulSoup, rules: Chain) -> str:
        """Walk a fallback chain and return the first non-empty value."""
        for rule in rules:
            value = rule.apply(soup)
            if value:
                return value
        return ""

    def extract(self, html: str, url: str) -> ScrapedProduct:
        """Extract a normalized product from a raw product page.

        Args:
            html: Raw page content
            url: URL the page was fetched from

        Returns:
            ScrapedProduct

        Raises:
            ExtractionError: If the title or the price cannot be found
        """
        soup = self.parse_document(html)

        title = self.extract_title(soup)
        price = parse_price(self.first_match(soup, self.price_rules))

        if not title:
            self.logger.warning("extraction_missing_field", url=url, field="title")
            raise ExtractionError(url, "title")
        if price is None:
            self.logger.warning("extraction_missing_field", url=url, field="price")
            raise ExtractionError(url, "price")

        original_price = parse_price(self.first_match(soup, self.original_price_rules)) or price

        product = ScrapedProduct(
            title=title,
            price=price,
            url=url,
            platform=self.platform,
            original_price=original_price,
            image_url=self.extract_image_url(soup),
            rating=parse_rating(self.first_match(soup, self.rating_rules)),
            review_count=parse_count(self.first_match(soup, self.review_count_rules)),
            in_stock=self.extract_in_stock(soup),
        )

        self.logger.debug("product_extracted", url=url, title=title, price=price)
        return product

    def extract_title(self, soup: BeautifulSoup) -> str:
        return clean_text(self.first_match(soup, self.title_rules))

    def extract_image_url(self, soup: BeautifulSoup) -> Optional[str]:
        image_url = self.first_match(soup, self.image_rules)
        if not image_url:
            return None
        if image_url.startswith("//"):
            return f"https:{image_url}"
        return image_url

    def extract_in_stock(self, soup: BeautifulSoup) -> bool:
        availability = self.first_match(soup, self.availability_rules)
        return not contains_any(availability, self.out_of_stock_keywords)
