"""Amazon product page extractor.

Parses server-rendered Amazon (amazon.in / amazon.com) product detail pages.

Structure (desktop layout, with A/B and regional variants):
  - #productTitle (title)
  - .a-price-whole / #priceblock_ourprice / #priceblock_dealprice (price)
  - .a-text-price .a-offscreen (struck-through list price)
  - #landingImage / #imgBlkFront (main image)
  - span.a-icon-alt ("4.3 out of 5 stars")
  - #acrCustomerReviewText ("1,234 ratings")
  - #availability ("In stock" / "Currently unavailable.")
"""

from pricecompare.scrapers.base import BaseExtractor, Rule
from pricecompare.scrapers.platforms import Platform


class AmazonExtractor(BaseExtractor):
    """Amazon product detail extractor."""

    platform = Platform.AMAZON

    title_rules = (
        Rule("#productTitle"),
        Rule("h1.a-size-large"),
        Rule("span#productTitle"),
        Rule("meta[name='title']", attr="content"),
    )

    price_rules = (
        Rule(".a-price-whole"),
        Rule("#priceblock_ourprice"),
        Rule("#priceblock_dealprice"),
        Rule(".a-price .a-offscreen"),
    )

    original_price_rules = (
        Rule(".a-text-price .a-offscreen"),
        Rule("#priceblock_saleprice"),
    )

    image_rules = (
        Rule("#landingImage", attr="src"),
        Rule("#imgBlkFront", attr="src"),
        Rule(".a-dynamic-image", attr="src"),
        Rule("meta[property='og:image']", attr="content"),
    )

    rating_rules = (
        Rule("span.a-icon-alt"),
        Rule(".a-star-4-5 .a-icon-alt"),
        Rule("#acrPopover", attr="title"),
    )

    review_count_rules = (
        Rule("#acrCustomerReviewText"),
        Rule("span[data-hook='total-review-count']"),
    )

    availability_rules = (
        Rule("#availability"),
        Rule("#outOfStock"),
    )

    out_of_stock_keywords = (
        "out of stock",
        "unavailable",
        "currently unavailable",
    )
