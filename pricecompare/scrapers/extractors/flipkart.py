"""Flipkart product page extractor.

Flipkart ships obfuscated, frequently rotated class names. Each chain lists
the current layout first and older layouts after it.
"""

from pricecompare.scrapers.base import BaseExtractor, Rule
from pricecompare.scrapers.platforms import Platform


class FlipkartExtractor(BaseExtractor):
    """Flipkart product detail extractor."""

    platform = Platform.FLIPKART

    title_rules = (
        Rule("span.VU-ZEz"),
        Rule("span.B_NuCI"),
        Rule("h1.yhB1nd"),
        Rule(".B_NuCI"),
        Rule("meta[property='og:title']", attr="content"),
    )

    price_rules = (
        Rule(".Nx9bqj.CxhGGd"),
        Rule("._30jeq3._16Jk6d"),
        Rule("._30jeq3"),
    )

    original_price_rules = (
        Rule(r".yRaY8j.A6\+E6v"),
        Rule("._3I9_wc._27UcVY"),
        Rule("._3I9_wc"),
    )

    image_rules = (
        Rule("._396cs4._2amPTt._3qGmMb", attr="src"),
        Rule("img._2r_T1I", attr="src"),
        Rule("img._396cs4", attr="src"),
        Rule("meta[property='og:image']", attr="content"),
    )

    rating_rules = (
        Rule(".XQDdHH"),
        Rule("div._3LWZlK"),
    )

    review_count_rules = (
        Rule("span._2_R_DZ"),
        Rule("span.Wphh3N"),
    )

    availability_rules = (
        Rule("._16FRp0"),
        Rule(".Z8JjpR"),
    )

    out_of_stock_keywords = (
        "out of stock",
        "sold out",
        "currently unavailable",
    )
