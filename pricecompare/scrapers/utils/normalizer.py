"""Data normalization utilities for price, rating and count parsing."""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Optional


_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")
_SIGNED_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")
_COUNT_RE = re.compile(r"\d[\d,]*")

MAX_RATING = 5.0
MIN_RATING = 0.0


def clean_text(text: Optional[str]) -> str:
    """Collapse runs of whitespace (including newlines) and trim.

    Args:
        text: Raw text node content

    Returns:
        Cleaned text, empty string for None
    """
    if not text:
        return ""
    return " ".join(text.split())


def parse_price(raw: Optional[str]) -> Optional[int]:
    """Parse a price string into a whole-unit, non-negative integer.

    Handles various formats:
    - "₹1,23,456" -> 123456
    - "$12.99" -> 13
    - "Rs. 499" -> 499
    - "abc" -> None

    Args:
        raw: Raw price string

    Returns:
        Price rounded half-up to the nearest whole unit, or None if no
        number could be found. Never returns zero in place of a failure.
    """
    if not raw:
        return None

    # Thousands separators and whitespace break up the digit run
    cleaned = re.sub(r"[,\s]", "", raw)

    match = _NUMBER_RE.search(cleaned)
    if not match:
        return None

    try:
        value = Decimal(match.group(0))
    except InvalidOperation:
        return None

    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def parse_rating(raw: Optional[str]) -> Optional[float]:
    """Parse the first number in a rating string, clamped into [0, 5].

    - "4.3 out of 5 stars" -> 4.3
    - "7" -> 5.0
    - "-1" -> 0.0

    Args:
        raw: Raw rating text

    Returns:
        Rating as float, or None if no number was found
    """
    if not raw:
        return None

    match = _SIGNED_NUMBER_RE.search(raw.replace(",", "."))
    if not match:
        return None

    rating = float(match.group(0))
    return min(MAX_RATING, max(MIN_RATING, rating))


def parse_count(raw: Optional[str]) -> Optional[int]:
    """Parse the first integer in a review/rating count string.

    - "1,234 ratings" -> 1234
    - "(56)" -> 56

    Args:
        raw: Raw count text

    Returns:
        Count as int, or None if missing or zero
    """
    if not raw:
        return None

    match = _COUNT_RE.search(raw)
    if not match:
        return None

    count = int(match.group(0).replace(",", ""))
    return count or None


def contains_any(text: Optional[str], keywords: Iterable[str]) -> bool:
    """Case-insensitive check whether any keyword occurs in text."""
    if not text:
        return False
    lowered = text.lower()
    return any(keyword.lower() in lowered for keyword in keywords)
