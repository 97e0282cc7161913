"""Custom exception classes for the application."""

from typing import Optional


class PriceCompareException(Exception):
    """Base exception for all PriceCompare errors."""

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(self.message)


class ScraperError(PriceCompareException):
    """Raised when scraping a single product URL fails.

    Every subclass carries a stable ``kind`` code so callers can decide
    whether to retry, skip, or surface the failure.
    """

    kind: str = "unknown"
    retryable: bool = False

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(message)


class InvalidUrlError(ScraperError):
    """Raised when the input does not parse as an absolute URL."""

    kind = "invalid_url"

    def __init__(self, url: str):
        super().__init__(url, "Invalid URL format")


class UnsupportedPlatformError(ScraperError):
    """Raised when the URL host belongs to no known platform."""

    kind = "unsupported_platform"

    def __init__(self, url: str, supported: Optional[list] = None):
        message = "Unsupported platform"
        if supported:
            message += f". Please use {', '.join(supported)} URLs."
        super().__init__(url, message)


class PlatformNotImplementedError(ScraperError):
    """Raised when a platform is recognized but has no registered extractor."""

    kind = "platform_not_implemented"

    def __init__(self, url: str, platform: str):
        self.platform = platform
        super().__init__(url, f"{platform} scraping is not yet implemented")


class NetworkError(ScraperError):
    """Raised on transport failures and unexpected upstream statuses."""

    kind = "network_error"
    retryable = True

    def __init__(self, url: str, message: str):
        super().__init__(url, f"Failed to fetch: {message}")


class FetchTimeoutError(ScraperError):
    """Raised when the upstream request exceeds its timeout."""

    kind = "timeout"
    retryable = True

    def __init__(self, url: str):
        super().__init__(url, "Request timed out")


class BotDetectedError(ScraperError):
    """Raised when the upstream site answers 403 Forbidden."""

    kind = "bot_detected"

    def __init__(self, url: str):
        super().__init__(url, "Access forbidden - possible bot detection")


class NotFoundError(ScraperError):
    """Raised when the upstream site answers 404 Not Found."""

    kind = "not_found"

    def __init__(self, url: str):
        super().__init__(url, "Product not found")


class ExtractionError(ScraperError):
    """Raised when a parsed page lacks a mandatory field."""

    kind = "extraction_error"

    def __init__(self, url: str, missing_field: str):
        self.missing_field = missing_field
        super().__init__(url, f"Failed to extract product {missing_field}")
