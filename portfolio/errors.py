"""Exception types raised across the portfolio package."""

from __future__ import annotations

from typing import Optional


class PortfolioError(Exception):
    """Base class for all portfolio errors."""


class ConfigError(PortfolioError):
    """Raised when the site configuration is missing or malformed."""


class CatalogLoadError(PortfolioError):
    """Raised when a catalog source has no usable data."""


class SheetFetchError(CatalogLoadError):
    """Raised when the published sheet cannot be fetched.

    Attributes:
        url: The URL that was requested.
        status_code: HTTP status when a response was received, else ``None``.
    """

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        code = self.status_code if self.status_code is not None else "unknown"
        return f"HTTP {code} for {self.url}: {self.args[0]}"


class LayoutNotReady(PortfolioError):
    """Raised when a layout is requested for a container with no width yet."""
