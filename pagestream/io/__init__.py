"""I/O adapters for concrete page sources."""

from .http import HTTPClient, HTTPPageSource, PageQuery

__all__ = ["HTTPClient", "HTTPPageSource", "PageQuery"]
