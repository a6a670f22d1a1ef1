"""Custom exception hierarchy."""

from __future__ import annotations


class PagingError(Exception):
    """Base exception for all library errors."""

    pass


class FetchError(PagingError):
    """Page fetcher failed to retrieve a page.

    Raised when the caller-supplied fetcher raises. The original exception
    is chained as ``__cause__``. Never retried by the library.
    """

    def __init__(
        self,
        message: str,
        page_index: int | None = None,
        page_size: int | None = None,
    ) -> None:
        super().__init__(message)
        self.page_index = page_index
        self.page_size = page_size


class ExtractionError(PagingError):
    """Extractor assumptions about a page object were violated."""

    def __init__(self, message: str, page_index: int | None = None) -> None:
        super().__init__(message)
        self.page_index = page_index


class ConfigurationError(PagingError):
    """Invalid cursor or sequence configuration.

    Always raised at construction time, before any page is fetched.
    """

    pass


class TraversalError(PagingError):
    """A traversal unit was consumed in a way its contract forbids."""

    pass
