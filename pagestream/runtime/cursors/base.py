"""Base class shared by cursors and child ranges."""

from __future__ import annotations

from abc import ABC, abstractmethod
from time import perf_counter
from typing import Any

from ...core.enums import Capability
from ...core.exceptions import ConfigurationError, ExtractionError, FetchError, PagingError
from ...core.types import Consumer, ItemExtractor, PageFetcher
from .definitions import LoadedPage
from .telemetry import log_page_error, log_page_fetched


class BasePageUnit(ABC):
    """Fetches and extracts pages for one traversal unit.

    Subclasses decide which pages they own and when they are exhausted.
    Collaborator failures are wrapped into FetchError / ExtractionError and
    propagated immediately; nothing is retried.
    """

    unit_kind = "unit"

    def __init__(
        self,
        page_size: int,
        fetcher: PageFetcher,
        extractor: ItemExtractor,
    ) -> None:
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
            raise ConfigurationError(f"page_size must be a positive int, got {page_size!r}")
        self._page_size = page_size
        self._fetcher = fetcher
        self._extractor = extractor

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def fetcher(self) -> PageFetcher:
        return self._fetcher

    @property
    def extractor(self) -> ItemExtractor:
        return self._extractor

    @property
    @abstractmethod
    def capabilities(self) -> Capability: ...

    @abstractmethod
    def advance_one(self, consume: Consumer) -> bool:
        """Deliver one page of items to ``consume``.

        Returns:
            True if more pages remain in this unit
        """

    @abstractmethod
    def split(self) -> BasePageUnit | None:
        """Hand off one page of work as an independent unit, if possible."""

    @abstractmethod
    def estimate_size(self) -> int:
        """Best known upper bound on the number of items."""

    def _fetch_page(self, page_index: int) -> Any:
        try:
            return self._fetcher(page_index, self._page_size)
        except Exception as e:
            log_page_error(
                stage="fetch",
                page_index=page_index,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            if isinstance(e, PagingError):
                raise
            raise FetchError(
                f"Failed to fetch page {page_index} (size {self._page_size}): {e}",
                page_index=page_index,
                page_size=self._page_size,
            ) from e

    def _extract_items(self, page: Any, page_index: int) -> list[Any]:
        try:
            return list(self._extractor(page))
        except Exception as e:
            log_page_error(
                stage="extract",
                page_index=page_index,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise ExtractionError(
                f"Failed to extract items from page {page_index}: {e}",
                page_index=page_index,
            ) from e

    def _fetch_items(self, page_index: int) -> tuple[Any, list[Any], float]:
        start = perf_counter()
        page = self._fetch_page(page_index)
        latency_ms = (perf_counter() - start) * 1000.0
        return page, self._extract_items(page, page_index), latency_ms

    def _deliver(self, loaded: LoadedPage, consume: Consumer, latency_ms: float | None) -> None:
        for item in loaded.items:
            consume(item)
        log_page_fetched(
            unit=self.unit_kind,
            page_index=loaded.page_index,
            page_size=self._page_size,
            items=len(loaded.items),
            cached=loaded.cached,
            latency_ms=latency_ms,
        )
