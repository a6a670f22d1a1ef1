"""Cursor that discovers its bound by prefetching the first page.

Used when the total extent of the result set is unknown until a page has
been fetched. The first call to split, estimate_size or advance_one fetches
the starting page exactly once; concurrent first callers wait for that fetch
instead of issuing their own. The cached items are then handed to whichever
unit claims that page: the cursor's own first advance, or the first split's
child.
"""

from __future__ import annotations

from time import perf_counter
from typing import Any

from ...core.bounds import Discover
from ...core.exceptions import ConfigurationError, ExtractionError
from ...core.types import ItemExtractor, LastPageExtractor, PageFetcher, TotalPagesExtractor
from ...utils.atomic import OnceCell
from .child import ChildRange, PrefetchedChildRange
from .cursor import PageCursor
from .definitions import LoadedPage, PrefetchCache, check_total_pages
from .telemetry import log_page_error, log_prefetch_completed


class PrefetchingCursor(PageCursor):
    """Page cursor whose bound is the page count reported by the first page."""

    supports_discovery = True

    def __init__(
        self,
        page_size: int,
        fetcher: PageFetcher,
        extractor: ItemExtractor,
        total_pages_extractor: TotalPagesExtractor | None,
        *,
        start_page: int = 0,
        is_last: LastPageExtractor | None = None,
    ) -> None:
        """Initialize prefetching cursor.

        Args:
            page_size: Items requested per fetch
            fetcher: Called as fetcher(page_index, page_size)
            extractor: Extracts the ordered items from a fetched page
            total_pages_extractor: Reads the total page count off the first page
            start_page: Zero-based page to start from (the page prefetched)
            is_last: Optional backend last-page flag

        Raises:
            ConfigurationError: If no total pages extractor is supplied
        """
        if total_pages_extractor is None:
            raise ConfigurationError(
                "PrefetchingCursor requires a total pages extractor; "
                "use PageCursor with an explicit bound instead"
            )
        super().__init__(
            page_size,
            fetcher,
            extractor,
            Discover(total_pages_extractor),
            start_page=start_page,
            is_last=is_last,
        )
        self._total_pages_extractor = total_pages_extractor
        self._cache: OnceCell[PrefetchCache] = OnceCell()

    @property
    def prefetched(self) -> bool:
        return self._cache.is_set

    @property
    def total_pages(self) -> int | None:
        """Discovered total page count, or None before discovery."""
        cache = self._cache.peek()
        return cache.total_pages if cache is not None else None

    def estimate_size(self) -> int:
        return self._page_size * self._discover().total_pages

    def _discover(self) -> PrefetchCache:
        return self._cache.get_or_init(self._prefetch)

    def _prefetch(self) -> PrefetchCache:
        page_index = self._start_page
        page, items, latency_ms = self._fetch_items(page_index)
        total_pages = self._extract_total_pages(page, page_index)
        cache = PrefetchCache(
            page_index=page_index,
            items=tuple(items),
            total_pages=total_pages,
            is_last=self._evaluate_last(page, items, page_index),
        )
        log_prefetch_completed(
            page_index=page_index,
            items=len(cache.items),
            total_pages=total_pages,
            latency_ms=latency_ms,
        )
        return cache

    def _extract_total_pages(self, page: Any, page_index: int) -> int:
        try:
            value = self._total_pages_extractor(page)
        except Exception as e:
            log_page_error(
                stage="extract",
                page_index=page_index,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise ExtractionError(
                f"Failed to extract total pages from page {page_index}: {e}",
                page_index=page_index,
            ) from e
        return check_total_pages(value, page_index)

    def _page_limit(self) -> int:
        # the prefetched page is always inside the bound, even when the
        # backend reports zero pages for an empty result set
        cache = self._discover()
        return max(cache.total_pages, cache.page_index + 1)

    def _load(self, page_index: int) -> tuple[LoadedPage, float | None]:
        cache = self._discover()
        if page_index == cache.page_index:
            return (
                LoadedPage(
                    page_index=page_index,
                    items=cache.items,
                    is_last=cache.is_last,
                    cached=True,
                ),
                None,
            )
        return super()._load(page_index)

    def _make_child(self, page_index: int) -> ChildRange:
        cache = self._discover()
        if page_index == cache.page_index:
            return PrefetchedChildRange(
                page_index, self._page_size, cache.items, self._fetcher, self._extractor
            )
        return super()._make_child(page_index)
