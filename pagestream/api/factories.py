"""Factories building paged sequences.

Each factory returns a PagedSequence that is sequential by default:
iterate it directly, or hand it to ParallelTraversal / collect_async to
fan page fetches out across workers.

Example:
    >>> seq = counted_sequence(repo.fetch_page, page_items, count=1000, page_size=100)
    >>> users = list(seq)
"""

from __future__ import annotations

from collections.abc import Callable

from ..config import DEFAULT_PAGE_SIZE, PagingConfig
from ..core.bounds import Bound, Discover, ExactItemCount, ExactPageCount, LazyItemCount
from ..core.types import ItemExtractor, LastPageExtractor, PageFetcher, TotalPagesExtractor
from ..runtime.cursors import PageCursor, PrefetchingCursor
from ..runtime.sequence import PagedSequence

__all__ = [
    "paged_sequence",
    "counted_sequence",
    "lazily_counted_sequence",
    "page_counted_sequence",
    "discovering_sequence",
]


def paged_sequence(
    fetcher: PageFetcher,
    extractor: ItemExtractor,
    bound: Bound,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    start_page: int = 0,
    is_last: LastPageExtractor | None = None,
    config: PagingConfig | None = None,
) -> PagedSequence:
    """Create a lazily paged sequence.

    Args:
        fetcher: Called as fetcher(page_index, page_size), returns a page object
        extractor: Extracts the ordered items from a page object
        bound: ExactItemCount, ExactPageCount, LazyItemCount or Discover
        page_size: Items per page (ignored when config is given)
        start_page: Zero-based first page (ignored when config is given)
        is_last: Optional backend last-page flag extractor
        config: Optional PagingConfig providing page_size and start_page

    Returns:
        PagedSequence over the source

    Raises:
        ConfigurationError: If the configuration is invalid; no page is fetched
    """
    if config is None:
        config = PagingConfig.build(page_size=page_size, start_page=start_page)

    if isinstance(bound, Discover):
        cursor: PageCursor = PrefetchingCursor(
            config.page_size,
            fetcher,
            extractor,
            bound.total_pages_extractor,
            start_page=config.start_page,
            is_last=is_last,
        )
    else:
        cursor = PageCursor(
            config.page_size,
            fetcher,
            extractor,
            bound,
            start_page=config.start_page,
            is_last=is_last,
        )
    return PagedSequence(cursor)


def counted_sequence(
    fetcher: PageFetcher,
    extractor: ItemExtractor,
    *,
    count: int,
    page_size: int = DEFAULT_PAGE_SIZE,
    is_last: LastPageExtractor | None = None,
) -> PagedSequence:
    """Sequence over a result set whose item count is known up front."""
    return paged_sequence(
        fetcher, extractor, ExactItemCount(count), page_size=page_size, is_last=is_last
    )


def lazily_counted_sequence(
    fetcher: PageFetcher,
    extractor: ItemExtractor,
    *,
    count_supplier: Callable[[], int],
    page_size: int = DEFAULT_PAGE_SIZE,
    is_last: LastPageExtractor | None = None,
) -> PagedSequence:
    """Sequence whose item count is computed on first need.

    The supplier (e.g. a COUNT query) is not called until the sequence is
    traversed, split or sized, and then exactly once.
    """
    return paged_sequence(
        fetcher, extractor, LazyItemCount(count_supplier), page_size=page_size, is_last=is_last
    )


def page_counted_sequence(
    fetcher: PageFetcher,
    extractor: ItemExtractor,
    *,
    pages: int,
    page_size: int = DEFAULT_PAGE_SIZE,
    is_last: LastPageExtractor | None = None,
) -> PagedSequence:
    """Sequence over a result set whose page count is known up front."""
    return paged_sequence(
        fetcher, extractor, ExactPageCount(pages), page_size=page_size, is_last=is_last
    )


def discovering_sequence(
    fetcher: PageFetcher,
    extractor: ItemExtractor,
    total_pages_extractor: TotalPagesExtractor | None,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    is_last: LastPageExtractor | None = None,
) -> PagedSequence:
    """Sequence whose size is unknown until the first page is fetched.

    The first page is fetched once, when the sequence is first split, sized
    or advanced, and reused by whichever unit owns it.
    """
    return paged_sequence(
        fetcher, extractor, Discover(total_pages_extractor), page_size=page_size, is_last=is_last
    )
