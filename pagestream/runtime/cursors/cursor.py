"""Page cursor: sequential advance plus page-granular decomposition.

A cursor walks a paginated source one page at a time. When run in parallel
it can be split repeatedly; each split hands exactly one page to a child
unit and moves the cursor one page further on:

    |   0    |   1    |   2    |   3    |
    | Parent |        |        |        |  No splits
    | Child  | Parent |        |        |  First split
    | Child  | Child  | Parent |        |  Second split
    | Child  | Child  | Child  | Parent |  Third split, no more splits

If traversal is purely sequential, split is never called and advance_one
handles paging on its own.
"""

from __future__ import annotations

from ...core.bounds import (
    Bound,
    Discover,
    ExactItemCount,
    ExactPageCount,
    LazyItemCount,
    pages_for,
)
from ...core.enums import Capability, LastPageSignal
from ...core.exceptions import ConfigurationError
from ...core.types import Consumer, ItemExtractor, LastPageExtractor, PageFetcher
from ...utils.atomic import AtomicCounter, OnceCell
from .base import BasePageUnit
from .child import ChildRange
from .definitions import LoadedPage, is_short_page, read_last_flag, resolve_signal
from .telemetry import log_cursor_split


class PageCursor(BasePageUnit):
    """Splittable cursor over a paginated source with a known bound.

    The page index is an atomic counter: a split running on one worker and
    the cursor's own advance running on another always claim distinct pages.
    """

    unit_kind = "cursor"
    supports_discovery = False

    def __init__(
        self,
        page_size: int,
        fetcher: PageFetcher,
        extractor: ItemExtractor,
        bound: Bound,
        *,
        start_page: int = 0,
        is_last: LastPageExtractor | None = None,
    ) -> None:
        """Initialize page cursor.

        Args:
            page_size: Items requested per fetch
            fetcher: Called as fetcher(page_index, page_size)
            extractor: Extracts the ordered items from a fetched page
            bound: ExactItemCount, ExactPageCount or LazyItemCount
            start_page: Zero-based page to start from
            is_last: Optional backend last-page flag; when given it is the only
                end-of-data signal this cursor uses

        Raises:
            ConfigurationError: If any argument is invalid
        """
        super().__init__(page_size, fetcher, extractor)
        if isinstance(start_page, bool) or not isinstance(start_page, int) or start_page < 0:
            raise ConfigurationError(f"start_page must be a non-negative int, got {start_page!r}")
        if isinstance(bound, Discover) and not self.supports_discovery:
            raise ConfigurationError("Discover bounds require a PrefetchingCursor")
        if not isinstance(bound, ExactItemCount | ExactPageCount | LazyItemCount | Discover):
            raise ConfigurationError(f"Unsupported bound policy: {bound!r}")

        self._bound = bound
        self._start_page = start_page
        self._position = AtomicCounter(start_page)
        self._is_last = is_last
        self._signal = resolve_signal(is_last)
        self._lazy_count: OnceCell[int] = OnceCell()
        self._exhausted = False

    @property
    def bound(self) -> Bound:
        return self._bound

    @property
    def start_page(self) -> int:
        return self._start_page

    @property
    def page_index(self) -> int:
        """Next page this cursor will claim."""
        return self._position.get()

    @property
    def last_page_signal(self) -> LastPageSignal:
        return self._signal

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    @property
    def capabilities(self) -> Capability:
        return Capability.cursor()

    def advance_one(self, consume: Consumer) -> bool:
        """Fetch the current page, feed its items to ``consume`` and move on.

        More pages remain unless the canonical last-page signal fires or the
        new position has reached the bound.
        """
        if self._exhausted:
            return False
        limit = self._page_limit()
        if self._position.get() >= limit:
            self._exhausted = True
            return False

        page_index = self._position.get_and_increment()
        loaded, latency_ms = self._load(page_index)
        self._deliver(loaded, consume, latency_ms)

        more = not loaded.is_last and page_index + 1 < limit
        if not more:
            self._exhausted = True
        return more

    def split(self) -> ChildRange | None:
        """Hand the current page off to a child and advance past it.

        Returns:
            A ChildRange bound to exactly one page, or None once the next
            page would reach the bound
        """
        if self._exhausted:
            return None
        page_index = self._position.claim_below(self._page_limit())
        if page_index is None:
            return None
        child = self._make_child(page_index)
        log_cursor_split(
            page_index=page_index,
            page_size=self._page_size,
            prefetched=child.unit_kind == "prefetched_child",
        )
        return child

    def estimate_size(self) -> int:
        """Best known upper bound on the total number of items."""
        bound = self._bound
        if isinstance(bound, ExactItemCount):
            return bound.count
        if isinstance(bound, ExactPageCount):
            return bound.pages * self._page_size
        return self._resolve_lazy_count()

    def _page_limit(self) -> int:
        """Exclusive page index at which traversal stops."""
        bound = self._bound
        if isinstance(bound, ExactPageCount):
            return bound.pages
        if isinstance(bound, ExactItemCount):
            return pages_for(bound.count, self._page_size)
        return pages_for(self._resolve_lazy_count(), self._page_size)

    def _resolve_lazy_count(self) -> int:
        bound = self._bound
        assert isinstance(bound, LazyItemCount)
        return self._lazy_count.get_or_init(lambda: _checked_count(bound.supplier()))

    def _load(self, page_index: int) -> tuple[LoadedPage, float | None]:
        page, items, latency_ms = self._fetch_items(page_index)
        return (
            LoadedPage(
                page_index=page_index,
                items=items,
                is_last=self._evaluate_last(page, items, page_index),
            ),
            latency_ms,
        )

    def _evaluate_last(self, page: object, items: list, page_index: int) -> bool:
        if self._signal is LastPageSignal.BACKEND_FLAG:
            assert self._is_last is not None
            return read_last_flag(self._is_last, page, page_index)
        return is_short_page(items, self._page_size)

    def _make_child(self, page_index: int) -> ChildRange:
        return ChildRange(page_index, self._page_size, self._fetcher, self._extractor)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(page_index={self.page_index}, "
            f"page_size={self._page_size}, bound={self._bound!r})"
        )


def _checked_count(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigurationError(f"Item count supplier must return a non-negative int, got {value!r}")
    return value
