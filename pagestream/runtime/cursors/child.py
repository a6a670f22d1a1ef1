"""Terminal single-page units produced by cursor splits."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ...core.enums import Capability
from ...core.types import Consumer, ItemExtractor, PageFetcher
from .base import BasePageUnit
from .definitions import LoadedPage


class ChildRange(BasePageUnit):
    """Exactly one page of work, never splittable.

    Fixes the footprint of each decomposed unit to a single fetch.
    """

    unit_kind = "child"

    def __init__(
        self,
        page_index: int,
        page_size: int,
        fetcher: PageFetcher,
        extractor: ItemExtractor,
    ) -> None:
        super().__init__(page_size, fetcher, extractor)
        self._page_index = page_index
        self._done = False

    @property
    def page_index(self) -> int:
        return self._page_index

    @property
    def capabilities(self) -> Capability:
        return Capability.child()

    def advance_one(self, consume: Consumer) -> bool:
        if self._done:
            return False
        self._done = True
        _, items, latency_ms = self._fetch_items(self._page_index)
        self._deliver(
            LoadedPage(page_index=self._page_index, items=items, is_last=True),
            consume,
            latency_ms,
        )
        return False

    def split(self) -> None:
        return None

    def estimate_size(self) -> int:
        return self._page_size

    def __repr__(self) -> str:
        return f"ChildRange(page_index={self._page_index}, page_size={self._page_size})"


class PrefetchedChildRange(ChildRange):
    """Child bound to the page cached by a prefetching cursor.

    Yields the cached items without fetching.
    """

    unit_kind = "prefetched_child"

    def __init__(
        self,
        page_index: int,
        page_size: int,
        items: Sequence[Any],
        fetcher: PageFetcher,
        extractor: ItemExtractor,
    ) -> None:
        super().__init__(page_index, page_size, fetcher, extractor)
        self._items = tuple(items)

    def advance_one(self, consume: Consumer) -> bool:
        if self._done:
            return False
        self._done = True
        self._deliver(
            LoadedPage(page_index=self._page_index, items=self._items, is_last=True, cached=True),
            consume,
            None,
        )
        return False

    def estimate_size(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return (
            f"PrefetchedChildRange(page_index={self._page_index}, "
            f"page_size={self._page_size}, items={len(self._items)})"
        )
