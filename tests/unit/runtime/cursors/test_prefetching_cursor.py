"""Unit tests for PrefetchingCursor.

Tests focus on the one-time discovery fetch: that the prefetched page is
never fetched twice, whoever ends up owning it.
"""

from __future__ import annotations

import threading
import time

import pytest

from pagestream import (
    ConfigurationError,
    ExtractionError,
    FetchError,
    Page,
    page_is_last,
    page_items,
    page_total_pages,
)
from pagestream.runtime.cursors import PrefetchedChildRange, PrefetchingCursor


def drain(unit) -> list:
    items: list = []
    while unit.advance_one(items.append):
        pass
    return items


def make_cursor(repo, page_size: int = 100, **kwargs) -> PrefetchingCursor:
    return PrefetchingCursor(page_size, repo.fetch_page, page_items, page_total_pages, **kwargs)


class TestPrefetchingCursorSequential:
    """Test sequential traversal with a discovered bound."""

    def test_yields_all_items_and_fetches_first_page_once(self, repo):
        cursor = make_cursor(repo)

        assert drain(cursor) == repo.source
        assert sorted(repo.calls) == list(range(10))
        assert repo.calls[0] == 1

    def test_nothing_fetched_at_construction(self, repo):
        cursor = make_cursor(repo)

        assert repo.total_calls == 0
        assert not cursor.prefetched
        assert cursor.total_pages is None

    def test_single_page_result_set_needs_one_fetch(self, make_repo):
        """A result set fitting one page is served entirely from the cache."""
        repo = make_repo(100)
        cursor = make_cursor(repo)

        assert drain(cursor) == repo.source
        assert repo.total_calls == 1

    def test_short_single_page(self, make_repo):
        repo = make_repo(42)
        cursor = make_cursor(repo)

        assert drain(cursor) == repo.source
        assert repo.total_calls == 1
        assert cursor.split() is None

    def test_zero_reported_pages_still_yields_prefetched_page(self):
        """A backend reporting zero pages yields the prefetched (empty) page and stops."""
        calls = []

        def fetch(page_index: int, page_size: int) -> Page:
            calls.append(page_index)
            return Page(items=[], page_index=page_index, page_size=page_size, total_pages=0)

        cursor = PrefetchingCursor(10, fetch, page_items, page_total_pages)

        assert cursor.estimate_size() == 0
        assert cursor.split() is None
        assert drain(cursor) == []
        assert calls == [0]

    def test_empty_source_discovers_one_blank_page(self, make_repo):
        """An empty source still reports one page; traversal yields nothing and succeeds."""
        repo = make_repo(0)
        cursor = make_cursor(repo)

        assert drain(cursor) == []
        assert cursor.total_pages >= 1
        assert cursor.estimate_size() >= 0
        assert dict(repo.calls) == {0: 1}

    def test_start_page_is_the_prefetched_page(self, repo):
        cursor = make_cursor(repo, start_page=7)

        assert drain(cursor) == repo.source[700:]
        assert repo.calls[7] == 1
        assert 0 not in repo.calls

    def test_backend_flag_mode(self, make_repo):
        repo = make_repo(300)
        cursor = make_cursor(repo, is_last=page_is_last)

        assert drain(cursor) == repo.source
        assert sorted(repo.calls) == [0, 1, 2]


class TestPrefetchingCursorSplit:
    """Test decomposition around the cached page."""

    def test_split_then_estimate_then_first_child_fetches_page_zero_once(self, repo):
        cursor = make_cursor(repo)

        child = cursor.split()
        assert cursor.estimate_size() == 1000
        items: list = []
        child.advance_one(items.append)

        assert items == repo.source[:100]
        assert repo.calls[0] == 1
        assert repo.total_calls == 1

    def test_first_split_child_owns_cached_page(self, repo):
        cursor = make_cursor(repo)

        child = cursor.split()

        assert isinstance(child, PrefetchedChildRange)
        assert child.page_index == 0
        assert child.estimate_size() == 100
        items: list = []
        assert child.advance_one(items.append) is False
        assert items == repo.source[:100]
        assert repo.calls[0] == 1

    def test_full_decomposition_fetches_each_page_once(self, repo):
        cursor = make_cursor(repo)
        units = []
        while (child := cursor.split()) is not None:
            units.append(child)
        units.append(cursor)

        assert len(units) == 10

        results: list = []
        for unit in units:
            results.extend(drain(unit))

        assert results == repo.source
        assert all(calls == 1 for calls in repo.calls.values())
        assert sorted(repo.calls) == list(range(10))

    def test_split_after_cursor_consumed_cached_page(self, repo):
        """Once the cursor has served page 0 itself, children fetch their own pages."""
        cursor = make_cursor(repo)
        first: list = []
        assert cursor.advance_one(first.append) is True

        child = cursor.split()

        assert not isinstance(child, PrefetchedChildRange)
        assert child.page_index == 1
        assert first == repo.source[:100]
        assert repo.calls[0] == 1


class TestPrefetchingCursorDiscovery:
    """Test the one-time discovery fetch."""

    def test_estimate_size_triggers_prefetch(self, repo):
        cursor = make_cursor(repo)

        assert cursor.estimate_size() == 1000
        assert cursor.prefetched
        assert cursor.total_pages == 10
        assert repo.calls[0] == 1

    def test_concurrent_first_callers_share_one_fetch(self, repo):
        """Callers racing on discovery wait for one fetch instead of issuing their own."""
        barrier = threading.Barrier(6)

        def slow_fetch(page_index: int, page_size: int) -> Page:
            time.sleep(0.05)
            return repo.fetch_page(page_index, page_size)

        cursor = PrefetchingCursor(100, slow_fetch, page_items, page_total_pages)
        sizes: list[int] = []
        lock = threading.Lock()

        def worker() -> None:
            barrier.wait()
            size = cursor.estimate_size()
            with lock:
                sizes.append(size)

        threads = [threading.Thread(target=worker) for _ in range(6)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sizes == [1000] * 6
        assert repo.calls[0] == 1

    def test_failed_prefetch_is_not_cached(self, make_repo):
        repo = make_repo(200)
        attempts = []

        def flaky(page_index: int, page_size: int) -> Page:
            attempts.append(page_index)
            if len(attempts) == 1:
                raise TimeoutError("read timed out")
            return repo.fetch_page(page_index, page_size)

        cursor = PrefetchingCursor(100, flaky, page_items, page_total_pages)

        with pytest.raises(FetchError):
            cursor.estimate_size()
        assert not cursor.prefetched

        assert cursor.estimate_size() == 200
        assert attempts == [0, 0]

    def test_total_pages_extractor_failure(self, repo):
        def broken(page):
            raise KeyError("totalPages")

        cursor = PrefetchingCursor(100, repo.fetch_page, page_items, broken)

        with pytest.raises(ExtractionError) as exc_info:
            cursor.split()
        assert exc_info.value.page_index == 0
        assert isinstance(exc_info.value.__cause__, KeyError)

    @pytest.mark.parametrize("value", [None, -1, "10", 2.5, True])
    def test_total_pages_must_be_non_negative_int(self, repo, value):
        cursor = PrefetchingCursor(100, repo.fetch_page, page_items, lambda page: value)

        with pytest.raises(ExtractionError, match="non-negative int"):
            cursor.estimate_size()

    def test_requires_total_pages_extractor(self, repo):
        with pytest.raises(ConfigurationError, match="total pages extractor"):
            PrefetchingCursor(100, repo.fetch_page, page_items, None)
        assert repo.total_calls == 0
