"""Shared fixtures: an in-memory paged repository that records every fetch."""

from __future__ import annotations

import threading
from collections import Counter
from dataclasses import dataclass

import pytest

from pagestream import Page


@dataclass(frozen=True)
class Record:
    """Simple item type served by the repository."""

    id: int
    val: str


class PagedRepository:
    """Serves pages of an in-memory list and counts fetches per page index."""

    def __init__(self, source: list, *, fail_on: set[int] | None = None) -> None:
        self.source = source
        self.fail_on = fail_on or set()
        self.calls: Counter[int] = Counter()
        self.threads: set[int] = set()
        self._lock = threading.Lock()

    def fetch_page(self, page_index: int, page_size: int) -> Page:
        with self._lock:
            self.calls[page_index] += 1
            self.threads.add(threading.get_ident())
        if page_index in self.fail_on:
            raise ConnectionError(f"backend unavailable for page {page_index}")
        return Page.from_sequence(self.source, page_index, page_size)

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())


def make_records(count: int) -> list[Record]:
    return [Record(id=i, val=str(i)) for i in range(count)]


@pytest.fixture
def make_repo():
    """Factory fixture: make_repo(count, fail_on=None) -> PagedRepository."""

    def _make(count: int, *, fail_on: set[int] | None = None) -> PagedRepository:
        return PagedRepository(make_records(count), fail_on=fail_on)

    return _make


@pytest.fixture
def repo(make_repo) -> PagedRepository:
    """Repository holding 1000 records."""
    return make_repo(1000)


@pytest.fixture
def repo_of():
    """Factory fixture: repo_of(source) -> PagedRepository over an arbitrary list."""
    return PagedRepository
