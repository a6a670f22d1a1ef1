"""Unit tests for AtomicCounter and OnceCell."""

from __future__ import annotations

import threading
import time

import pytest

from pagestream.utils import AtomicCounter, OnceCell


class TestAtomicCounter:
    """Test AtomicCounter."""

    def test_get_and_increment(self):
        counter = AtomicCounter(3)
        assert counter.get_and_increment() == 3
        assert counter.get() == 4

    def test_increment_and_get(self):
        counter = AtomicCounter()
        assert counter.increment_and_get() == 1
        assert counter.get() == 1

    def test_claim_below(self):
        counter = AtomicCounter(0)
        assert counter.claim_below(3) == 0
        assert counter.claim_below(3) == 1
        assert counter.claim_below(3) is None
        assert counter.get() == 2

    def test_concurrent_increments_are_unique(self):
        counter = AtomicCounter()
        seen: list[int] = []
        lock = threading.Lock()

        def worker() -> None:
            for _ in range(1000):
                value = counter.get_and_increment()
                with lock:
                    seen.append(value)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sorted(seen) == list(range(8000))


class TestOnceCell:
    """Test OnceCell."""

    def test_initialises_once(self):
        cell: OnceCell[int] = OnceCell()
        calls = []

        def factory() -> int:
            calls.append(1)
            return 7

        assert cell.peek() is None
        assert cell.get_or_init(factory) == 7
        assert cell.get_or_init(factory) == 7
        assert cell.is_set
        assert cell.peek() == 7
        assert len(calls) == 1

    def test_concurrent_callers_share_result(self):
        cell: OnceCell[object] = OnceCell()
        calls = []
        barrier = threading.Barrier(5)
        results: list[object] = []
        lock = threading.Lock()

        def factory() -> object:
            calls.append(1)
            time.sleep(0.05)
            return object()

        def worker() -> None:
            barrier.wait()
            value = cell.get_or_init(factory)
            with lock:
                results.append(value)

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(calls) == 1
        assert len({id(value) for value in results}) == 1

    def test_failure_resets_cell(self):
        cell: OnceCell[int] = OnceCell()

        def failing() -> int:
            raise RuntimeError("supplier down")

        with pytest.raises(RuntimeError):
            cell.get_or_init(failing)

        assert not cell.is_set
        assert cell.get_or_init(lambda: 5) == 5
