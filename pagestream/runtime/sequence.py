"""Lazy sequence adapter bridging cursors to host runtimes.

PagedSequence wraps a cursor (or a child range) and exposes:
- the three-operation contract worker-pool runtimes rely on
  (produce_next, try_decompose, size_estimate) plus capability flags
- the Python iteration protocol for plain sequential consumption

A sequence is single-pass: each unit delivers its pages once. Units obtained
by decomposition cover disjoint page ranges and may be consumed concurrently
on different threads; only one thread may consume a given unit.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, Generic, TypeVar

from ..core.enums import Capability
from ..core.exceptions import TraversalError
from ..core.types import Consumer, TraversalUnit
from .cursors import BasePageUnit

T = TypeVar("T")


class PagedSequence(Generic[T]):
    """Traversable, decomposable view over one page unit."""

    def __init__(self, unit: BasePageUnit) -> None:
        self._unit = unit
        self._finished = False
        self._iterated = False

    @property
    def unit(self) -> BasePageUnit:
        return self._unit

    @property
    def capabilities(self) -> Capability:
        return self._unit.capabilities

    @property
    def finished(self) -> bool:
        return self._finished

    def produce_next(self, consumer: Consumer) -> bool:
        """Feed the next page of items to ``consumer``.

        Returns:
            True if more pages remain in this unit
        """
        if self._finished:
            return False
        more = self._unit.advance_one(consumer)
        if not more:
            self._finished = True
        return more

    def try_decompose(self) -> PagedSequence[T] | None:
        """Split one page off into an independent sequence, if possible."""
        child = self._unit.split()
        if child is None:
            return None
        return PagedSequence(child)

    def size_estimate(self) -> int:
        return self._unit.estimate_size()

    def __length_hint__(self) -> int:
        return self.size_estimate()

    def for_each_remaining(self, action: Callable[[T], Any]) -> None:
        """Apply ``action`` to every remaining item of this unit, in order."""
        while self.produce_next(action):
            pass

    def decompose(self) -> list[PagedSequence[T]]:
        """Split until no further split is possible.

        Returns:
            Every split-off child in page order, followed by this sequence,
            which keeps the remaining pages
        """
        return list(iter_units(self))

    def __iter__(self) -> Iterator[T]:
        if self._iterated:
            raise TraversalError("PagedSequence is single-pass and has already been iterated")
        self._iterated = True
        return self._iterate()

    def _iterate(self) -> Iterator[T]:
        buffer: list[T] = []
        more = True
        while more:
            more = self.produce_next(buffer.append)
            yield from buffer
            buffer.clear()

    def __repr__(self) -> str:
        return f"PagedSequence({self._unit!r})"


def iter_units(root: TraversalUnit) -> Iterator[Any]:
    """Yield split-off units in page order, then the root remainder.

    Splitting is lazy: each child is yielded as soon as it is split off, so
    a runtime can start consuming it while decomposition continues.
    """
    while True:
        child = root.try_decompose()
        if child is None:
            break
        yield child
    yield root
