"""Worker-pool runtime consuming decomposed sequences.

This module provides the ParallelTraversal class that decomposes a
sequence into single-page units, consumes each unit on a thread pool
worker, and aggregates the results.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any

from ..config import PagingConfig
from ..core.types import TraversalUnit
from .cursors.telemetry import log_traversal_complete
from .sequence import iter_units


@dataclass
class TraversalResult:
    """Result of a parallel traversal.

    Attributes:
        items: Collected items (empty for for_each)
        units_used: Number of traversal units consumed
        total_items: Number of items delivered
        workers: Number of distinct worker threads that consumed units
        latency_ms: Wall-clock time of the traversal in milliseconds
    """

    items: list[Any] = field(default_factory=list)
    units_used: int = 0
    total_items: int = 0
    workers: int = 0
    latency_ms: float | None = None


@dataclass
class _UnitOutcome:
    items: list[Any]
    delivered: int
    thread_id: int


class ParallelTraversal:
    """Consumes a decomposable sequence on a thread pool.

    Decomposition happens on the calling thread; each split-off unit is
    submitted to the pool as soon as it exists, and the remainder is
    submitted last. Unit failures propagate: the first error observed is re-raised
    once running units have finished, and units not yet started are
    cancelled.
    """

    def __init__(
        self,
        *,
        max_workers: int | None = None,
        config: PagingConfig | None = None,
    ) -> None:
        """Initialize parallel traversal.

        Args:
            max_workers: Worker threads (overrides config.max_workers)
            config: Optional paging configuration
        """
        self._config = config or PagingConfig()
        self._max_workers = max_workers or self._config.max_workers

    @property
    def max_workers(self) -> int | None:
        return self._max_workers

    def collect(self, sequence: TraversalUnit, *, ordered: bool | None = None) -> TraversalResult:
        """Collect every item of the sequence.

        Args:
            sequence: Root unit to decompose and consume
            ordered: Reassemble units in page order (defaults to config.ordered)

        Returns:
            TraversalResult holding the items
        """
        if ordered is None:
            ordered = self._config.ordered
        return self._run(sequence, action=None, ordered=ordered)

    def for_each(self, sequence: TraversalUnit, action: Callable[[Any], Any]) -> TraversalResult:
        """Apply ``action`` to every item, from worker threads.

        ``action`` must be thread-safe; no order across units is guaranteed.
        """
        return self._run(sequence, action=action, ordered=False)

    def _run(
        self,
        sequence: TraversalUnit,
        *,
        action: Callable[[Any], Any] | None,
        ordered: bool,
    ) -> TraversalResult:
        start = perf_counter()
        futures: list[Future[_UnitOutcome]] = []

        pool = ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="pagestream")
        try:
            for unit in iter_units(sequence):
                futures.append(pool.submit(_drain, unit, action))
            completed = futures if ordered else as_completed(futures)
            outcomes = [future.result() for future in completed]
        except BaseException:
            pool.shutdown(wait=True, cancel_futures=True)
            raise
        pool.shutdown(wait=True)

        result = TraversalResult(
            units_used=len(outcomes),
            total_items=sum(outcome.delivered for outcome in outcomes),
            workers=len({outcome.thread_id for outcome in outcomes}),
            latency_ms=(perf_counter() - start) * 1000.0,
        )
        if action is None:
            for outcome in outcomes:
                result.items.extend(outcome.items)

        log_traversal_complete(
            units_used=result.units_used,
            total_items=result.total_items,
            workers=result.workers,
            total_latency_ms=result.latency_ms,
        )
        return result


def _drain(unit: TraversalUnit, action: Callable[[Any], Any] | None) -> _UnitOutcome:
    items: list[Any] = []
    delivered = 0

    def consume(item: Any) -> None:
        nonlocal delivered
        delivered += 1
        if action is None:
            items.append(item)
        else:
            action(item)

    while unit.produce_next(consume):
        pass
    return _UnitOutcome(items=items, delivered=delivered, thread_id=threading.get_ident())
