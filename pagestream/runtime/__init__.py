"""Runtime components: cursors, sequence adapter and host runtimes."""

from .async_bridge import blocking_fetcher, collect_async, iterate_async
from .cursors import (
    ChildRange,
    PageCursor,
    PrefetchCache,
    PrefetchedChildRange,
    PrefetchingCursor,
)
from .parallel import ParallelTraversal, TraversalResult
from .sequence import PagedSequence, iter_units

__all__ = [
    "ChildRange",
    "PageCursor",
    "PagedSequence",
    "ParallelTraversal",
    "PrefetchCache",
    "PrefetchedChildRange",
    "PrefetchingCursor",
    "TraversalResult",
    "blocking_fetcher",
    "collect_async",
    "iter_units",
    "iterate_async",
]
