"""pagestream - lazy, decomposable traversal of paginated data sources."""

from .api import (
    counted_sequence,
    discovering_sequence,
    lazily_counted_sequence,
    page_counted_sequence,
    paged_sequence,
)
from .config import DEFAULT_PAGE_SIZE, PagingConfig
from .core import (
    Bound,
    Capability,
    ConfigurationError,
    Discover,
    ExactItemCount,
    ExactPageCount,
    ExtractionError,
    FetchError,
    LastPageSignal,
    LazyItemCount,
    PagingError,
    TraversalError,
)
from .models import Page, page_is_last, page_items, page_total_pages
from .runtime import (
    ChildRange,
    PageCursor,
    PagedSequence,
    ParallelTraversal,
    PrefetchedChildRange,
    PrefetchingCursor,
    TraversalResult,
    blocking_fetcher,
    collect_async,
    iterate_async,
)

__version__ = "0.1.0"

__all__ = [
    # Factories
    "paged_sequence",
    "counted_sequence",
    "lazily_counted_sequence",
    "page_counted_sequence",
    "discovering_sequence",
    # Configuration
    "DEFAULT_PAGE_SIZE",
    "PagingConfig",
    # Bounds
    "Bound",
    "Discover",
    "ExactItemCount",
    "ExactPageCount",
    "LazyItemCount",
    # Enums
    "Capability",
    "LastPageSignal",
    # Exceptions
    "PagingError",
    "FetchError",
    "ExtractionError",
    "ConfigurationError",
    "TraversalError",
    # Models
    "Page",
    "page_items",
    "page_total_pages",
    "page_is_last",
    # Runtime
    "ChildRange",
    "PageCursor",
    "PagedSequence",
    "ParallelTraversal",
    "PrefetchedChildRange",
    "PrefetchingCursor",
    "TraversalResult",
    "blocking_fetcher",
    "collect_async",
    "iterate_async",
]
