"""Core components."""

from .bounds import (
    Bound,
    Discover,
    ExactItemCount,
    ExactPageCount,
    LazyItemCount,
    pages_for,
)
from .enums import Capability, LastPageSignal
from .exceptions import (
    ConfigurationError,
    ExtractionError,
    FetchError,
    PagingError,
    TraversalError,
)
from .types import (
    Consumer,
    ItemExtractor,
    LastPageExtractor,
    PageFetcher,
    TotalPagesExtractor,
    TraversalUnit,
)

__all__ = [
    # Bounds
    "Bound",
    "Discover",
    "ExactItemCount",
    "ExactPageCount",
    "LazyItemCount",
    "pages_for",
    # Enums
    "Capability",
    "LastPageSignal",
    # Exceptions
    "PagingError",
    "FetchError",
    "ExtractionError",
    "ConfigurationError",
    "TraversalError",
    # Contracts
    "Consumer",
    "ItemExtractor",
    "LastPageExtractor",
    "PageFetcher",
    "TotalPagesExtractor",
    "TraversalUnit",
]
