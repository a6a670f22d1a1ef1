"""Collaborator contracts consumed by the cursors."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol, TypeVar

from .enums import Capability

P = TypeVar("P")
T = TypeVar("T")

# fetcher(page_index, page_size) -> page object; must tolerate concurrent
# calls for distinct page indices
PageFetcher = Callable[[int, int], Any]
ItemExtractor = Callable[[Any], Sequence[Any]]
TotalPagesExtractor = Callable[[Any], int]
LastPageExtractor = Callable[[Any], "bool | None"]
Consumer = Callable[[Any], None]


class TraversalUnit(Protocol):
    """Three-operation contract a host runtime needs from a unit of work."""

    @property
    def capabilities(self) -> Capability: ...

    def produce_next(self, consumer: Consumer) -> bool:
        """Feed the next page of items to ``consumer``; False when exhausted."""
        ...

    def try_decompose(self) -> TraversalUnit | None:
        """Split off an independent unit, or None when no split is possible."""
        ...

    def size_estimate(self) -> int:
        """Best known upper bound on the number of items."""
        ...
