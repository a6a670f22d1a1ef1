"""Bound policies describing how much data a cursor traverses.

A bound policy is selected once, at construction, and decides both when a
cursor stops splitting and when sequential traversal stops fetching.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .exceptions import ConfigurationError


@dataclass(frozen=True)
class ExactItemCount:
    """Total number of items is known up front.

    Attributes:
        count: Total number of items in the result set
    """

    count: int

    def __post_init__(self) -> None:
        """Validate item count."""
        if self.count < 0:
            raise ConfigurationError(f"ExactItemCount must be >= 0, got {self.count}")


@dataclass(frozen=True)
class ExactPageCount:
    """Total number of pages is known up front.

    Attributes:
        pages: Total number of pages in the result set
    """

    pages: int

    def __post_init__(self) -> None:
        """Validate page count."""
        if self.pages < 0:
            raise ConfigurationError(f"ExactPageCount must be >= 0, got {self.pages}")


@dataclass(frozen=True)
class LazyItemCount:
    """Total number of items is computed on first need.

    The supplier is called at most once per cursor, the first time the
    cursor needs its bound (split, size estimate or termination check).

    Attributes:
        supplier: Zero-argument callable returning the item count
    """

    supplier: Callable[[], int]

    def __post_init__(self) -> None:
        """Validate supplier."""
        if not callable(self.supplier):
            raise ConfigurationError("LazyItemCount requires a callable supplier")


@dataclass(frozen=True)
class Discover:
    """Total number of pages is discovered from the first fetched page.

    Attributes:
        total_pages_extractor: Reads the total page count off a page object
    """

    total_pages_extractor: Callable[[Any], int] | None = None

    def __post_init__(self) -> None:
        """Validate extractor presence."""
        if self.total_pages_extractor is None:
            raise ConfigurationError(
                "Discover bound requires a total pages extractor; "
                "use ExactItemCount or ExactPageCount when none is available"
            )


Bound = ExactItemCount | ExactPageCount | LazyItemCount | Discover


def pages_for(count: int, page_size: int) -> int:
    """Number of pages needed to hold ``count`` items.

    Args:
        count: Number of items
        page_size: Items per page

    Returns:
        ceil(count / page_size)
    """
    return -(-count // page_size)
