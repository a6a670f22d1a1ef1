"""Cursor state structures and termination helpers.

This module defines the data structures shared by cursors and child
ranges: the prefetch cache and the helpers deciding when a page is the last
one.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ...core.enums import LastPageSignal
from ...core.exceptions import ExtractionError
from ...core.types import LastPageExtractor
from .telemetry import log_page_error


@dataclass(frozen=True)
class PrefetchCache:
    """Result of the one-time discovery fetch.

    Attributes:
        page_index: Index of the page that was prefetched
        items: Items extracted from that page
        total_pages: Total page count reported by the backend
        is_last: Last-page signal evaluated for that page
    """

    page_index: int
    items: tuple[Any, ...]
    total_pages: int
    is_last: bool


@dataclass(frozen=True)
class LoadedPage:
    """Items of one page plus its evaluated last-page signal.

    Attributes:
        page_index: Zero-based page index
        items: Items in page order
        is_last: Whether the canonical signal marks this page as the last
        cached: Whether the items came from the prefetch cache
    """

    page_index: int
    items: Sequence[Any]
    is_last: bool
    cached: bool = False


def resolve_signal(is_last: LastPageExtractor | None) -> LastPageSignal:
    """Pick the canonical last-page signal for a cursor.

    A backend flag wins whenever the caller provides one; the short-page
    heuristic is used only otherwise.
    """
    if is_last is not None:
        return LastPageSignal.BACKEND_FLAG
    return LastPageSignal.SHORT_PAGE


def is_short_page(items: Sequence[Any], page_size: int) -> bool:
    """Short-page heuristic: fewer items than requested means no more data."""
    return len(items) < page_size


def read_last_flag(is_last: LastPageExtractor, page: Any, page_index: int) -> bool:
    """Read the backend's last-page flag.

    Raises:
        ExtractionError: If the extractor raises or the flag is missing
    """
    try:
        flag = is_last(page)
    except Exception as e:
        log_page_error(
            stage="extract",
            page_index=page_index,
            error_type=type(e).__name__,
            error_message=str(e),
        )
        raise ExtractionError(
            f"Last page extractor failed on page {page_index}: {e}", page_index=page_index
        ) from e
    if flag is None:
        log_page_error(
            stage="extract",
            page_index=page_index,
            error_type="MissingLastPageFlag",
            error_message="last-page flag is None",
        )
        raise ExtractionError(
            f"Page {page_index} carries no last-page flag but the cursor relies on it",
            page_index=page_index,
        )
    return bool(flag)


def check_total_pages(value: Any, page_index: int) -> int:
    """Validate a discovered total page count.

    Raises:
        ExtractionError: If the value is not a non-negative integer
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        log_page_error(
            stage="extract",
            page_index=page_index,
            error_type="InvalidTotalPages",
            error_message=f"total pages value {value!r}",
        )
        raise ExtractionError(
            f"Total pages extracted from page {page_index} must be a non-negative int, "
            f"got {value!r}",
            page_index=page_index,
        )
    return value
