"""Structured logging for cursor operations.

This module provides telemetry hooks for paging operations, emitting
structured logs through the standard logging module. The library never
installs handlers; applications decide where these records go.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_page_fetched(
    *,
    unit: str,
    page_index: int,
    page_size: int,
    items: int,
    cached: bool = False,
    latency_ms: float | None = None,
) -> None:
    """Log a page delivered to a consumer.

    Args:
        unit: Kind of unit that produced the page (cursor, child, prefetched_child)
        page_index: Zero-based page index
        page_size: Requested page size
        items: Number of items delivered
        cached: Whether the items came from the prefetch cache
        latency_ms: Fetch latency in milliseconds (None when cached)
    """
    logger.debug(
        "page_fetched",
        extra={
            "unit": unit,
            "page_index": page_index,
            "page_size": page_size,
            "items": items,
            "cached": cached,
            "latency_ms": latency_ms,
        },
    )


def log_cursor_split(*, page_index: int, page_size: int, prefetched: bool) -> None:
    """Log a page handed off to a child unit.

    Args:
        page_index: Page index the child is bound to
        page_size: Page size of the child
        prefetched: Whether the child reuses the prefetch cache
    """
    logger.debug(
        "cursor_split",
        extra={
            "page_index": page_index,
            "page_size": page_size,
            "prefetched": prefetched,
        },
    )


def log_prefetch_completed(
    *,
    page_index: int,
    items: int,
    total_pages: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of the one-time discovery fetch.

    Args:
        page_index: Page that was prefetched
        items: Number of items cached
        total_pages: Total page count discovered
        latency_ms: Fetch latency in milliseconds
    """
    logger.info(
        "prefetch_completed",
        extra={
            "page_index": page_index,
            "items": items,
            "total_pages": total_pages,
            "latency_ms": latency_ms,
        },
    )


def log_page_error(
    *,
    stage: str,
    page_index: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a failed fetch or extraction.

    Args:
        stage: "fetch" or "extract"
        page_index: Page the failure happened on
        error_type: Exception class name
        error_message: Exception message
    """
    logger.error(
        "page_error",
        extra={
            "stage": stage,
            "page_index": page_index,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_traversal_complete(
    *,
    units_used: int,
    total_items: int,
    workers: int,
    total_latency_ms: float | None = None,
) -> None:
    """Log completion of a parallel traversal.

    Args:
        units_used: Number of traversal units consumed
        total_items: Items delivered across all units
        workers: Distinct worker threads that consumed units
        total_latency_ms: Wall-clock time in milliseconds
    """
    logger.info(
        "traversal_complete",
        extra={
            "units_used": units_used,
            "total_items": total_items,
            "workers": workers,
            "total_latency_ms": total_latency_ms,
        },
    )
