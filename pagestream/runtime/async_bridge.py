"""Asyncio bridge for hosts that run an event loop.

Cursors block the calling thread while a page is fetched. These helpers
keep the event loop responsive by running every fetch in a worker thread,
and let coroutine-based fetchers (e.g. aiohttp) serve blocking cursors by
submitting each fetch back to the loop that owns the HTTP session.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from ..core.exceptions import ConfigurationError
from ..core.types import PageFetcher, TraversalUnit
from .sequence import iter_units

logger = logging.getLogger(__name__)

AsyncPageFetcher = Callable[[int, int], Awaitable[Any]]


async def iterate_async(sequence: TraversalUnit) -> AsyncIterator[Any]:
    """Iterate a sequence from a coroutine, one page per worker-thread hop.

    Items come in the same order as sequential iteration.
    """
    more = True
    while more:
        buffer: list[Any] = []
        more = await asyncio.to_thread(sequence.produce_next, buffer.append)
        for item in buffer:
            yield item


async def collect_async(sequence: TraversalUnit, *, max_concurrency: int = 4) -> list[Any]:
    """Decompose a sequence and consume its units concurrently.

    Args:
        sequence: Root unit to decompose and consume
        max_concurrency: Maximum units consumed at the same time

    Returns:
        All items, with units concatenated in page order
    """
    if max_concurrency <= 0:
        raise ConfigurationError(f"max_concurrency must be > 0, got {max_concurrency}")

    units = await asyncio.to_thread(lambda: list(iter_units(sequence)))
    semaphore = asyncio.Semaphore(max_concurrency)

    async def drain(unit: TraversalUnit) -> list[Any]:
        async with semaphore:
            items: list[Any] = []
            more = True
            while more:
                more = await asyncio.to_thread(unit.produce_next, items.append)
            return items

    logger.debug("collect_async_started", extra={"units": len(units)})
    tasks = [asyncio.create_task(drain(unit)) for unit in units]
    try:
        chunks = await asyncio.gather(*tasks)
    except BaseException:
        # no unit may start another page once the caller has its error
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    return [item for chunk in chunks for item in chunk]


def blocking_fetcher(
    async_fetch: AsyncPageFetcher,
    loop: asyncio.AbstractEventLoop,
    *,
    timeout: float | None = None,
) -> PageFetcher:
    """Adapt a coroutine page fetcher to the blocking fetcher contract.

    The returned callable submits each fetch to ``loop`` and blocks the
    calling worker thread until it completes. It must therefore be called
    from a thread other than the loop's own thread.

    Args:
        async_fetch: Coroutine function taking (page_index, page_size)
        loop: Running event loop that owns the fetch resources
        timeout: Optional per-fetch timeout in seconds; a fetch that times out
            is cancelled on the loop before TimeoutError is raised

    Returns:
        A blocking fetcher(page_index, page_size)
    """

    def fetch(page_index: int, page_size: int) -> Any:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is loop:
            raise ConfigurationError(
                "blocking fetcher called on its own event loop thread; "
                "consume the sequence through iterate_async or collect_async"
            )
        future = asyncio.run_coroutine_threadsafe(async_fetch(page_index, page_size), loop)
        try:
            return future.result(timeout)
        except concurrent.futures.TimeoutError:
            future.cancel()
            raise

    return fetch
