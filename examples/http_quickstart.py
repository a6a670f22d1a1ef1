#!/usr/bin/env python3
"""Page through a JSON REST endpoint, sequentially or on a worker pool.

Example:
    python examples/http_quickstart.py https://api.example.com/users \
        --items-key content --total-pages-key totalPages --page-size 50
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from pagestream import PagedSequence, PrefetchingCursor, collect_async, iterate_async
from pagestream.io import HTTPPageSource, PageQuery


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Stream every item of a paginated JSON endpoint")
    p.add_argument("url")
    p.add_argument("--items-key", default="items")
    p.add_argument("--total-pages-key", default="total_pages")
    p.add_argument("--is-last-key", default=None)
    p.add_argument("--page-size", type=int, default=100)
    p.add_argument("--one-based", action="store_true")
    p.add_argument("--parallel", type=int, default=0, help="Concurrent pages (0 = sequential)")
    p.add_argument("--verbose", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    query = PageQuery(
        url=args.url,
        items_key=args.items_key,
        total_pages_key=args.total_pages_key,
        is_last_key=args.is_last_key,
        one_based=args.one_based,
    )
    async with HTTPPageSource(query) as source:
        cursor = PrefetchingCursor(
            args.page_size,
            source.blocking(asyncio.get_running_loop()),
            source.items,
            source.total_pages,
            is_last=source.is_last if args.is_last_key else None,
        )
        seq = PagedSequence(cursor)

        if args.parallel:
            items = await collect_async(seq, max_concurrency=args.parallel)
            for item in items:
                print(item)
            print(f"{len(items)} items")
        else:
            count = 0
            async for item in iterate_async(seq):
                print(item)
                count += 1
            print(f"{count} items")


if __name__ == "__main__":
    asyncio.run(main())
