"""HTTP JSON page source.

Fetches pages of a JSON REST endpoint addressed by page number and page
size, and reads items, page counts and last-page flags from the decoded
body. Fetching is asynchronous (aiohttp); use ``HTTPPageSource.blocking`` to
drive a cursor from worker threads.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

import aiohttp
from pydantic import BaseModel, ConfigDict, Field

from ..core.exceptions import FetchError
from ..core.types import PageFetcher
from ..runtime.async_bridge import blocking_fetcher


class HTTPClient:
    """aiohttp session owner for JSON page requests.

    One session is shared by every page request of a source. Headers given at
    construction are sent with every request; per-request headers override
    them key by key.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.default_headers = dict(headers or {})
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def resolve(self, url: str) -> str:
        """Absolute URL for ``url``, joined onto base_url when relative."""
        if self.base_url and not url.startswith(("http://", "https://")):
            return f"{self.base_url}/{url.lstrip('/')}"
        return url

    async def get_json(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """GET ``url`` and decode the body as JSON, whatever its content type.

        Raises:
            aiohttp.ClientResponseError: On a non-2xx status
        """
        merged = {**self.default_headers, **(headers or {})}
        async with self.session.get(
            self.resolve(url), params=dict(params or {}), headers=merged or None
        ) as response:
            response.raise_for_status()
            return await response.json(content_type=None)

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


class PageQuery(BaseModel):
    """Describes how one paginated JSON endpoint is addressed and read.

    Keys may be dotted paths into nested objects, e.g. ``"page.totalPages"``.
    """

    url: str = Field(..., min_length=1)
    page_param: str = "page"
    size_param: str = "size"
    one_based: bool = False
    items_key: str = "items"
    total_pages_key: str | None = "total_pages"
    is_last_key: str | None = None
    params: dict[str, Any] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class HTTPPageSource:
    """Fetcher and extractors for one paginated JSON endpoint."""

    def __init__(self, query: PageQuery, client: HTTPClient | None = None) -> None:
        self._query = query
        self._client = client or HTTPClient()

    @property
    def query(self) -> PageQuery:
        return self._query

    def page_params(self, page_index: int, page_size: int) -> dict[str, Any]:
        """Query parameters addressing one zero-based page."""
        params = dict(self._query.params)
        params[self._query.page_param] = page_index + 1 if self._query.one_based else page_index
        params[self._query.size_param] = page_size
        return params

    async def fetch(self, page_index: int, page_size: int) -> Any:
        """Fetch one page; page_index is always zero-based here.

        Raises:
            FetchError: If the request fails or returns a non-2xx status
        """
        try:
            return await self._client.get_json(
                self._query.url,
                params=self.page_params(page_index, page_size),
                headers=self._query.headers,
            )
        except aiohttp.ClientResponseError as e:
            raise FetchError(
                f"GET {self._query.url} page {page_index} returned HTTP {e.status}: {e.message}",
                page_index=page_index,
                page_size=page_size,
            ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchError(
                f"GET {self._query.url} page {page_index} failed: {type(e).__name__}: {e}",
                page_index=page_index,
                page_size=page_size,
            ) from e

    def blocking(self, loop: asyncio.AbstractEventLoop, *, timeout: float | None = None) -> PageFetcher:
        """Blocking fetcher submitting to ``loop``, for use from worker threads."""
        return blocking_fetcher(self.fetch, loop, timeout=timeout)

    def items(self, page: Any) -> list[Any]:
        """Item extractor."""
        value = _lookup(page, self._query.items_key)
        if not isinstance(value, list):
            raise ValueError(f"'{self._query.items_key}' is not a list in page body")
        return value

    def total_pages(self, page: Any) -> int:
        """Total pages extractor."""
        if self._query.total_pages_key is None:
            raise ValueError("PageQuery has no total_pages_key")
        return _lookup(page, self._query.total_pages_key)

    def is_last(self, page: Any) -> bool | None:
        """Last page extractor; None when the body carries no flag."""
        if self._query.is_last_key is None:
            return None
        try:
            return _lookup(page, self._query.is_last_key)
        except KeyError:
            return None

    async def close(self) -> None:
        await self._client.close()

    async def __aenter__(self) -> HTTPPageSource:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def _lookup(data: Any, path: str) -> Any:
    current = data
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            raise KeyError(path)
        current = current[part]
    return current
