"""Page data model."""

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..core.bounds import pages_for


class Page(BaseModel):
    """One page of a paginated result set.

    This is the default page shape understood by the bundled extractors.
    Fetchers may return any object instead, as long as matching extractors
    are supplied.
    """

    items: list[Any] = Field(default_factory=list)
    page_index: int = Field(..., ge=0)
    page_size: int = Field(..., gt=0)
    total_items: int | None = Field(default=None, ge=0)
    total_pages: int | None = Field(default=None, ge=0)
    is_last: bool | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_items_fit(self) -> "Page":
        """Validate a page never holds more than page_size items."""
        if len(self.items) > self.page_size:
            raise ValueError(
                f"page holds {len(self.items)} items, more than page_size={self.page_size}"
            )
        return self

    @classmethod
    def from_sequence(cls, source: Sequence[Any], page_index: int, page_size: int) -> "Page":
        """Cut one page out of an in-memory sequence.

        The reported page count is at least 1, so an empty source still has
        a (blank) first page.
        """
        start = page_index * page_size
        items = list(source[start : start + page_size])
        total = len(source)
        return cls(
            items=items,
            page_index=page_index,
            page_size=page_size,
            total_items=total,
            total_pages=max(pages_for(total, page_size), 1),
            is_last=start + page_size >= total,
        )


def page_items(page: Page) -> list[Any]:
    """Item extractor for Page."""
    return page.items


def page_total_pages(page: Page) -> int | None:
    """Total pages extractor for Page."""
    return page.total_pages


def page_is_last(page: Page) -> bool | None:
    """Last page extractor for Page."""
    return page.is_last
