"""Data models."""

from .page import Page, page_is_last, page_items, page_total_pages

__all__ = [
    "Page",
    "page_items",
    "page_total_pages",
    "page_is_last",
]
