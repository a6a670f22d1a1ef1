"""Public construction API."""

from .factories import (
    counted_sequence,
    discovering_sequence,
    lazily_counted_sequence,
    page_counted_sequence,
    paged_sequence,
)

__all__ = [
    "paged_sequence",
    "counted_sequence",
    "lazily_counted_sequence",
    "page_counted_sequence",
    "discovering_sequence",
]
