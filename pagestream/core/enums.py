"""Enumerations shared across the library."""

from __future__ import annotations

from enum import Enum, Flag, auto


class Capability(Flag):
    """Capability descriptor of a traversal unit.

    Consumed by whatever worker-pool runtime embeds a sequence, so it can
    decide whether to decompose and how to merge results.
    """

    ORDERED = auto()  # items within the unit come in page-then-position order
    IMMUTABLE = auto()  # the source is not modified by traversal
    SIZED = auto()  # size_estimate() is available before traversal ends
    SUBSIZED = auto()  # units produced by decomposition are SIZED too
    CONCURRENT = auto()  # disjoint units may be consumed concurrently
    SINGLE_PASS = auto()  # a unit cannot be replayed

    @classmethod
    def cursor(cls) -> Capability:
        """Capabilities of a splittable cursor."""
        return (
            cls.ORDERED
            | cls.IMMUTABLE
            | cls.SIZED
            | cls.SUBSIZED
            | cls.CONCURRENT
            | cls.SINGLE_PASS
        )

    @classmethod
    def child(cls) -> Capability:
        """Capabilities of a terminal single-page unit."""
        return cls.ORDERED | cls.IMMUTABLE | cls.SIZED | cls.SINGLE_PASS


class LastPageSignal(Enum):
    """Canonical end-of-data signal used by one cursor instance."""

    SHORT_PAGE = "short_page"
    BACKEND_FLAG = "backend_flag"
