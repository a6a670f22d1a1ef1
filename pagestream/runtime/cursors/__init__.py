"""Page cursors for lazy, decomposable traversal of paginated sources.

Architecture:
    - definitions.py: Prefetch cache, loaded page and termination helpers
    - base.py: Fetch/extract machinery shared by every unit
    - cursor.py: PageCursor (known bound)
    - prefetch.py: PrefetchingCursor (bound discovered from the first page)
    - child.py: Single-page units produced by splits
    - telemetry.py: Structured logging
"""

from __future__ import annotations

from .base import BasePageUnit
from .child import ChildRange, PrefetchedChildRange
from .cursor import PageCursor
from .definitions import LoadedPage, PrefetchCache
from .prefetch import PrefetchingCursor

__all__ = [
    "BasePageUnit",
    "ChildRange",
    "LoadedPage",
    "PageCursor",
    "PrefetchCache",
    "PrefetchedChildRange",
    "PrefetchingCursor",
]
