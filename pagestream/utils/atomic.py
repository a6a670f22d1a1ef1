"""Thread-safe primitives shared by cursors.

Both primitives keep their lock only around in-memory bookkeeping; no lock
is ever held while caller code (a page fetch, a count supplier) runs.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Generic, TypeVar

V = TypeVar("V")


class AtomicCounter:
    """Integer counter with atomic increment-and-fetch semantics.

    Example:
        counter = AtomicCounter(3)
        counter.get_and_increment()  # 3
        counter.increment_and_get()  # 5
    """

    def __init__(self, initial: int = 0) -> None:
        self._value = initial
        self._lock = threading.Lock()

    def get(self) -> int:
        with self._lock:
            return self._value

    def get_and_increment(self) -> int:
        """Atomically increment and return the previous value."""
        with self._lock:
            value = self._value
            self._value += 1
            return value

    def increment_and_get(self) -> int:
        """Atomically increment and return the new value."""
        with self._lock:
            self._value += 1
            return self._value

    def claim_below(self, limit: int) -> int | None:
        """Atomically claim the current value if ``value + 1 < limit``.

        Used by splits: the claimed value is handed off and the counter moves
        past it, so two concurrent claims can never return the same value.

        Args:
            limit: Exclusive upper bound the value after the claim must stay under

        Returns:
            The claimed value, or None if claiming it would reach the limit
        """
        with self._lock:
            value = self._value
            if value + 1 >= limit:
                return None
            self._value += 1
            return value


class _Pending:
    __slots__ = ("done", "value", "error")

    def __init__(self) -> None:
        self.done = threading.Event()
        self.value: object = None
        self.error: BaseException | None = None


class OnceCell(Generic[V]):
    """Exactly-once lazily initialised value.

    The first caller of ``get_or_init`` runs the factory; concurrent callers
    block until it finishes and share its result. If the factory raises, every
    waiting caller receives the error and the cell resets, so a later call may
    run the factory again.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending: _Pending | None = None
        self._value: V | None = None
        self._set = False

    @property
    def is_set(self) -> bool:
        with self._lock:
            return self._set

    def peek(self) -> V | None:
        """Return the value if initialised, else None, without initialising."""
        with self._lock:
            return self._value if self._set else None

    def get_or_init(self, factory: Callable[[], V]) -> V:
        with self._lock:
            if self._set:
                return self._value  # type: ignore[return-value]
            pending = self._pending
            owner = pending is None
            if owner:
                pending = self._pending = _Pending()

        assert pending is not None
        if not owner:
            pending.done.wait()
            if pending.error is not None:
                raise pending.error
            return pending.value  # type: ignore[return-value]

        try:
            value = factory()
        except BaseException as exc:
            with self._lock:
                self._pending = None
            pending.error = exc
            pending.done.set()
            raise

        with self._lock:
            self._value = value
            self._set = True
            self._pending = None
        pending.value = value
        pending.done.set()
        return value
