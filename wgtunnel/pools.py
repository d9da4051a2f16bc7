"""Object pool that can cap how many items are checked out at once."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Callable, Deque


class WaitPool:
    """Reuses objects; with a non-zero ``limit``, ``get`` blocks while
    ``limit`` items are checked out."""

    def __init__(self, limit: int, factory: Callable[[], Any]) -> None:
        self._limit = limit
        self._factory = factory
        self._free: Deque[Any] = deque()
        self._cond = threading.Condition()
        self._count = 0

    @property
    def limit(self) -> int:
        return self._limit

    def get(self) -> Any:
        """Take an item, creating one with the factory if none is free."""
        if self._limit:
            with self._cond:
                while self._count >= self._limit:
                    self._cond.wait()
                self._count += 1
        try:
            return self._free.pop()
        except IndexError:
            return self._factory()

    def put(self, item: Any) -> None:
        """Return an item to the pool."""
        self._free.append(item)
        if not self._limit:
            return
        with self._cond:
            self._count -= 1
            self._cond.notify()

    def count(self) -> int:
        """Number of items currently checked out (always 0 when unlimited)."""
        with self._cond:
            return self._count