"""Bounded queue of packet batches held back until a session key exists."""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Generic, List, Optional, TypeVar

QUEUE_STAGED_SIZE = 128

T = TypeVar("T")


class StagedQueue(Generic[T]):
    """FIFO of outbound batches waiting for a handshake to complete.

    When the queue is full, staging a new batch evicts the oldest ones so
    that the most recent traffic is kept.
    """

    def __init__(self, capacity: int = QUEUE_STAGED_SIZE) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._items: Deque[T] = deque()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __bool__(self) -> bool:
        return len(self) > 0

    def stage(self, batch: T) -> List[T]:
        """Queue ``batch``; return the older batches dropped to make room."""
        dropped: List[T] = []
        with self._lock:
            while len(self._items) >= self._capacity:
                dropped.append(self._items.popleft())
            self._items.append(batch)
        return dropped

    def pop(self) -> Optional[T]:
        """Take the oldest batch, or None if nothing is staged."""
        with self._lock:
            if not self._items:
                return None
            return self._items.popleft()

    def flush(self) -> List[T]:
        """Remove and return every staged batch, oldest first."""
        with self._lock:
            drained = list(self._items)
            self._items.clear()
        return drained