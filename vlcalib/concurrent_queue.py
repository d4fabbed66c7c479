"""Thread-safe FIFO queue with an end-of-data marker."""

from __future__ import annotations

import threading
from collections import deque
from typing import Generic, TypeVar

T = TypeVar("T")


class ConcurrentQueue(Generic[T]):
    """A FIFO queue shared between threads.

    Consumers may block on :meth:`pop_wait` until an item arrives or the
    producer signals the end of data.
    """

    def __init__(self) -> None:
        self._queue: deque[T] = deque()
        self._cond = threading.Condition()
        self._end_of_data = False
        self._num_pushed = 0

    def submit_end_of_data(self) -> None:
        """Mark that no more items will be pushed and wake all waiters."""
        with self._cond:
            self._end_of_data = True
            self._cond.notify_all()

    @property
    def end_of_data(self) -> bool:
        return self._end_of_data

    @property
    def total_pushed(self) -> int:
        """Number of items pushed since creation."""
        return self._num_pushed

    def __len__(self) -> int:
        with self._cond:
            return len(self._queue)

    def push(self, item: T) -> None:
        with self._cond:
            self._queue.append(item)
            self._num_pushed += 1
            self._cond.notify()

    def pop(self) -> T | None:
        """Take the oldest item without blocking; ``None`` if the queue is empty."""
        with self._cond:
            if not self._queue:
                return None
            return self._queue.popleft()

    def pop_wait(self) -> T | None:
        """Block until an item is available and take it.

        Returns ``None`` once the queue is empty and end of data has been submitted.
        """
        with self._cond:
            self._cond.wait_for(lambda: bool(self._queue) or self._end_of_data)
            if self._queue:
                return self._queue.popleft()
            return None

    def drain(self) -> list[T]:
        """Remove and return every queued item in order."""
        with self._cond:
            items = list(self._queue)
            self._queue.clear()
            return items