"""Approximate running median over a reservoir sample."""

from __future__ import annotations

import random
from typing import Generic, TypeVar

T = TypeVar("T")


class StatisticalMedianFilter(Generic[T]):
    """Estimates the median of a stream by keeping a random reservoir of values."""

    def __init__(self, queue_size: int, seed: int) -> None:
        self.queue_size = queue_size
        self._rng = random.Random(seed)
        self.total = 0
        self._values: list[T] = []

    def __len__(self) -> int:
        return len(self._values)

    def push(self, value: T) -> None:
        self.total += 1
        if len(self._values) < self.queue_size:
            self._values.append(value)
            return

        if self._rng.randint(0, self.total) >= self.queue_size:
            return

        self._values[self._rng.randint(0, self.queue_size - 1)] = value

    def median(self) -> T:
        """Return the element at the middle position of the sorted reservoir."""
        if not self._values:
            raise ValueError("median of an empty filter")
        return sorted(self._values)[len(self._values) // 2]