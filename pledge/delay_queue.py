from __future__ import annotations

import heapq
import itertools


class DelayQ[T]:
    def __init__(self) -> None:
        self._delayed: list[tuple[float, int, T]] = []
        self._seq = itertools.count()

    def __len__(self) -> int:
        return len(self._delayed)

    def add(self, item: T, time: float) -> int:
        # items due at the same time come out in insertion order
        seq = next(self._seq)
        heapq.heappush(self._delayed, (time, seq, item))
        return seq

    def get(self, time: float) -> list[T]:
        items: list[T] = []
        while self._delayed and self._delayed[0][0] <= time:
            _, _, item = heapq.heappop(self._delayed)
            items.append(item)
        return items

    def next_time(self) -> float | None:
        return self._delayed[0][0] if self._delayed else None

    def empty(self) -> bool:
        return not self._delayed
