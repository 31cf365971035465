from __future__ import annotations

import heapq
from typing import Callable, Generic, Iterator, Optional, TypeVar

V = TypeVar("V")


class Grader(Generic[V]):
    """
    Values bucketed by integer grade, lowest grade first.

    Buckets keep insertion order. The heap holds each occupied grade once, plus
    stale entries for grades emptied since; those are dropped lazily.
    """

    def __init__(self):
        self._rows: dict[int, list[V]] = {}
        self._heap: list[int] = []
        self._queued: set[int] = set()

    def __len__(self) -> int:
        return sum(len(row) for row in self._rows.values())

    def grade_num(self) -> int:
        return len(self._rows)

    def clear(self):
        self._rows.clear()
        self._heap.clear()
        self._queued.clear()

    def add(self, grade: int, value: V):
        row = self._rows.get(grade)
        if row is None:
            row = self._rows[grade] = []
            if grade not in self._queued:
                heapq.heappush(self._heap, grade)
                self._queued.add(grade)
        row.append(value)

    def first_grade(self) -> Optional[int]:
        heap = self._heap
        while heap and heap[0] not in self._rows:
            self._queued.discard(heapq.heappop(heap))
        return heap[0] if heap else None

    def grades(self) -> Iterator[int]:
        return iter(sorted(self._rows))

    def split_off(self, grade: int, limit: int) -> Optional[list[V]]:
        """Remove and return the oldest ``limit`` values of ``grade``."""
        row = self._rows.pop(grade, None)
        if row is None:
            return None
        if len(row) > limit:
            self._rows[grade] = row[limit:]
            del row[limit:]
        return row

    def retain(self, keep: Callable[[int, V], bool]) -> int:
        """Drop values failing ``keep`` and the buckets left empty. Returns the drop count."""
        removed = 0
        for grade in list(self._rows):
            row = self._rows[grade]
            kept = [value for value in row if keep(grade, value)]
            removed += len(row) - len(kept)
            if kept:
                self._rows[grade] = kept
            else:
                del self._rows[grade]
        self._heap = list(self._rows)
        heapq.heapify(self._heap)
        self._queued = set(self._heap)
        return removed
