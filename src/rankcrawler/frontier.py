"""
Frontier - Pending URL Storage

In-memory priority queue of discovered-but-not-yet-processed URLs, plus the
visited set that is the sole deduplication authority of a crawl session.
"""

import heapq
import itertools
import threading
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class FrontierEntry:
    url: str
    depth: int

    def __post_init__(self):
        if self.depth < 1:
            raise ValueError(f"depth must be >= 1, got {self.depth}")


@dataclass(frozen=True)
class ScoredEntry:
    entry: FrontierEntry
    score: int


class VisitedSet:
    """
    Set of URLs claimed by the current session.

    add_if_absent() is the only way in: check and insert happen under one
    lock, so concurrent producers can never both claim the same URL.
    """

    def __init__(self):
        self._urls: set[str] = set()
        self._lock = threading.Lock()

    def add_if_absent(self, url: str) -> bool:
        """Insert url. Returns True if it was not present before."""
        with self._lock:
            if url in self._urls:
                return False
            self._urls.add(url)
            return True

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._urls

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)


class Frontier:
    """
    Thread-safe priority queue of FrontierEntry.

    Entries are dequeued by descending score; equal scores come out in
    insertion order. take_next() never blocks: it returns None when empty.
    The frontier does not deduplicate. Callers claim a URL in the
    VisitedSet before offering it.
    """

    def __init__(self, scorer: Callable[[str], int]):
        self.scorer = scorer
        # heap of (-score, sequence, entry)
        self._heap: list[tuple[int, int, FrontierEntry]] = []
        self._counter = itertools.count()
        self._lock = threading.Lock()

    def offer(self, entry: FrontierEntry) -> int:
        """Add an entry. Returns its score."""
        score = self.scorer(entry.url)
        with self._lock:
            heapq.heappush(self._heap, (-score, next(self._counter), entry))
        return score

    def take_next(self) -> FrontierEntry | None:
        """Remove and return the highest-priority entry, or None if empty."""
        with self._lock:
            if not self._heap:
                return None
            _, _, entry = heapq.heappop(self._heap)
            return entry

    def peek(self, count: int = 10) -> list[ScoredEntry]:
        """View top entries without removing them."""
        if count <= 0:
            return []
        with self._lock:
            top = heapq.nsmallest(count, self._heap)
        return [ScoredEntry(entry=entry, score=-neg) for neg, _, entry in top]

    def is_empty(self) -> bool:
        with self._lock:
            return not self._heap

    def clear(self) -> None:
        with self._lock:
            self._heap.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._heap)
