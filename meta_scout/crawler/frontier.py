# meta_scout/crawler/frontier.py
"""
Frontier: FIFO queue of pending URLs plus the visited set and the page budget.

One instance belongs to one crawl run. Methods never await, so under asyncio
each call (``claim`` in particular) is atomic with respect to other workers.
"""
from __future__ import annotations

from collections import deque
from typing import Deque, Optional, Set

from meta_scout.errors import BudgetExceeded, EmptyFrontier
from meta_scout.utils import URL


class Frontier:
    """Очередь обхода в ширину с дедупликацией и жёстким лимитом страниц."""

    def __init__(self, page_budget: int) -> None:
        if page_budget < 1:
            raise ValueError(f"page_budget must be >= 1, got {page_budget}")
        self._budget = page_budget
        self._queue: Deque[URL] = deque()
        self._queued: Set[URL] = set()
        self._visited: Set[URL] = set()

    # -- read-only views ----------------------------------------------------

    @property
    def budget(self) -> int:
        return self._budget

    @property
    def visited_count(self) -> int:
        return len(self._visited)

    @property
    def pending(self) -> int:
        return len(self._queue)

    def is_visited(self, url: URL) -> bool:
        return url in self._visited

    def is_queued(self, url: URL) -> bool:
        return url in self._queued

    # -- mutation -----------------------------------------------------------

    def offer(self, url: URL) -> bool:
        """Ставит URL в очередь, если он ещё не посещён и не стоит в очереди."""
        if url in self._visited or url in self._queued:
            return False
        self._queue.append(url)
        self._queued.add(url)
        return True

    def seed(self, url: URL) -> bool:
        return self.offer(url)

    def has_next(self) -> bool:
        return bool(self._queue) and len(self._visited) < self._budget

    def next(self) -> URL:
        if not self.has_next():
            raise EmptyFrontier("frontier is empty or the page budget is spent")
        url = self._queue.popleft()
        self._queued.discard(url)
        return url

    def mark_visited(self, url: URL) -> None:
        if url in self._visited:
            return
        if len(self._visited) >= self._budget:
            raise BudgetExceeded(f"page budget {self._budget} already spent, cannot visit {url}")
        self._visited.add(url)

    def claim(self) -> Optional[URL]:
        """Dequeue the next unvisited URL and mark it visited in one step.

        Returns None once nothing can be handed out.
        """
        while self.has_next():
            url = self.next()
            if url in self._visited:
                continue
            self.mark_visited(url)
            return url
        return None

    def discard_pending(self) -> int:
        """Drop every queued URL; returns how many were dropped."""
        dropped = len(self._queue)
        self._queue.clear()
        self._queued.clear()
        return dropped
