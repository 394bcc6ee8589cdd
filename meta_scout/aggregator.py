# File: meta_scout/aggregator.py
"""meta_scout.aggregator: Сбор записей о страницах в итоговый CrawlResult."""

from __future__ import annotations

from typing import List

from meta_scout.crawler.models import CrawlResult, PageRecord

__all__ = ["ResultAggregator"]


class ResultAggregator:
    """Accumulates PageRecords in the order pages were successfully loaded.

    No deduplication happens here; the visited set guarantees one record per URL.
    """

    def __init__(self) -> None:
        self._records: List[PageRecord] = []
        self._failed: List[str] = []

    def __len__(self) -> int:
        return len(self._records)

    def append(self, record: PageRecord) -> None:
        self._records.append(record)

    def record_failure(self, url: str) -> None:
        self._failed.append(url)

    def to_list(self) -> List[PageRecord]:
        return list(self._records)

    def failures(self) -> List[str]:
        return list(self._failed)

    def build(
        self,
        *,
        seed_url: str,
        domain: str,
        page_budget: int,
        visited: int,
        cancelled: bool = False,
        ordered: bool = True,
    ) -> CrawlResult:
        """Собирает неизменяемый CrawlResult из накопленных данных."""
        return CrawlResult(
            seed_url=seed_url,
            domain=domain,
            page_budget=page_budget,
            pages=tuple(self._records),
            visited=visited,
            failed=tuple(self._failed),
            cancelled=cancelled,
            ordered=ordered,
        )
