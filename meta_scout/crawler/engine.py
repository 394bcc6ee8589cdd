# === FILE: meta_scout/crawler/engine.py ===
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from meta_scout.aggregator import ResultAggregator
from meta_scout.crawler.frontier import Frontier
from meta_scout.crawler.loader import LoaderFactory, PageLoader
from meta_scout.crawler.models import CrawlRequest, CrawlResult, LoadedPage, PageRecord
from meta_scout.errors import InvalidSeedURL, InvalidURL, LoadError, MalformedLinkError
from meta_scout.utils import URL, hostname, parse_url, same_domain

__all__ = ("CrawlEngine", "DEFAULT_LOAD_TIMEOUT")

DEFAULT_LOAD_TIMEOUT = 15.0


@dataclass
class _RunState:
    """Всё изменяемое состояние одного запуска; создаётся заново в каждом run()."""

    frontier: Frontier
    results: ResultAggregator
    domain: str
    cancel: asyncio.Event
    cond: asyncio.Condition = field(default_factory=asyncio.Condition)
    in_flight: int = 0


class CrawlEngine:
    """Обход сайта в ширину в пределах домена стартовой страницы.

    Every claimed URL is marked visited before it is loaded, so a failed page
    is never retried and a run makes at most ``page_budget`` load attempts.
    With ``concurrency > 1`` several workers drain the same frontier and the
    result follows completion order (``CrawlResult.ordered`` is False).
    """

    def __init__(
        self,
        loader_factory: LoaderFactory,
        *,
        load_timeout: float = DEFAULT_LOAD_TIMEOUT,
        concurrency: int = 1,
    ) -> None:
        if load_timeout <= 0:
            raise ValueError("load_timeout must be > 0")
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.loader_factory = loader_factory
        self.load_timeout = load_timeout
        self.concurrency = concurrency
        self.logger = logging.getLogger("MetaScout")

    async def run(
        self, request: CrawlRequest, cancel: Optional[asyncio.Event] = None
    ) -> CrawlResult:
        """Run one crawl. Raises :class:`InvalidSeedURL`; every other failure is absorbed.

        Setting *cancel* stops new pages from being claimed; loads already in
        flight finish or time out and the partial result is returned.
        """
        try:
            seed = parse_url(request.seed_url)
        except InvalidURL as exc:
            raise InvalidSeedURL(request.seed_url, exc.reason) from exc

        state = _RunState(
            frontier=Frontier(request.page_budget),
            results=ResultAggregator(),
            domain=hostname(seed),
            cancel=cancel if cancel is not None else asyncio.Event(),
        )
        state.frontier.seed(seed)

        self.logger.info("Старт обхода: %s (лимит %d стр.)", seed, request.page_budget)
        start = time.monotonic()
        async with self.loader_factory() as loader:
            workers = [
                asyncio.create_task(self._worker(loader, state)) for _ in range(self.concurrency)
            ]
            try:
                await asyncio.gather(*workers)
            except BaseException:
                for w in workers:
                    w.cancel()
                await asyncio.gather(*workers, return_exceptions=True)
                raise

        dropped = state.frontier.discard_pending()
        result = state.results.build(
            seed_url=seed,
            domain=state.domain,
            page_budget=request.page_budget,
            visited=state.frontier.visited_count,
            cancelled=state.cancel.is_set(),
            ordered=self.concurrency == 1,
        )
        duration = time.monotonic() - start
        self.logger.info(
            "Завершено: %d стр. загружено, %d с ошибкой, %d в очереди отброшено за %.2f с",
            len(result.pages),
            len(result.failed),
            dropped,
            duration,
        )
        if result.cancelled:
            self.logger.info("Обход прерван по запросу, результат неполный")
        return result

    async def _worker(self, loader: PageLoader, state: _RunState) -> None:
        while True:
            async with state.cond:
                # an empty queue is not the end while another worker may still add links
                while (
                    not state.frontier.has_next()
                    and state.in_flight
                    and not state.cancel.is_set()
                ):
                    await state.cond.wait()
                if state.cancel.is_set():
                    state.cond.notify_all()
                    return
                url = state.frontier.claim()
                if url is None:
                    state.cond.notify_all()
                    return
                state.in_flight += 1

            page = await self._load(loader, url)

            async with state.cond:
                if page is None:
                    state.results.record_failure(url)
                else:
                    self._absorb(url, page, state)
                state.in_flight -= 1
                state.cond.notify_all()

    async def _load(self, loader: PageLoader, url: URL) -> Optional[LoadedPage]:
        try:
            return await asyncio.wait_for(
                loader.load(url, self.load_timeout), timeout=self.load_timeout
            )
        except asyncio.TimeoutError:
            self.logger.warning("Failed to load %s: timed out after %gs", url, self.load_timeout)
        except LoadError as e:
            self.logger.warning("Failed to load %s", e)
        except Exception as e:
            self.logger.warning("Failed to load %s: %s: %s", url, type(e).__name__, e)
        return None

    def _absorb(self, url: URL, page: LoadedPage, state: _RunState) -> None:
        state.results.append(PageRecord.from_loaded(url, page))
        added: List[str] = []
        for link in page.links:
            try:
                candidate = parse_url(link)
            except InvalidURL as exc:
                self.logger.debug("Skip link on %s: %s", url, MalformedLinkError(link, exc.reason))
                continue
            if same_domain(candidate, state.domain) and state.frontier.offer(candidate):
                added.append(candidate)
        self.logger.info("Loaded %s (+%d link(s))", url, len(added))
