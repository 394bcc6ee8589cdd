# === FILE: meta_scout/scanner.py ===
"""
Модуль-обёртка для запуска обхода по конфигурации.
"""
import asyncio
from typing import Optional

from meta_scout.config import CrawlerConfig
from meta_scout.crawler.engine import CrawlEngine
from meta_scout.crawler.loader import LoaderFactory
from meta_scout.crawler.models import CrawlRequest, CrawlResult


async def start_scan(
    cfg: CrawlerConfig,
    seed_url: str,
    *,
    page_budget: Optional[int] = None,
    cancel: Optional[asyncio.Event] = None,
    loader_factory: Optional[LoaderFactory] = None,
) -> CrawlResult:
    """
    Запускает CrawlEngine с настройками из cfg и возвращает CrawlResult.

    Parameters
    ----------
    cfg : CrawlerConfig
        Конфигурация краулера.
    seed_url : str
        Стартовая страница; её домен ограничивает обход.
    page_budget : int, optional
        Лимит страниц; None → cfg.page_budget.
    cancel : asyncio.Event, optional
        Установленное событие останавливает выдачу новых страниц.
    loader_factory : callable, optional
        Замена загрузчика из конфигурации (используется в тестах).
    """
    engine = CrawlEngine(
        loader_factory or cfg.build_loader_factory(),
        load_timeout=cfg.load_timeout,
        concurrency=cfg.concurrency,
    )
    budget = cfg.page_budget if page_budget is None else page_budget
    return await engine.run(CrawlRequest(seed_url, budget), cancel=cancel)


def crawl(
    seed_url: str,
    page_budget: Optional[int] = None,
    *,
    config: Optional[CrawlerConfig] = None,
    loader_factory: Optional[LoaderFactory] = None,
) -> CrawlResult:
    """Синхронная обёртка над start_scan для скриптов и REPL."""
    return asyncio.run(
        start_scan(
            config or CrawlerConfig(),
            seed_url,
            page_budget=page_budget,
            loader_factory=loader_factory,
        )
    )


__all__ = ["start_scan", "crawl"]
