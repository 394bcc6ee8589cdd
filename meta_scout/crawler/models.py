# meta_scout/crawler/models.py
"""
Data models for the MetaScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Tuple

DEFAULT_PAGE_BUDGET = 10


@dataclass(frozen=True, slots=True)
class CrawlRequest:
    """Один запуск обхода: стартовый URL и лимит страниц."""

    seed_url: str
    page_budget: int = DEFAULT_PAGE_BUDGET

    def __post_init__(self) -> None:
        # bool is an int subclass, but True is not a budget
        if isinstance(self.page_budget, bool) or not isinstance(self.page_budget, int):
            raise ValueError(f"page_budget must be an integer, got {self.page_budget!r}")
        if self.page_budget < 1:
            raise ValueError(f"page_budget must be >= 1, got {self.page_budget}")


@dataclass(frozen=True, slots=True)
class LoadedPage:
    """What a page loader hands back for one URL."""

    title: str = ""
    meta_pairs: Tuple[Tuple[str, str], ...] = ()
    links: Tuple[str, ...] = ()

    @classmethod
    def build(
        cls,
        title: str | None,
        meta_pairs: Iterable[Tuple[str, str]] = (),
        links: Iterable[str] = (),
    ) -> LoadedPage:
        return cls(
            title=title or "",
            meta_pairs=tuple((str(k), str(v)) for k, v in meta_pairs),
            links=tuple(links),
        )


@dataclass(frozen=True, slots=True)
class PageRecord:
    """Метаданные одной успешно загруженной страницы."""

    url: str
    title: str
    meta: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_loaded(cls, url: str, page: LoadedPage) -> PageRecord:
        """Builds the record; a repeated meta name keeps its last content."""
        meta: Dict[str, str] = {}
        for name, content in page.meta_pairs:
            meta[name] = content
        return cls(url=url, title=page.title, meta=MappingProxyType(meta))

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "title": self.title, "meta": dict(self.meta)}


@dataclass(frozen=True, slots=True)
class CrawlResult:
    """Итог обхода: страницы в порядке загрузки плюс статистика запуска.

    ``ordered`` is False when several workers ran, in which case ``pages``
    follow completion order rather than breadth-first order.
    """

    seed_url: str
    domain: str
    page_budget: int
    pages: Tuple[PageRecord, ...] = ()
    visited: int = 0
    failed: Tuple[str, ...] = ()
    cancelled: bool = False
    ordered: bool = True

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self):
        return iter(self.pages)

    def __getitem__(self, index: int) -> PageRecord:
        return self.pages[index]

    @property
    def urls(self) -> List[str]:
        return [p.url for p in self.pages]

    def to_list(self) -> List[Dict[str, Any]]:
        return [p.to_dict() for p in self.pages]

    def stats(self) -> Dict[str, Any]:
        return {
            "seed_url": self.seed_url,
            "domain": self.domain,
            "page_budget": self.page_budget,
            "visited": self.visited,
            "loaded": len(self.pages),
            "failed": list(self.failed),
            "cancelled": self.cancelled,
            "ordered": self.ordered,
        }
