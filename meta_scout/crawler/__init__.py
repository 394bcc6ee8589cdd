"""meta_scout.crawler: frontier, page loaders and the crawl engine."""
from meta_scout.crawler.engine import CrawlEngine
from meta_scout.crawler.frontier import Frontier
from meta_scout.crawler.loader import BrowserPageLoader, HttpPageLoader, PageLoader
from meta_scout.crawler.models import CrawlRequest, CrawlResult, LoadedPage, PageRecord

__all__ = [
    "CrawlEngine",
    "Frontier",
    "PageLoader",
    "BrowserPageLoader",
    "HttpPageLoader",
    "CrawlRequest",
    "CrawlResult",
    "LoadedPage",
    "PageRecord",
]
