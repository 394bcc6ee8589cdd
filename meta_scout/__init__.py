# meta_scout/__init__.py
"""
MetaScout package initializer.
Defines package version and exposes the public crawl API.
"""
__version__ = "0.1.0"

from meta_scout.crawler.models import CrawlRequest, CrawlResult, PageRecord  # noqa: E402
from meta_scout.errors import InvalidSeedURL, LoadError  # noqa: E402
from meta_scout.scanner import crawl, start_scan  # noqa: E402

__all__ = [
    "__version__",
    "crawl",
    "start_scan",
    "CrawlRequest",
    "CrawlResult",
    "PageRecord",
    "InvalidSeedURL",
    "LoadError",
]
