# === FILE: meta_scout/sitemap.py ===
"""
Оценка числа страниц сайта по /sitemap.xml.

Independent of the crawl engine; the CLI uses it to pre-populate the page
budget. Any problem (HTTP error, network failure, no ``<loc>`` entries)
yields ``None`` rather than an exception. Only an invalid input URL raises.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from aiohttp import ClientError, ClientSession, ClientTimeout

from meta_scout.parser.sitemap_parser import parse_sitemap
from meta_scout.utils import parse_url

__all__ = ["sitemap_url", "count_sitemap_pages"]

logger = logging.getLogger("MetaScout")


def sitemap_url(url: str) -> str:
    """``https://host:port/any/path?q`` → ``https://host:port/sitemap.xml``."""
    parts = urlsplit(parse_url(url))
    return urlunsplit((parts.scheme, parts.netloc, "/sitemap.xml", "", ""))


async def count_sitemap_pages(
    url: str,
    *,
    timeout: float = 10.0,
    session: Optional[ClientSession] = None,
) -> Optional[int]:
    """Возвращает число записей <loc> в sitemap.xml сайта или None."""
    target = sitemap_url(url)
    own_session = session is None
    http = session if session is not None else ClientSession(raise_for_status=False)
    try:
        async with http.get(target, timeout=ClientTimeout(total=timeout)) as resp:
            if not 200 <= resp.status < 300:
                logger.info("Sitemap %s -> HTTP %s", target, resp.status)
                return None
            body = await resp.read()
    except (ClientError, asyncio.TimeoutError) as e:
        logger.warning("Error loading sitemap %s: %s", target, e)
        return None
    finally:
        if own_session:
            await http.close()

    count = len(parse_sitemap(body))
    logger.debug("Sitemap %s: %d <loc> entries", target, count)
    return count or None
