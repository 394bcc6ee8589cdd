# meta_scout/crawler/loader.py
"""
Page loaders: navigate to a URL and hand back title, meta tags and links.

A loader is an async context manager. Entering it acquires the expensive
resource (a headless browser or an HTTP session), leaving it releases the
resource. The crawl engine enters exactly one loader per run.
"""
from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from meta_scout.crawler.models import LoadedPage
from meta_scout.errors import LoadError
from meta_scout.parser.html_parser import extract_page_data

__all__ = (
    "PageLoader",
    "LoaderFactory",
    "BrowserPageLoader",
    "HttpPageLoader",
    "DEFAULT_BROWSER_ARGS",
    "HTML_MIME_TYPES",
)

logger = logging.getLogger("MetaScout")

DEFAULT_BROWSER_ARGS: Sequence[str] = ("--no-sandbox", "--disable-setuid-sandbox")
HTML_MIME_TYPES: Sequence[str] = ("text/html", "application/xhtml+xml")

# Runs inside the page; same selection rules as parser.html_parser.
_EXTRACT_JS = """
() => ({
  title: document.title || "",
  meta: Array.from(document.getElementsByTagName("meta"))
    .map((tag) => [tag.getAttribute("name") || tag.getAttribute("property"), tag.getAttribute("content")])
    .filter(([name, content]) => name && content),
  links: Array.from(document.querySelectorAll("a[href]"))
    .map((a) => a.href)
    .filter((href) => typeof href === "string" && href.startsWith("http")),
})
"""


class PageLoader(ABC):
    """Абстрактный загрузчик страниц."""

    async def __aenter__(self) -> PageLoader:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    @abstractmethod
    async def load(self, url: str, timeout: float) -> LoadedPage:  # pragma: no cover - interface
        """Load *url* within *timeout* seconds or raise :class:`LoadError`."""
        ...


LoaderFactory = Callable[[], PageLoader]


class BrowserPageLoader(PageLoader):
    """Headless Chromium via Playwright; one browser per run, one tab per worker."""

    def __init__(
        self,
        *,
        user_agent: Optional[str] = None,
        headless: bool = True,
        browser_args: Sequence[str] = DEFAULT_BROWSER_ARGS,
        wait_until: str = "domcontentloaded",
        pages: int = 1,
    ) -> None:
        if pages < 1:
            raise ValueError("pages must be >= 1")
        self.user_agent = user_agent
        self.headless = headless
        self.browser_args = list(browser_args)
        self.wait_until = wait_until
        self.pages = pages
        self._playwright: Any = None
        self._browser: Any = None
        self._context: Any = None
        self._pool: asyncio.Queue[Any] = asyncio.Queue()

    async def __aenter__(self) -> BrowserPageLoader:
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless, args=self.browser_args
            )
            context_opts = {"user_agent": self.user_agent} if self.user_agent else {}
            self._context = await self._browser.new_context(**context_opts)
            for _ in range(self.pages):
                self._pool.put_nowait(await self._context.new_page())
        except BaseException:
            await self._close()
            raise
        logger.debug("Browser started (%d tab(s), headless=%s)", self.pages, self.headless)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._close()

    async def _close(self) -> None:
        # Closing the browser closes its contexts and pages as well
        if self._browser is not None:
            try:
                await self._browser.close()
            except PlaywrightError as e:
                logger.warning("Error closing browser: %s", e)
            self._browser = None
            self._context = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
        logger.debug("Browser closed")

    async def load(self, url: str, timeout: float) -> LoadedPage:
        if self._context is None:
            raise RuntimeError("Browser not started; use 'async with'")
        page = await self._pool.get()
        try:
            await page.goto(url, wait_until=self.wait_until, timeout=timeout * 1000)
            data = await page.evaluate(_EXTRACT_JS)
        except PlaywrightTimeoutError as exc:
            raise LoadError(url, f"timed out after {timeout:g}s", cause=exc) from exc
        except PlaywrightError as exc:
            raise LoadError(url, exc.message, cause=exc) from exc
        finally:
            self._pool.put_nowait(page)
        return LoadedPage.build(data.get("title"), data.get("meta", ()), data.get("links", ()))


class HttpPageLoader(PageLoader):
    """Plain HTTP GET + BeautifulSoup. No JavaScript is executed."""

    def __init__(self, *, user_agent: Optional[str] = None) -> None:
        self.user_agent = user_agent
        self.session: Optional[ClientSession] = None

    async def __aenter__(self) -> HttpPageLoader:
        headers = {"User-Agent": self.user_agent} if self.user_agent else {}
        self.session = ClientSession(headers=headers, raise_for_status=False)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()
        self.session = None

    async def load(self, url: str, timeout: float) -> LoadedPage:
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(url, timeout=ClientTimeout(total=timeout)) as resp:
                if resp.status >= 400:
                    raise LoadError(url, f"HTTP {resp.status}")
                mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                if mime not in HTML_MIME_TYPES:
                    raise LoadError(url, f"not an HTML page ({mime or 'no Content-Type'})")
                text = await resp.text(errors="replace")
                final_url = str(resp.url)
        except asyncio.TimeoutError as exc:
            raise LoadError(url, f"timed out after {timeout:g}s", cause=exc) from exc
        except ClientError as exc:
            raise LoadError(url, str(exc) or type(exc).__name__, cause=exc) from exc
        # links resolve against the final URL, as a browser does after redirects
        return extract_page_data(text, final_url)
