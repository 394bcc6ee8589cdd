# === FILE: meta_scout/parser/html_parser.py ===
"""HTML extraction for the HTTP page loader.

Mirrors what the browser loader reads out of a live DOM, so both loaders
produce the same :class:`~meta_scout.crawler.models.LoadedPage`:

* title — text of the first ``<title>`` with whitespace runs collapsed to one
  space, or ``""`` if absent.
* meta pairs — ``(name, content)`` for every ``<meta>`` that has a ``name``
  (or, failing that, a ``property``) and a non-empty ``content``, in
  document order.
* links — ``<a href>`` values resolved against the document base (the
  first ``<base href>``, else the page URL), kept only when the result starts
  with ``http``. Fragments and duplicates are kept as is;
  deduplication happens in the frontier.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import List, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from meta_scout.crawler.models import LoadedPage

__all__: Sequence[str] = ("extract_page_data",)


def _meta_pairs(soup: BeautifulSoup) -> List[Tuple[str, str]]:
    pairs: List[Tuple[str, str]] = []
    for tag in soup.find_all("meta"):
        if not isinstance(tag, Tag):
            continue
        name = tag.get("name") or tag.get("property")
        content = tag.get("content")
        if isinstance(name, str) and isinstance(content, str) and name and content:
            pairs.append((name, content))
    return pairs


def _document_base(soup: BeautifulSoup, page_url: str) -> str:
    tag = soup.find("base", href=True)
    href = tag.get("href") if isinstance(tag, Tag) else None
    if not isinstance(href, str) or not href.strip():
        return page_url
    try:
        return urljoin(page_url, href.strip())
    except ValueError:
        return page_url


def _links(soup: BeautifulSoup, base_url: str) -> List[str]:
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if not isinstance(href, str):
            continue
        try:
            absolute = urljoin(base_url, href.strip())
        except ValueError:
            # e.g. href="http://[::1" - urljoin parses it and gives up
            absolute = href.strip()
        if absolute.startswith("http"):
            links.append(absolute)
    return links


def extract_page_data(html: str, base_url: str) -> LoadedPage:
    """Parse *html* fetched from *base_url* into a :class:`LoadedPage`."""
    soup = BeautifulSoup(html, "html.parser")

    title_tag = soup.find("title")
    title = " ".join(title_tag.get_text().split()) if title_tag else ""

    links = _links(soup, _document_base(soup, base_url))
    return LoadedPage.build(title, _meta_pairs(soup), links)
