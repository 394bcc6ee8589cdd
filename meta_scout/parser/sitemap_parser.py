# File: meta_scout/parser/sitemap_parser.py
"""meta_scout.parser.sitemap_parser: Модуль для парсинга sitemap.xml и извлечения URL."""

from __future__ import annotations

from typing import List

from lxml import etree


def parse_sitemap(xml_content: str | bytes) -> List[str]:
    """Разбирает XML content sitemap и возвращает список URL из тегов <loc>.

    Args:
        xml_content: содержимое sitemap.xml (строка или байты).

    Returns:
        Список URL, найденных в <loc> тегах. Для пустого или
        нераспознаваемого документа — пустой список.

    Пример:
    ```python
    from meta_scout.parser.sitemap_parser import parse_sitemap

    with open('sitemap.xml', encoding='utf-8') as f:
        content = f.read()
    urls = parse_sitemap(content)
    print(urls)
    ```
    """
    raw = xml_content.encode("utf-8") if isinstance(xml_content, str) else xml_content
    if not raw.strip():
        return []
    parser = etree.XMLParser(ns_clean=True, recover=True)
    try:
        root = etree.fromstring(raw, parser=parser)
    except etree.XMLSyntaxError:
        return []
    if root is None:
        return []
    locs = root.findall(".//{*}loc")
    return [loc.text.strip() for loc in locs if loc.text and loc.text.strip()]
