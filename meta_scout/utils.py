# File: meta_scout/utils.py
"""meta_scout.utils: Разбор и классификация URL для обхода в пределах одного домена.

URLs are compared as literal strings. Nothing here canonicalises a URL:
``https://example.com`` and ``https://example.com/`` stay two different pages.
"""

from __future__ import annotations

from typing import NewType, Sequence
from urllib.parse import urlsplit

from meta_scout.errors import InvalidURL
from meta_scout.logger import logger

__all__: Sequence[str] = (
    "URL",
    "ALLOWED_SCHEMES",
    "parse_url",
    "hostname",
    "same_domain",
)

URL = NewType("URL", str)

ALLOWED_SCHEMES: frozenset[str] = frozenset({"http", "https"})


def parse_url(raw: object) -> URL:
    """Проверяет, что *raw* — абсолютный http(s) URL, и возвращает его без изменений.

    Raises :class:`InvalidURL` for non-strings, unparsable values (bad IPv6
    brackets, bad port), other schemes and a missing host.
    """
    if not isinstance(raw, str):
        raise InvalidURL(raw, "URL must be a string")
    if not raw or raw != raw.strip():
        raise InvalidURL(raw, "URL is empty or has surrounding whitespace")
    try:
        parts = urlsplit(raw)
        host = parts.hostname
        parts.port  # noqa: B018 - raises ValueError on a bad port
    except ValueError as exc:
        raise InvalidURL(raw, f"malformed URL ({exc})") from exc

    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        raise InvalidURL(raw, "scheme must be http or https")
    if not host:
        raise InvalidURL(raw, "URL has no hostname")
    return URL(raw)


def hostname(url: str) -> str:
    """Возвращает hostname так, как его отдаёт urllib (в нижнем регистре)."""
    return urlsplit(url).hostname or ""


def same_domain(url: str, domain: str) -> bool:
    """True iff the hostname of *url* equals *domain* exactly (no www folding)."""
    result = hostname(url) == domain
    if not result:
        logger.debug("Foreign host: %s (expected %s)", url, domain)
    return result
