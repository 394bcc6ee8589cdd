# File: meta_scout/errors.py
"""meta_scout.errors: Иерархия исключений MetaScout.

Only :class:`InvalidSeedURL` ever reaches the caller of a crawl; the other
errors are raised and absorbed inside the engine.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "MetaScoutError",
    "InvalidURL",
    "InvalidSeedURL",
    "MalformedLinkError",
    "LoadError",
    "EmptyFrontier",
    "BudgetExceeded",
]


class MetaScoutError(Exception):
    """Базовое исключение пакета."""


class InvalidURL(MetaScoutError, ValueError):
    """Строка не является абсолютным http(s) URL."""

    def __init__(self, url: object, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url!r}")


class InvalidSeedURL(InvalidURL):
    """Seed URL of a crawl failed validation. Aborts the whole run."""


class MalformedLinkError(InvalidURL):
    """Discovered link could not be parsed; the link alone is dropped."""


class LoadError(MetaScoutError):
    """Страница не загрузилась: таймаут, ошибка навигации или транспорта."""

    def __init__(self, url: str, message: str, *, cause: Optional[BaseException] = None) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"{url}: {message}")


class EmptyFrontier(MetaScoutError, LookupError):
    """next() was called on a frontier that has nothing to hand out."""


class BudgetExceeded(MetaScoutError, RuntimeError):
    """Marking one more URL visited would exceed the page budget."""
