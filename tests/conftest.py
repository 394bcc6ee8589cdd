# File: tests/conftest.py
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

import pytest

from meta_scout.crawler.loader import PageLoader
from meta_scout.crawler.models import LoadedPage
from meta_scout.errors import LoadError
from meta_scout.logger import LOGGER_NAME

Outcome = Union[LoadedPage, BaseException]


def page(
    title: str = "",
    links: Iterable[str] = (),
    meta: Iterable[Tuple[str, str]] = (),
) -> LoadedPage:
    """Shorthand for a successfully loaded page."""
    return LoadedPage.build(title, meta, links)


class FakeLoader(PageLoader):
    """
    Scripted loader: ``site`` maps URL -> LoadedPage or an exception to raise.
    Unknown URLs fail with LoadError, like an unreachable host.
    """

    def __init__(
        self,
        site: Dict[str, Outcome],
        *,
        delays: Optional[Dict[str, float]] = None,
        on_load: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.site = site
        self.delays = delays or {}
        self.on_load = on_load
        self.calls: List[str] = []
        self.timeouts: List[float] = []
        self.entered = 0
        self.exited = 0

    async def __aenter__(self) -> FakeLoader:
        self.entered += 1
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.exited += 1

    async def load(self, url: str, timeout: float) -> LoadedPage:
        self.calls.append(url)
        self.timeouts.append(timeout)
        if self.on_load is not None:
            self.on_load(url)
        delay = self.delays.get(url)
        if delay:
            await asyncio.sleep(delay)
        outcome = self.site.get(url)
        if outcome is None:
            raise LoadError(url, "net::ERR_NAME_NOT_RESOLVED")
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class CountingFactory:
    """Loader factory that remembers how many loaders it created."""

    def __init__(self, loader: FakeLoader) -> None:
        self.loader = loader
        self.created = 0

    def __call__(self) -> FakeLoader:
        self.created += 1
        return self.loader


@pytest.fixture()
def make_factory() -> Callable[..., CountingFactory]:
    def _make(site: Dict[str, Outcome], **kwargs) -> CountingFactory:
        return CountingFactory(FakeLoader(site, **kwargs))

    return _make


@pytest.fixture(autouse=True)
def reset_project_logger():
    """CLI tests reconfigure the shared logger; give every test a clean one."""
    yield
    lg = logging.getLogger(LOGGER_NAME)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()
    lg.propagate = True
    lg.setLevel(logging.NOTSET)
