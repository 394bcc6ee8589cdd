# === FILE: meta_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера MetaScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Literal, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from meta_scout.crawler.engine import DEFAULT_LOAD_TIMEOUT
from meta_scout.crawler.loader import (
    DEFAULT_BROWSER_ARGS,
    BrowserPageLoader,
    HttpPageLoader,
    LoaderFactory,
)
from meta_scout.crawler.models import DEFAULT_PAGE_BUDGET


class CrawlerConfig(BaseModel):
    """Настройки краулера, общие для всех запусков."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    page_budget: int = Field(DEFAULT_PAGE_BUDGET, ge=1, description="Лимит страниц по умолчанию.")
    load_timeout: float = Field(
        DEFAULT_LOAD_TIMEOUT, gt=0, description="Таймаут загрузки одной страницы (секунд)."
    )
    concurrency: int = Field(1, ge=1, description="Число параллельных воркеров (вкладок браузера).")
    loader: Literal["browser", "http"] = Field("browser", description="Способ загрузки страниц.")
    user_agent: str = Field("MetaScoutBot/1.0", min_length=1, description="Заголовок User-Agent.")
    headless: bool = Field(True, description="Запускать браузер без окна.")
    wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = Field(
        "domcontentloaded", description="Событие, которого ждёт навигация браузера."
    )
    browser_args: List[str] = Field(
        default_factory=lambda: list(DEFAULT_BROWSER_ARGS),
        description="Аргументы командной строки Chromium.",
    )
    sitemap_timeout: float = Field(10.0, gt=0, description="Таймаут запроса sitemap.xml (секунд).")

    @field_validator("user_agent", mode="before")
    def _strip_user_agent(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    def build_loader_factory(self) -> LoaderFactory:
        """Возвращает фабрику загрузчика, соответствующую полю ``loader``."""
        if self.loader == "http":
            return lambda: HttpPageLoader(user_agent=self.user_agent)
        return lambda: BrowserPageLoader(
            user_agent=self.user_agent,
            headless=self.headless,
            browser_args=self.browser_args,
            wait_until=self.wait_until,
            pages=self.concurrency,
        )


DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    Без пути берёт configs/default.yaml, а если его нет — значения по умолчанию.
    Явно указанный, но отсутствующий файл — FileNotFoundError.
    """
    if path is None:
        if not DEFAULT_CFG.is_file():
            return CrawlerConfig()
        path_obj = DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return CrawlerConfig(**data)
