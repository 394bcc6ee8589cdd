# File: tests/test_cli.py
"""Тесты для CLI (`meta_scout/cli.py`) с использованием click.testing.CliRunner.
Проверяют команды `crawl`, `sitemap-count`, `config`, `--version`, а также обработку ошибок.
"""
import asyncio
import json

import pytest
from click.testing import CliRunner

import meta_scout.cli as cli_module
from meta_scout.aggregator import ResultAggregator
from meta_scout.cli import cli
from meta_scout.crawler.models import CrawlRequest, LoadedPage, PageRecord
from meta_scout.errors import InvalidSeedURL

QUIET = ["--log-level", "CRITICAL"]


def _fake_result(seed, budget, cancelled=False):
    agg = ResultAggregator()
    agg.append(
        PageRecord.from_loaded(seed, LoadedPage.build("Home", [("description", "Hello")]))
    )
    return agg.build(
        seed_url=seed, domain="example.com", page_budget=budget, visited=1, cancelled=cancelled
    )


@pytest.fixture(autouse=True)
def patch_start_scan(monkeypatch):
    """Патчим start_scan: запоминаем аргументы, возвращаем фиктивный результат без обхода."""
    calls = []

    async def fake_scan(cfg, seed_url, *, page_budget=None, cancel=None, loader_factory=None):
        budget = cfg.page_budget if page_budget is None else page_budget
        # same validation as the real engine
        CrawlRequest(seed_url, budget)
        if seed_url == "not-a-url":
            raise InvalidSeedURL(seed_url, "scheme must be http or https")
        calls.append({"cfg": cfg, "seed": seed_url, "budget": budget, "cancel": cancel})
        return _fake_result(seed_url, budget)

    monkeypatch.setattr(cli_module, "start_scan", fake_scan)
    return calls


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "MetaScout" in result.output


def test_crawl_stdout(patch_start_scan, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["crawl", "https://example.com"])
    assert result.exit_code == 0, result.output
    output = json.loads(result.output)
    assert output == [
        {"url": "https://example.com", "title": "Home", "meta": {"description": "Hello"}}
    ]
    assert patch_start_scan[0]["budget"] == 10


def test_crawl_overrides(patch_start_scan, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    result = runner.invoke(
        cli,
        QUIET
        + [
            "crawl", "https://example.com",
            "--limit", "3", "--loader", "http", "--concurrency", "2", "--timeout", "5",
        ],
    )
    assert result.exit_code == 0, result.output
    call = patch_start_scan[0]
    assert call["budget"] == 3
    assert call["cfg"].loader == "http"
    assert call["cfg"].concurrency == 2
    assert call["cfg"].load_timeout == 5.0
    assert isinstance(call["cancel"], asyncio.Event)


def test_crawl_rejects_zero_limit():
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["crawl", "https://example.com", "--limit", "0"])
    assert result.exit_code != 0


def test_crawl_invalid_seed():
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["crawl", "not-a-url"])
    assert result.exit_code == 1
    assert "not-a-url" in result.output


def test_crawl_writes_reports(tmp_path):
    out_json = tmp_path / "out.json"
    out_csv = tmp_path / "out.csv"
    out_html = tmp_path / "out.html"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        QUIET
        + [
            "crawl", "https://example.com",
            "--json", str(out_json), "--csv", str(out_csv), "--html", str(out_html),
        ],
    )
    assert result.exit_code == 0, result.output
    assert json.loads(out_json.read_text(encoding="utf-8"))["pages"][0]["title"] == "Home"
    assert out_csv.read_text(encoding="utf-8").startswith('"URL","Title"')
    assert "Home" in out_html.read_text(encoding="utf-8")
    assert "CSV report" in result.output


def test_crawl_budget_from_sitemap(patch_start_scan, monkeypatch):
    async def fake_count(url, *, timeout=10.0, session=None):
        return 42

    monkeypatch.setattr(cli_module, "count_sitemap_pages", fake_count)
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["crawl", "https://example.com", "--budget-from-sitemap"])
    assert result.exit_code == 0, result.output
    assert patch_start_scan[0]["budget"] == 42


def test_crawl_budget_from_sitemap_falls_back(patch_start_scan, monkeypatch):
    async def fake_count(url, *, timeout=10.0, session=None):
        return None

    monkeypatch.setattr(cli_module, "count_sitemap_pages", fake_count)
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["crawl", "https://example.com", "--budget-from-sitemap"])
    assert result.exit_code == 0
    assert patch_start_scan[0]["budget"] == 10


def test_crawl_scan_timeout_sets_cancel(monkeypatch):
    async def slow(cfg, seed_url, *, page_budget=None, cancel=None, loader_factory=None):
        await asyncio.wait_for(cancel.wait(), timeout=5)
        return _fake_result(seed_url, 10, cancelled=True)

    monkeypatch.setattr(cli_module, "start_scan", slow)
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["crawl", "https://example.com", "--scan-timeout", "0.2"])
    assert result.exit_code == 0
    assert "неполный" in result.output


def test_sitemap_count(monkeypatch):
    async def fake_count(url, *, timeout=10.0, session=None):
        return 7

    monkeypatch.setattr(cli_module, "count_sitemap_pages", fake_count)
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["sitemap-count", "https://example.com"])
    assert result.exit_code == 0
    assert result.output.strip() == "7"


def test_sitemap_count_missing(monkeypatch):
    async def fake_count(url, *, timeout=10.0, session=None):
        return None

    monkeypatch.setattr(cli_module, "count_sitemap_pages", fake_count)
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["sitemap-count", "https://example.com"])
    assert result.exit_code == 1


def test_sitemap_count_invalid_url():
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["sitemap-count", "example.com"])
    assert result.exit_code == 1


def test_show_config(tmp_path):
    cfg_file = tmp_path / "custom.json"
    cfg_file.write_text(json.dumps({"page_budget": 5, "loader": "http"}), encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["page_budget"] == 5
    assert data["loader"] == "http"


def test_bad_config_file(tmp_path):
    cfg_file = tmp_path / "bad.yaml"
    cfg_file.write_text("page_budget: -1", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1
    assert "конфигурации" in result.output
