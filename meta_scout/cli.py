# === FILE: meta_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера MetaScout через командную строку.

Команды:
  crawl URL       Обойти сайт и вывести/сохранить метаданные страниц
  sitemap-count   Посчитать записи <loc> в /sitemap.xml сайта
  config          Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только консоль, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --limit INT              Лимит страниц (override page_budget)
  --budget-from-sitemap    Взять лимит из числа <loc> в sitemap.xml
  --loader browser|http    Способ загрузки страниц
  --concurrency INT        Число параллельных воркеров
  --timeout SEC            Таймаут загрузки одной страницы
  --json/--csv/--html PATH Сохранить отчёты в файлы
  --pretty                 Преформатировать JSON-вывод (отступ 2)
  --scan-timeout SEC       Остановить обход через SEC секунд (результат неполный)

Пример:
  meta-scout crawl https://example.com --limit 25 --csv metadata.csv
"""
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import click

from meta_scout import __version__
from meta_scout.config import CrawlerConfig, load_config
from meta_scout.errors import InvalidSeedURL, InvalidURL
from meta_scout.logger import DEFAULT_FORMAT, init_logging
from meta_scout.report.csv_report import render_csv
from meta_scout.report.html_report import render_html
from meta_scout.report.json_report import render_json
from meta_scout.scanner import start_scan
from meta_scout.sitemap import count_sitemap_pages

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='MetaScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (только консоль, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд MetaScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


async def _run_crawl(
    cfg: CrawlerConfig, url: str, budget: Optional[int], scan_timeout: Optional[float]
):
    cancel = asyncio.Event()
    handle = None
    if scan_timeout:
        handle = asyncio.get_running_loop().call_later(scan_timeout, cancel.set)
    try:
        return await start_scan(cfg, url, page_budget=budget, cancel=cancel)
    finally:
        if handle is not None:
            handle.cancel()


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option(
    '--limit', '-l', 'limit',
    type=click.IntRange(min=1),
    default=None,
    help='Лимит страниц (override page_budget)'
)
@click.option(
    '--budget-from-sitemap', 'budget_from_sitemap', is_flag=True,
    help='Взять лимит страниц из sitemap.xml, если --limit не задан'
)
@click.option(
    '--loader', 'loader',
    type=click.Choice(['browser', 'http']),
    default=None,
    help='Способ загрузки страниц (override loader)'
)
@click.option(
    '--concurrency', 'concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Число параллельных воркеров; порядок результатов тогда не гарантирован'
)
@click.option(
    '--timeout', 'load_timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Таймаут загрузки одной страницы (секунд)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--csv', 'csv_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить CSV в файл'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с шаблоном report.html.j2 (по умолчанию встроенный)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.option(
    '--scan-timeout', 'scan_timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Прервать обход через заданное число секунд'
)
@click.pass_context
def crawl_cmd(
    ctx, url, limit, budget_from_sitemap, loader, concurrency, load_timeout,
    json_output, csv_output, html_output, template_dir, pretty, scan_timeout,
):
    """Обойти сайт начиная с URL и собрать title и meta-теги страниц."""
    cfg: CrawlerConfig = ctx.obj['config']
    overrides = {
        k: v for k, v in
        (('loader', loader), ('concurrency', concurrency), ('load_timeout', load_timeout))
        if v is not None
    }
    if overrides:
        cfg = cfg.model_copy(update=overrides)

    budget = limit
    if budget is None and budget_from_sitemap:
        try:
            budget = asyncio.run(count_sitemap_pages(url, timeout=cfg.sitemap_timeout))
        except InvalidURL as e:
            print_error(f'Некорректный URL: {e}')
        if budget is None:
            click.secho(
                f'Sitemap недоступен, лимит по умолчанию: {cfg.page_budget}', fg='yellow', err=True
            )
        else:
            click.echo(f'Лимит из sitemap.xml: {budget}', err=True)

    try:
        result = asyncio.run(_run_crawl(cfg, url, budget, scan_timeout))
    except InvalidSeedURL as e:
        print_error(f'Некорректный стартовый URL: {e}')
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    if result.cancelled:
        click.secho(f'Обход остановлен через {scan_timeout} с, результат неполный', fg='yellow', err=True)

    # Если не сохраняем в файл — печатаем в stdout
    if not (json_output or csv_output or html_output):
        indent = 2 if pretty else None
        click.echo(json.dumps(result.to_list(), ensure_ascii=False, indent=indent))
        return

    if json_output:
        try:
            click.echo(f'JSON report: {render_json(result, json_output, pretty=pretty)}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if csv_output:
        try:
            click.echo(f'CSV report: {render_csv(result, csv_output)}')
        except OSError as e:
            print_error(f'Ошибка при сохранении CSV: {e}')

    if html_output:
        try:
            click.echo(f'HTML report: {render_html(result, html_output, template_dir)}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('sitemap-count', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.pass_context
def sitemap_count(ctx, url):
    """Посчитать записи <loc> в sitemap.xml сайта."""
    cfg: CrawlerConfig = ctx.obj['config']
    try:
        count = asyncio.run(count_sitemap_pages(url, timeout=cfg.sitemap_timeout))
    except InvalidURL as e:
        print_error(f'Некорректный URL: {e}')
    if count is None:
        print_error('Sitemap не найден или не содержит <loc>')
    click.echo(str(count))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


def main():
    cli(prog_name='meta-scout')


if __name__ == "__main__":
    main()
