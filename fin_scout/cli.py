# === FILE: fin_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа FinScout через командную строку.

Команды:
  key set TOKEN     Проверить и сохранить API-ключ Firecrawl
  key show          Показать сохранённый ключ (маскированный)
  key test [TOKEN]  Проверить ключ (указанный или сохранённый)
  key remove        Удалить сохранённый ключ
  crawl [URL]       Обойти сайт через Firecrawl и вывести страницы
  quote QUERY       Котировка по символу акции или ISIN фонда
  indices           Рыночные индексы
  popular           Популярные акции

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Дополнительно:
  --version, -v       Показать версию FinScout

Пример:
  fin_scout key set fc-xxxxxxxx
  fin_scout crawl https://www.moneycontrol.com/ --json reports/crawl.json
  fin_scout quote RELIANCE
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from fin_scout import __version__
from fin_scout.config import load_config
from fin_scout.crawl.models import CrawlFailure
from fin_scout.engine import Engine
from fin_scout.logger import init_logging
from fin_scout.parser.html_parser import summarize_page
from fin_scout.quotes.models import FundRecord
from fin_scout.report.json_report import crawl_to_dict, render_json
from fin_scout.utils import format_inr, format_number, is_valid_url, mask_secret

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _stored_key(gateway):
    try:
        return gateway.get_credential()
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Ошибка чтения хранилища ключа: {e}')


def _change(change: float, percent: float) -> str:
    arrow = '▲' if change >= 0 else '▼'
    text = f'{arrow} {format_number(change, 2)} ({format_number(percent, 2)}%)'
    return click.style(text, fg='green' if change >= 0 else 'red')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='FinScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд FinScout CLI."""
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
    ctx.obj['engine'] = Engine(cfg)


# --------------------------------------------------------------------------- #
# API key                                                                     #
# --------------------------------------------------------------------------- #

@cli.group('key', context_settings=CONTEXT_SETTINGS)
def key():
    """Управление API-ключом Firecrawl."""


@key.command('set', context_settings=CONTEXT_SETTINGS)
@click.argument('token')
@click.option('--no-verify', is_flag=True, help='Сохранить без проверки ключа')
@click.pass_context
def key_set(ctx, token, no_verify):
    """Проверить ключ и сохранить его."""
    token = token.strip()
    if not token:
        print_error('Please enter a valid API key')
    gateway = ctx.obj['engine'].gateway
    if not no_verify and not asyncio.run(gateway.test_credential(token)):
        print_error('Invalid API key. Please check and try again.')
    try:
        gateway.save_credential(token)
    except Exception as e:
        print_error(f'Ошибка при сохранении ключа: {e}')
    click.echo('API key saved' if no_verify else 'API key saved and verified successfully!')


@key.command('show', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def key_show(ctx):
    """Показать сохранённый ключ (маскированный)."""
    token = _stored_key(ctx.obj['engine'].gateway)
    if not token:
        print_error('API key not found')
    click.echo(mask_secret(token))


@key.command('test', context_settings=CONTEXT_SETTINGS)
@click.argument('token', required=False)
@click.pass_context
def key_test(ctx, token):
    """Проверить указанный или сохранённый ключ."""
    gateway = ctx.obj['engine'].gateway
    token = token or _stored_key(gateway)
    if not token:
        print_error('API key not found')
    if not asyncio.run(gateway.test_credential(token)):
        print_error('API key is not valid')
    click.echo('API key is valid')


@key.command('remove', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def key_remove(ctx):
    """Удалить сохранённый ключ."""
    try:
        ctx.obj['engine'].gateway.remove_credential()
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Ошибка при удалении ключа: {e}')
    click.echo('API key removed')


# --------------------------------------------------------------------------- #
# Crawl                                                                       #
# --------------------------------------------------------------------------- #

@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--pretty', is_flag=True,
    help='Вывести весь результат в stdout как JSON (отступ 2)'
)
@click.option('--show-pages/--no-show-pages', default=True, show_default=True,
              help='Печатать список страниц')
@click.pass_context
def crawl(ctx, url, json_output, pretty, show_pages):
    """Обойти сайт через Firecrawl и вывести результат."""
    engine = ctx.obj['engine']
    url = url or str(ctx.obj['config'].default_crawl_url)
    if not is_valid_url(url):
        print_error(f'Некорректный URL: {url}')
    if not _stored_key(engine.gateway):
        print_error('Please set your Firecrawl API key first')

    click.echo(f'Crawling {url} ...', err=True)
    result = asyncio.run(engine.gateway.crawl(url))
    if isinstance(result, CrawlFailure):
        print_error(result.reason or 'Failed to crawl website')

    if json_output:
        try:
            saved_json = render_json(result, json_output)
            click.echo(f'JSON report: {saved_json}', err=True)
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if pretty:
        click.echo(json.dumps(crawl_to_dict(result), ensure_ascii=False, indent=2))
        return

    click.echo(f'Pages scraped: {result.pages_completed}')
    click.echo(f'Total pages:   {result.pages_total}')
    click.echo(f'Credits used:  {result.credits_used}')
    click.echo(f'Status:        {result.status or "completed"}')
    if not show_pages:
        return
    for i, page in enumerate(result.pages):
        summary = summarize_page(page, i)
        click.secho(f'\n[{i + 1}] {summary.title}', bold=True)
        click.echo(f'    {summary.source_url or "No URL"}')
        if summary.preview:
            click.echo(f'    {summary.preview}')


# --------------------------------------------------------------------------- #
# Quotes                                                                      #
# --------------------------------------------------------------------------- #

@cli.command('quote', context_settings=CONTEXT_SETTINGS)
@click.argument('query')
@click.pass_context
def quote(ctx, query):
    """Котировка по символу акции (например, RELIANCE) или ISIN фонда."""
    record = asyncio.run(ctx.obj['engine'].lookup(query))
    if record is None:
        print_error('No financial data found for the entered symbol/ISIN')

    if isinstance(record, FundRecord):
        click.secho(record.name, bold=True)
        click.echo(f'ISIN:    {record.isin}')
        click.echo(f'AMC:     {record.amc}')
        click.echo(f'NAV:     {format_inr(record.nav)}')
        click.echo(f'Change:  {_change(record.change, record.change_percent)}')
        click.echo(f'Updated: {record.timestamp.isoformat()}')
        return

    click.secho(record.name, bold=True)
    click.echo(f'Symbol:  {record.symbol}')
    click.echo(f'Price:   {format_inr(record.price)}')
    click.echo(f'Change:  {_change(record.change, record.change_percent)}')
    click.echo(f'Volume:  {format_number(record.volume, 0)}')
    if record.market_cap is not None:
        click.echo(f'M.Cap:   {format_inr(record.market_cap)} Cr')
    click.echo(f'Updated: {record.timestamp.isoformat()}')


@cli.command('indices', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def indices(ctx):
    """Показать рыночные индексы."""
    for index in asyncio.run(ctx.obj['engine'].quotes.get_market_indices()):
        click.echo(
            f'{index.symbol:<10} {index.name:<12} {format_number(index.price, 0):>12}  '
            f'{_change(index.change, index.change_percent)}'
        )


@cli.command('popular', context_settings=CONTEXT_SETTINGS)
@click.option('--limit', '-l', type=click.IntRange(min=1), default=None, help='Сколько символов показать')
@click.pass_context
def popular(ctx, limit):
    """Популярные акции для быстрого поиска."""
    symbols = ctx.obj['engine'].quotes.get_popular_symbols()
    for info in symbols[:limit]:
        click.echo(f'{info.symbol:<12} {info.name}')


if __name__ == "__main__":
    cli()
