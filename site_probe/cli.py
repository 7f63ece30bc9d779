# === FILE: site_probe/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска SiteProbe через командную строку.

Команды:
  run       Проверить сайты и сохранить отчёты
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (по умолчанию — встроенные значения)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда run опции:
  --site DOMAIN             Проверить этот домен (можно несколько; API не опрашивается)
  --language CODE           Языковая версия (можно несколько; заменяет список из конфига)
  --report-dir DIR          Каталог для JSON-отчётов
  --html PATH               Дополнительно сохранить HTML-сводку
  --renderer http|browser   Чем загружать страницы
  --site-concurrency N      Сколько сайтов одновременно
  --language-concurrency N  Сколько языков одного сайта одновременно

Дополнительно:
  --version, -v       Показать версию SiteProbe

Пример:
  site-probe run --site example.com --language en --language pt --report-dir report
"""
import asyncio
import sys
from pathlib import Path

import click

from site_probe import __version__
from site_probe.config import ProbeConfig, load_config
from site_probe.engine import probe
from site_probe.logger import DEFAULT_FORMAT, configure
from site_probe.report.html_report import render_html

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteProbe, version %(version)s')
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
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteProbe CLI."""
    configure(level=log_level, log_file=log_file, log_format=log_format)
    try:
        cfg = load_config(config_path) if config_path else ProbeConfig()
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('run', context_settings=CONTEXT_SETTINGS)
@click.option('--site', '-s', 'sites', multiple=True, help='Домен для проверки (можно несколько)')
@click.option('--language', '-l', 'languages', multiple=True, help='Код языка (можно несколько)')
@click.option(
    '--report-dir', '-o', 'report_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Каталог для JSON-отчётов'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-сводку в файл'
)
@click.option(
    '--renderer', 'renderer',
    default=None,
    type=click.Choice(['http', 'browser']),
    help='Рендерер страниц'
)
@click.option('--site-concurrency', type=click.IntRange(min=1), default=None)
@click.option('--language-concurrency', type=click.IntRange(min=1), default=None)
@click.pass_context
def run(ctx, sites, languages, report_dir, html_output, renderer, site_concurrency,
        language_concurrency):
    """Проверить сайты и сохранить отчёты."""
    cfg: ProbeConfig = ctx.obj['config']
    overrides = {
        'sites': list(sites) or None,
        'languages': list(languages) or None,
        'report_dir': report_dir,
        'renderer': renderer,
        'site_concurrency': site_concurrency,
        'language_concurrency': language_concurrency,
    }
    try:
        cfg = ProbeConfig(**{
            **cfg.model_dump(mode='json'),
            **{k: v for k, v in overrides.items() if v is not None},
        })
    except Exception as e:
        print_error(f'Ошибка в параметрах: {e}')

    try:
        outcome = asyncio.run(probe(cfg))
    except Exception as e:
        print_error(f'Ошибка при проверке: {e}')

    if outcome is None:
        click.echo('Nothing to test: no sites found.')
        return

    results = outcome.report.results
    click.echo(
        f'Tested {len(outcome.report.sites)} site(s), {len(results.urls_tested)} URL(s): '
        f'{len(results.success)} ok, {len(results.errors)} error, '
        f'{len(results.empty_content)} empty content'
    )
    for name, path in outcome.files.items():
        click.echo(f'{name}: {path}')

    if html_output:
        try:
            saved_html = render_html(outcome.report, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
