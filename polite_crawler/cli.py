#!/usr/bin/env python3
"""
Command-line entry point of polite_crawler.

Commands:
  crawl     Crawl a site, index it in memory and run optional searches
  config    Show the effective configuration

Global options:
  --config PATH       YAML/JSON config (optional when crawl gets a URL)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only if omitted)
  --log-format FORMAT Log format (e.g. "%(asctime)s %(levelname)s %(message)s")

crawl options:
  --fetch-workers N   Number of fetch threads
  --index-workers N   Number of index threads
  --query, -q Q       Search the index after crawling (repeatable)
  --json PATH         Save the JSON report to a file
  --pretty            Indent JSON printed to stdout

Also:
  --version, -v       Show the version

Example:
  polite-crawler crawl http://example.com/ -q "python crawler" --json report.json
"""
import json
import sys
from dataclasses import asdict
from pathlib import Path

import click

from polite_crawler import __version__
from polite_crawler.config import CrawlerConfig, load_config
from polite_crawler.crawler.crawler import Crawler
from polite_crawler.index import InMemoryIndex
from polite_crawler.logger import DEFAULT_FORMAT, init_logging
from polite_crawler.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def run_crawl(cfg: CrawlerConfig, index: InMemoryIndex):
    """Run a crawl; module-level so tests can replace it."""
    return Crawler(cfg, index).run()


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='polite_crawler, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON configuration file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Log file path (stdout if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Log format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """polite_crawler command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    cfg = None
    if config_path is not None:
        try:
            cfg = load_config(config_path)
        except Exception as e:
            print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


def _effective_config(ctx, url=None, **overrides) -> CrawlerConfig:
    cfg = ctx.obj['config']
    updates = {k: v for k, v in overrides.items() if v is not None}
    if url is not None:
        updates['base_url'] = url
    try:
        if cfg is None:
            if 'base_url' not in updates:
                print_error('No URL given and no --config file with base_url')
            return CrawlerConfig(**updates)
        return CrawlerConfig(**{**cfg.model_dump(), **updates})
    except ValueError as e:
        print_error(f'Invalid configuration: {e}')


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.option('--fetch-workers', type=click.IntRange(min=1), default=None, help='Number of fetch threads')
@click.option('--index-workers', type=click.IntRange(min=1), default=None, help='Number of index threads')
@click.option('--query', '-q', 'queries', multiple=True, help='Search the index after crawling (repeatable)')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Save the JSON report to a file'
)
@click.option('--pretty', is_flag=True, help='Indent JSON output (2 spaces)')
@click.pass_context
def crawl_cmd(ctx, url, fetch_workers, index_workers, queries, json_output, pretty):
    """Crawl URL (or base_url from the config) and print a report."""
    cfg = _effective_config(ctx, url, fetch_workers=fetch_workers, index_workers=index_workers)
    index = InMemoryIndex(language=cfg.language)
    try:
        report = run_crawl(cfg, index)
    except Exception as e:
        print_error(f'Crawl failed: {e}')

    hits = {q: index.search(q) for q in queries}

    if json_output:
        try:
            saved = render_json(report, json_output, hits if queries else None)
            click.echo(f'JSON report: {saved}')
        except OSError as e:
            print_error(f'Failed to save JSON report: {e}')
        return

    data = asdict(report)
    if queries:
        data['searches'] = {q: [asdict(h) for h in qh] for q, qh in hits.items()}
    click.echo(json.dumps(data, ensure_ascii=False, indent=2 if pretty else None))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.pass_context
def show_config(ctx, url):
    """Show the effective configuration as JSON."""
    cfg = _effective_config(ctx, url)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
