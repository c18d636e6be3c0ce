# === FILE: a11y_scout/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for the A11yScout crawler.

Commands:
  scan      Crawl a site, audit each page and print/save the results
  config    Show the effective configuration

Global options:
  --config PATH       YAML/JSON config (default: configs/default.yaml when present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (console only when omitted)
  --log-format FORMAT Logging format string

scan options:
  START_URL           Start URL (overrides start_url from the config)
  --max-depth N       Maximum link depth
  --max-scans N       Maximum number of page analyses
  --concurrency N     Pages processed together
  --renderer NAME     browser | http
  --analyzer NAME     axe | markup
  --axe-script PATH   Path to axe.min.js
  --json PATH         Save the JSON response to a file
  --html PATH         Save an HTML report to a file
  --template DIR      Directory with report.html.j2
  --pretty            Indent JSON output
  --scan-timeout SEC  Timeout for the whole scan (seconds)

Example:
  a11y-scout scan https://example.com --max-depth 1 --renderer http --analyzer markup --pretty
"""
import asyncio
import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from a11y_scout import __version__
from a11y_scout.aggregator import aggregate_results
from a11y_scout.config import load_config
from a11y_scout.engine import build_response, start_scan
from a11y_scout.logger import DEFAULT_FORMAT, init_logging, logger
from a11y_scout.report.html_report import render_html
from a11y_scout.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def resolve_config(ctx, start_url=None, **overrides):
    """Load the config file of the group and apply command-line overrides."""
    try:
        return load_config(ctx.obj['config_path'], start_url=start_url, **overrides)
    except ValidationError as e:
        print_error(f'Invalid configuration: {e}')
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Failed to load configuration: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='A11yScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML/JSON configuration file.'
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
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (console only when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """A11yScout command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('scan', context_settings=CONTEXT_SETTINGS)
@click.argument('start_url', required=False)
@click.option('--max-depth', 'max_depth', type=click.IntRange(min=0), default=None, help='Maximum link depth')
@click.option('--max-scans', 'max_scans', type=click.IntRange(min=1), default=None, help='Maximum page analyses')
@click.option('--concurrency', 'concurrency', type=click.IntRange(min=1), default=None, help='Pages per batch')
@click.option('--renderer', 'renderer', type=click.Choice(['browser', 'http']), default=None, help='Page renderer')
@click.option('--analyzer', 'analyzer', type=click.Choice(['axe', 'markup']), default=None, help='Page analyzer')
@click.option(
    '--axe-script', 'axe_script',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to axe.min.js'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the JSON response to a file'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save an HTML report to a file'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with report.html.j2 (bundled template by default)'
)
@click.option('--pretty', is_flag=True, help='Indent JSON output (2 spaces)')
@click.option(
    '--scan-timeout', 'scan_timeout',
    type=float,
    default=None,
    help='Timeout for the whole scan (seconds)'
)
@click.pass_context
def scan(ctx, start_url, max_depth, max_scans, concurrency, renderer, analyzer, axe_script,
         json_output, html_output, template_dir, pretty, scan_timeout):
    """Crawl the site, audit every page and output the results."""
    overrides = {
        'max_depth': max_depth,
        'max_scans': max_scans,
        'concurrency': concurrency,
        'render.engine': renderer,
        'analysis.engine': analyzer,
        'analysis.axe_script': str(axe_script) if axe_script else None,
    }
    cfg = resolve_config(ctx, start_url, **overrides)
    logger.info('Starting scan: %s', cfg.start_url)
    try:
        if scan_timeout:
            results = asyncio.run(
                asyncio.wait_for(start_scan(cfg), timeout=scan_timeout)
            )
        else:
            results = asyncio.run(start_scan(cfg))
    except asyncio.TimeoutError:
        print_error(f'Scan did not finish within {scan_timeout} seconds')
    except Exception as e:
        print_error(f'Scan failed: {e}')

    response = build_response(results)

    # No output files: print to stdout
    if not json_output and not html_output:
        indent = 2 if pretty else None
        try:
            click.echo(json.dumps(response, ensure_ascii=False, indent=indent))
        except TypeError as e:
            print_error(f'JSON serialization failed: {e}')
        return

    if json_output:
        try:
            saved_json = render_json(response, json_output)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Failed to save JSON report: {e}')

    if html_output:
        try:
            saved_html = render_html(aggregate_results(results), template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Failed to save HTML report: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.argument('start_url', required=False)
@click.pass_context
def show_config(ctx, start_url):
    """Print the effective configuration as JSON."""
    cfg = resolve_config(ctx, start_url)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
