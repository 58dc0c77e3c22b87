# === FILE: site_fetcher/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for site_fetcher.

Commands:
  fetch URL   Crawl a site, extract its content and write the reports
  analyze DIR Summarise a previously fetched site-content.json

Global options:
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only if omitted)
  --log-format FORMAT Logging format string

fetch options:
  --output/-o DIR            Output directory (default ./fetched)
  --depth/-d N               Maximum recursion depth (default 10)
  --no-recursive             Fetch the seed page and its assets only
  --no-assets/--no-css/--no-js/--no-images
  --no-content/--no-digest/--no-markdown
  --concurrency/-c N         Max concurrent requests (default 5)
  --timeout/-t MS            Request timeout in milliseconds (default 30000)
  --user-agent/-u STRING     Custom User-Agent
  --config PATH              YAML/JSON file with defaults; explicit options win

Additionally:
  --version, -v       Show the site_fetcher version

Example:
  site-fetcher fetch example.com --output ./fetched --depth 3 --no-js
"""
import asyncio
import sys
from collections import Counter
from pathlib import Path
from typing import Any, Dict

import click
from click.core import ParameterSource

from site_fetcher import __version__
from site_fetcher.config import load_config, read_config_file
from site_fetcher.engine import fetch_website
from site_fetcher.logger import DEFAULT_FORMAT, init_logging
from site_fetcher.report import (
    ASSETS_INDEX_FILE,
    DIGEST_FILE,
    MARKDOWN_FILE,
    SITE_CONTENT_FILE,
    load_site_content,
)

CONTEXT_SETTINGS = dict(help_option_names=["--help"])
MAX_LISTED_ERRORS = 5

# CLI parameter name -> FetchConfig field
_OPTION_FIELDS = {
    "output": "output_dir",
    "depth": "max_depth",
    "recursive": "recursive",
    "assets": "include_assets",
    "css": "include_css",
    "js": "include_js",
    "images": "include_images",
    "content": "extract_content",
    "digest": "generate_digest",
    "markdown": "generate_markdown",
    "concurrency": "max_concurrency",
    "timeout": "timeout_ms",
    "user_agent": "user_agent",
}


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _yes_no(flag: bool) -> str:
    return click.style("Yes", fg="green") if flag else click.style("No", fg="yellow")


def _collect_options(ctx: click.Context, params: Dict[str, Any], from_file: bool) -> Dict[str, Any]:
    """Options for FetchConfig; with a config file only explicitly given ones override it."""
    values: Dict[str, Any] = {}
    for name, field_name in _OPTION_FIELDS.items():
        if from_file and ctx.get_parameter_source(name) is not ParameterSource.COMMANDLINE:
            continue
        if params[name] is not None:
            values[field_name] = params[name]
    return values


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='site_fetcher, version %(version)s')
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
    help='Log file (stdout only if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Format string for log records'
)
def cli(log_level, log_file, log_format):
    """Recursive website content fetcher for AI/LLM analysis."""
    init_logging(level=log_level, log_file=log_file, log_format=log_format)


@cli.command('fetch', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option('--output', '-o', default='./fetched', show_default=True,
              type=click.Path(file_okay=False, path_type=Path), help='Output directory')
@click.option('--depth', '-d', default=10, show_default=True, type=click.IntRange(min=0),
              help='Maximum recursion depth')
@click.option('--recursive/--no-recursive', default=True, show_default=True, help='Follow links recursively')
@click.option('--assets/--no-assets', default=True, help='Download icons, media and embeds')
@click.option('--css/--no-css', default=True, help='Download stylesheets')
@click.option('--js/--no-js', default=True, help='Download scripts')
@click.option('--images/--no-images', default=True, help='Download images')
@click.option('--content/--no-content', default=True, help='Extract structured page content')
@click.option('--digest/--no-digest', default=True, help='Write the site digest')
@click.option('--markdown/--no-markdown', default=True, help='Write the Markdown report')
@click.option('--concurrency', '-c', default=5, show_default=True, type=click.IntRange(min=1),
              help='Max concurrent requests')
@click.option('--timeout', '-t', default=30000, show_default=True, type=click.IntRange(min=1),
              help='Request timeout in ms')
@click.option('--user-agent', '-u', 'user_agent', default=None, help='Custom user agent')
@click.option('--config', 'config_path', default=None,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='YAML/JSON file with default options')
@click.pass_context
def fetch(ctx, url, config_path, **params):
    """Fetch an entire website recursively and write content reports."""
    try:
        file_values = read_config_file(config_path) if config_path else {}
        overrides = _collect_options(ctx, params, from_file=config_path is not None)
        cfg = load_config(None, **{**file_values, **overrides, "url": url})
    except Exception as e:
        print_error(f'Configuration error: {e}')

    output_dir = cfg.output_dir.resolve()
    cfg = cfg.model_copy(update={"output_dir": output_dir})

    click.secho('\n=== Website Fetcher ===\n', fg='blue')
    click.echo(f"URL: {click.style(cfg.url, fg='green')}")
    click.echo(f"Output: {click.style(str(output_dir), fg='green')}")
    click.echo(f"Recursive: {_yes_no(cfg.recursive)}")
    click.echo(f"Max Depth: {click.style(str(cfg.max_depth), fg='cyan')}\n")

    try:
        result = asyncio.run(fetch_website(cfg))
    except Exception as e:
        print_error(f'Fetch failed: {e}')

    if result.success:
        click.secho('=== Fetch Complete ===', fg='green')
    else:
        click.secho('=== Fetch Complete (with errors) ===', fg='yellow')
    click.echo(f"Pages: {click.style(str(result.site_content.total_pages), fg='cyan')}")
    click.echo(f"Assets: {click.style(str(result.site_content.total_assets), fg='cyan')}")
    click.echo(f"Output: {click.style(str(result.output_dir), fg='blue')}")

    click.echo('\nGenerated files:')
    generated = [(SITE_CONTENT_FILE, 'Structured content data')]
    if cfg.generate_markdown:
        generated.append((MARKDOWN_FILE, 'Markdown report'))
    if cfg.generate_digest:
        generated.append((DIGEST_FILE, 'Site digest (llms.txt style)'))
    generated += [(ASSETS_INDEX_FILE, 'Asset catalog'), ('assets/', 'Downloaded files'),
                  ('content/', 'Extracted page content')]
    for name, label in generated:
        click.echo(f"  - {click.style(name, fg='green')} - {label}")

    if result.errors:
        click.secho(f'\nWarnings ({len(result.errors)}):', fg='yellow')
        for err in result.errors[:MAX_LISTED_ERRORS]:
            click.echo(f'  - {err}')
        if len(result.errors) > MAX_LISTED_ERRORS:
            click.echo(f'  ... and {len(result.errors) - MAX_LISTED_ERRORS} more')


@cli.command('analyze', context_settings=CONTEXT_SETTINGS)
@click.argument('directory', type=click.Path(file_okay=False, path_type=Path))
def analyze(directory):
    """Analyze previously fetched content."""
    content_path = directory.resolve() / SITE_CONTENT_FILE
    if not content_path.is_file():
        print_error(f'No {SITE_CONTENT_FILE} found in {directory}')
    try:
        content = load_site_content(content_path)
    except Exception as e:
        print_error(f'Cannot read {content_path}: {e}')

    click.secho('\n=== Site Analysis ===\n', fg='blue')
    click.echo(f"Base URL: {click.style(content.base_url, fg='green')}")
    click.echo(f"Fetched: {click.style(content.fetched_at, fg='cyan')}")
    click.echo(f"Pages: {click.style(str(content.total_pages), fg='cyan')}")
    click.echo(f"Assets: {click.style(str(content.total_assets), fg='cyan')}")

    click.secho('\nPages:', fg='yellow')
    for page in content.pages:
        click.echo(f'  - {page.title} ({page.path})')
        click.echo(
            f'    Headings: {len(page.headings)}, Paragraphs: {len(page.paragraphs)}, '
            f'Images: {len(page.images)}'
        )

    click.secho('\nAsset Breakdown:', fg='yellow')
    for asset_type, count in Counter(a.type for a in content.assets).items():
        click.echo(f'  - {asset_type}: {count}')

    has_structured = any(p.metadata.structured_data for p in content.pages)
    has_local_business = any(
        'LocalBusiness' in p.metadata.model_dump_json(include={'structured_data'})
        for p in content.pages
    )
    click.secho('\nStructured Data Check:', fg='yellow')
    click.echo(
        f"  - Structured Data: "
        f"{click.style('Yes', fg='green') if has_structured else click.style('Missing', fg='red')}"
    )
    click.echo(
        f"  - LocalBusiness Schema: "
        f"{click.style('Yes', fg='green') if has_local_business else click.style('Missing', fg='red')}"
    )


if __name__ == "__main__":
    cli()
