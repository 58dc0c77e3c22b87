# File: site_fetcher/engine.py
"""site_fetcher.engine: orchestration of one fetch run, from download to persisted reports."""

from __future__ import annotations

import asyncio
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from site_fetcher.aggregator import assemble_site_content, catalog_assets
from site_fetcher.config import FetchConfig, load_config
from site_fetcher.crawler.admission import make_url_filter
from site_fetcher.crawler.crawler import AiohttpFetchEngine
from site_fetcher.crawler.models import FetchEngine, FetchRequest
from site_fetcher.crawler.paths import reconstruct_url
from site_fetcher.crawler.sources import build_sources
from site_fetcher.logger import get_logger
from site_fetcher.models import AssetRecord, PageRecord, SiteContent
from site_fetcher.parser.extractor import extract_page_content
from site_fetcher.report import (
    ASSETS_INDEX_FILE,
    DIGEST_FILE,
    MARKDOWN_FILE,
    SITE_CONTENT_FILE,
    dump_text,
    generate_digest,
    generate_markdown_report,
    render_assets_index,
    render_json,
    render_page_json,
)
from site_fetcher.utils import find_html_files

__all__ = ["Engine", "FetchResult", "build_request", "extract_pages", "fetch_website"]

logger = get_logger("engine")


@dataclass(slots=True)
class FetchResult:
    """Outcome of a run: the aggregate plus the non-fatal errors collected on the way."""

    site_content: SiteContent
    output_dir: Path
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


def build_request(config: FetchConfig) -> FetchRequest:
    """Translate the run configuration into a fetch engine request."""
    return FetchRequest(
        url=config.url,
        directory=config.assets_dir,
        url_filter=make_url_filter(config.url),
        sources=build_sources(config),
        recursive=config.recursive,
        max_depth=config.max_depth,
        max_concurrency=config.max_concurrency,
        timeout=config.timeout,
        user_agent=config.effective_user_agent,
        retry_times=config.retry_times,
    )


def _prepare_dirs(config: FetchConfig) -> None:
    config.output_dir.mkdir(parents=True, exist_ok=True)
    config.content_dir.mkdir(parents=True, exist_ok=True)
    # previous downloads never survive into a new run
    if config.assets_dir.exists():
        shutil.rmtree(config.assets_dir)


def extract_pages(config: FetchConfig) -> Tuple[List[PageRecord], List[str]]:
    """Extract every downloaded HTML file, one at a time; failures are recorded, not raised."""
    pages: List[PageRecord] = []
    errors: List[str] = []
    assets_dir = config.assets_dir
    for html_file in find_html_files(assets_dir):
        try:
            html = html_file.read_text(encoding="utf-8", errors="replace")
            relative = html_file.relative_to(assets_dir).as_posix()
            page = extract_page_content(html, reconstruct_url(config.url, relative))
            render_page_json(page, config.content_dir, relative)
        except Exception as exc:
            logger.warning("Extraction failed for %s: %s", html_file, exc)
            errors.append(f"Error extracting {html_file}: {exc}")
            continue
        pages.append(page)
    return pages, errors


def _persist(config: FetchConfig, site_content: SiteContent) -> None:
    out = config.output_dir
    render_json(site_content, out / SITE_CONTENT_FILE)
    if config.generate_digest and site_content.digest:
        dump_text(site_content.digest, out / DIGEST_FILE)
    if config.generate_markdown:
        dump_text(generate_markdown_report(site_content.pages, config.url), out / MARKDOWN_FILE)
    render_assets_index(site_content.assets, out / ASSETS_INDEX_FILE)


async def fetch_website(config: FetchConfig, engine: Optional[FetchEngine] = None) -> FetchResult:
    """
    Run the whole pipeline for ``config``.

    The fetch engine downloads the site first; extraction, cataloging and
    report generation follow sequentially over the downloaded files.
    """
    engine = engine or AiohttpFetchEngine()
    _prepare_dirs(config)

    errors: List[str] = []
    pages: List[PageRecord] = []
    assets: List[AssetRecord] = []

    logger.info("Starting fetch of %s", config.url)
    logger.info("Output directory: %s", config.output_dir)
    logger.info("Recursive: %s, max depth: %d", config.recursive, config.max_depth)

    try:
        resources = await engine.fetch(build_request(config))
    except Exception as exc:
        logger.error("Fetch failed: %s", exc)
        errors.append(f"Fetch error: {exc}")
    else:
        logger.info("Downloaded %d resources", len(resources))
        if config.extract_content:
            logger.info("Extracting content from HTML files...")
            pages, extraction_errors = extract_pages(config)
            errors.extend(extraction_errors)
        assets = catalog_assets(config.assets_dir, config.url)

    digest = generate_digest(pages, config.url) if config.generate_digest else ""
    site_content = assemble_site_content(config.url, pages, assets, digest=digest)
    _persist(config, site_content)

    logger.info(
        "Fetch complete: %d pages, %d assets, %d errors",
        site_content.total_pages,
        site_content.total_assets,
        len(errors),
    )
    return FetchResult(site_content=site_content, output_dir=config.output_dir, errors=errors)


class Engine:
    """Facade for the CLI and tests: load configuration and run a fetch synchronously."""

    @staticmethod
    def load_config(path: Optional[str], **overrides) -> FetchConfig:
        return load_config(path, **overrides)

    def __init__(self, config: FetchConfig, fetch_engine: Optional[FetchEngine] = None) -> None:
        self.config = config
        self.fetch_engine = fetch_engine

    def start_fetch(self) -> FetchResult:
        """Run :func:`fetch_website` in a fresh event loop."""
        try:
            return asyncio.run(fetch_website(self.config, self.fetch_engine))
        except Exception as exc:
            logger.error("Run failed: %s", exc)
            raise
