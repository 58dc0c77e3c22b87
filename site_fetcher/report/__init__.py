# File: site_fetcher/report/__init__.py
"""site_fetcher.report: digest, Markdown report and JSON writers used by the engine and the CLI."""

from __future__ import annotations

from site_fetcher.report.digest import generate_digest
from site_fetcher.report.json_report import (
    dump_text,
    load_site_content,
    render_assets_index,
    render_json,
    render_page_json,
)
from site_fetcher.report.markdown_report import generate_markdown_report

SITE_CONTENT_FILE = "site-content.json"
DIGEST_FILE = "site-digest.txt"
MARKDOWN_FILE = "site-content.md"
ASSETS_INDEX_FILE = "assets-index.json"

__all__ = [
    "ASSETS_INDEX_FILE",
    "DIGEST_FILE",
    "MARKDOWN_FILE",
    "SITE_CONTENT_FILE",
    "dump_text",
    "generate_digest",
    "generate_markdown_report",
    "load_site_content",
    "render_assets_index",
    "render_json",
    "render_page_json",
]
