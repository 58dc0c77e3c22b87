# File: site_fetcher/parser/__init__.py
"""site_fetcher.parser: HTML → PageRecord extraction."""

from site_fetcher.parser.extractor import extract_full_text, extract_page_content

__all__ = ["extract_full_text", "extract_page_content"]
