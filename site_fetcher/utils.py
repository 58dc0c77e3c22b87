# File: site_fetcher/utils.py
"""site_fetcher.utils: helpers for hostnames, origins and walking the download directory."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Union
from urllib.parse import urlparse

from site_fetcher.logger import get_logger

__all__: Sequence[str] = (
    "HTML_SUFFIXES",
    "normalize_hostname",
    "origin_of",
    "find_html_files",
    "find_all_files",
)

HTML_SUFFIXES = (".html", ".htm")

logger = get_logger("utils")


def normalize_hostname(hostname: str) -> str:
    """Lower-cases the hostname and strips one leading ``www.``."""
    hostname = hostname.lower()
    return hostname[4:] if hostname.startswith("www.") else hostname


def origin_of(url: str) -> str:
    """``scheme://host[:port]`` of ``url``: lower-case host, no credentials, no trailing slash."""
    parsed = urlparse(url)
    host = parsed.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = f":{parsed.port}" if parsed.port is not None else ""
    return f"{parsed.scheme}://{host}{port}"


def _walk(root: Union[str, Path]) -> List[Path]:
    base = Path(root)
    if not base.is_dir():
        logger.debug("Directory does not exist, nothing to list: %s", base)
        return []
    return sorted(p for p in base.rglob("*") if p.is_file())


def find_html_files(root: Union[str, Path]) -> List[Path]:
    """All ``.html``/``.htm`` files below ``root``, sorted by path."""
    return [p for p in _walk(root) if p.suffix.lower() in HTML_SUFFIXES]


def find_all_files(root: Union[str, Path]) -> List[Path]:
    """Every regular file below ``root``, sorted by path."""
    return _walk(root)
