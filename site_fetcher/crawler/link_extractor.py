# site_fetcher/crawler/link_extractor.py
"""
Resource reference extraction for the fetch engine.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List
from urllib.parse import urldefrag, urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_fetcher.crawler.models import ResourceSource

_CSS_URL_RE = re.compile(r"url\(\s*['\"]?([^'\")]+)['\"]?\s*\)", re.IGNORECASE)
_SKIPPED_PREFIXES = ("mailto:", "tel:", "javascript:", "data:", "#")


@dataclass(slots=True, frozen=True)
class Reference:
    """Absolute URL found on a page; ``is_link`` marks <a href> navigation."""

    url: str
    is_link: bool


def _split_values(attr: str, raw: str) -> Iterator[str]:
    if attr == "srcset":
        for candidate in raw.split(","):
            candidate = candidate.strip()
            if candidate:
                yield candidate.split()[0]
    elif attr == "style":
        yield from _CSS_URL_RE.findall(raw)
    else:
        yield raw.strip()


def extract_references(html: str, page_url: str, sources: Iterable[ResourceSource]) -> List[Reference]:
    """
    Collect absolute, fragment-free URLs referenced by ``html``.

    Sources are visited in the given order; duplicates keep their first position.
    mailto:, tel:, javascript:, data: and in-page anchors are ignored.
    """
    soup = BeautifulSoup(html, "lxml")
    seen: set[str] = set()
    refs: List[Reference] = []
    for source in sources:
        is_link = source.selector.startswith("a[")
        for tag in soup.select(source.selector):
            if not isinstance(tag, Tag):
                continue
            value = tag.get(source.attr)
            if isinstance(value, list):
                value = " ".join(value)
            if not value:
                continue
            for raw in _split_values(source.attr, value):
                if not raw or raw.startswith(_SKIPPED_PREFIXES):
                    continue
                try:
                    absolute, _ = urldefrag(urljoin(page_url, raw))
                except ValueError:
                    continue
                if absolute in seen:
                    continue
                seen.add(absolute)
                refs.append(Reference(absolute, is_link))
    return refs


__all__ = ["Reference", "extract_references"]
