# === FILE: site_fetcher/parser/extractor.py ===
"""Structured content extraction for a single HTML page.

:func:`extract_page_content` turns raw markup into a
:class:`~site_fetcher.models.PageRecord`:

* title: ``<title>``, else the first ``<h1>``, else ``"Untitled"``.
* description: ``meta[name=description]``, else ``og:description``.
* headings, paragraphs (longer than 20 characters), lists (direct items only),
  links, images and ``<head>`` metadata including JSON-LD blocks.
* extracted_text: a flattened copy of the readable text, one block per
  heading/paragraph/list item/table cell/quote/caption.

Nothing here raises for sloppy markup: a missing element just leaves the
corresponding field empty. BeautifulSoup runs on the lxml tree builder, which
adds ``<html>``/``<body>`` around fragments the way a browser does.
"""
from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any, List, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_fetcher.models import (
    Heading,
    ImageRef,
    LinkRef,
    ListBlock,
    PageMetadata,
    PageRecord,
)

__all__: Sequence[str] = ("extract_page_content", "extract_full_text", "MIN_PARAGRAPH_CHARS")

HTML_PARSER = "lxml"
HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
#: paragraphs of this length or shorter are treated as UI chrome
MIN_PARAGRAPH_CHARS = 20
#: text blocks of this length or shorter are left out of extracted_text
MIN_TEXT_BLOCK_CHARS = 5
NON_CONTENT_TAGS = ("script", "style", "noscript", "iframe")
TEXT_BLOCK_TAGS = (*HEADING_TAGS, "p", "li", "td", "th", "blockquote", "figcaption")
UNTITLED = "Untitled"


def _text(tag: Optional[Tag]) -> str:
    return tag.get_text().strip() if tag is not None else ""


def _attr(soup: BeautifulSoup, selector: str, attr: str) -> Optional[str]:
    tag = soup.select_one(selector)
    if tag is None:
        return None
    value = tag.get(attr)
    if isinstance(value, list):
        value = " ".join(value)
    return value


def _title(soup: BeautifulSoup) -> str:
    return _text(soup.find("title")) or _text(soup.find("h1")) or UNTITLED


def _description(soup: BeautifulSoup) -> Optional[str]:
    return (
        _attr(soup, 'meta[name="description"]', "content")
        or _attr(soup, 'meta[property="og:description"]', "content")
        or None
    )


def _headings(soup: BeautifulSoup) -> List[Heading]:
    headings: List[Heading] = []
    for tag in soup.find_all(list(HEADING_TAGS)):
        text = _text(tag)
        if text:
            headings.append(Heading(level=int(tag.name[1]), text=text))
    return headings


def _paragraphs(soup: BeautifulSoup) -> List[str]:
    texts = (_text(tag) for tag in soup.find_all("p"))
    return [t for t in texts if len(t) > MIN_PARAGRAPH_CHARS]


def _lists(soup: BeautifulSoup) -> List[ListBlock]:
    """Only direct <li> children count, so nested lists are not double-counted."""
    blocks: List[ListBlock] = []
    for tag in soup.find_all(["ul", "ol"]):
        items = [t for t in (_text(li) for li in tag.find_all("li", recursive=False)) if t]
        if items:
            kind = "unordered" if tag.name == "ul" else "ordered"
            blocks.append(ListBlock(kind=kind, items=items))
    return blocks


def _links(soup: BeautifulSoup, hostname: str) -> List[LinkRef]:
    links: List[LinkRef] = []
    for tag in soup.find_all("a", href=True):
        href = tag.get("href") or ""
        if not href or href.startswith(("#", "javascript:")):
            continue
        # loose match: any href mentioning the page host is internal
        is_external = href.startswith("http") and hostname not in href
        links.append(LinkRef(href=href, text=_text(tag), is_external=is_external))
    return links


def _images(soup: BeautifulSoup) -> List[ImageRef]:
    return [
        ImageRef(src=tag["src"], alt=tag.get("alt") or "")
        for tag in soup.find_all("img", src=True)
        if tag["src"]
    ]


def _reject_constant(name: str) -> Any:
    # strict JSON only: NaN/Infinity make the block invalid
    raise ValueError(f"non-standard JSON constant {name}")


def _structured_data(soup: BeautifulSoup) -> List[Any]:
    data: List[Any] = []
    for tag in soup.select('script[type="application/ld+json"]'):
        try:
            data.append(json.loads(tag.string or "", parse_constant=_reject_constant))
        except ValueError:
            continue
    return data


def _metadata(soup: BeautifulSoup) -> PageMetadata:
    return PageMetadata(
        charset=_attr(soup, "meta[charset]", "charset"),
        viewport=_attr(soup, 'meta[name="viewport"]', "content"),
        robots=_attr(soup, 'meta[name="robots"]', "content"),
        canonical=_attr(soup, 'link[rel="canonical"]', "href"),
        og_title=_attr(soup, 'meta[property="og:title"]', "content"),
        og_description=_attr(soup, 'meta[property="og:description"]', "content"),
        og_image=_attr(soup, 'meta[property="og:image"]', "content"),
        structured_data=_structured_data(soup),
    )


def extract_full_text(html: str) -> str:
    """Readable text of ``html`` as blank-line separated blocks; ``""`` without a body."""
    soup = BeautifulSoup(html, HTML_PARSER)
    for element in soup(list(NON_CONTENT_TAGS)):
        element.decompose()

    body = soup.body
    if body is None:
        return ""
    blocks = (_text(tag) for tag in body.find_all(list(TEXT_BLOCK_TAGS)))
    return "\n\n".join(b for b in blocks if len(b) > MIN_TEXT_BLOCK_CHARS)


def extract_page_content(html: str, page_url: str) -> PageRecord:
    """Parse ``html`` fetched from ``page_url`` into a PageRecord."""
    soup = BeautifulSoup(html, HTML_PARSER)
    hostname = urlparse(page_url).hostname or ""

    return PageRecord(
        url=page_url,
        path=urlparse(page_url).path,
        title=_title(soup),
        description=_description(soup),
        headings=_headings(soup),
        paragraphs=_paragraphs(soup),
        lists=_lists(soup),
        links=_links(soup, hostname),
        images=_images(soup),
        metadata=_metadata(soup),
        raw_html=html,
        extracted_text=extract_full_text(html),
    )
