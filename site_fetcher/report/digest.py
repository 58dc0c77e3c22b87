# site_fetcher/report/digest.py

"""
Condensed site digest in the llms.txt style.

Sections: site hostname, homepage summary, flat page list and a short
content overview per page (level 1–2 headings plus the first paragraph).
"""
from __future__ import annotations

from typing import List, Optional, Sequence
from urllib.parse import urlparse

from site_fetcher.models import PageRecord

SUMMARY_LIMIT = 300
ELLIPSIS = "..."


def truncate(text: str, limit: int = SUMMARY_LIMIT) -> str:
    """Cut ``text`` to ``limit`` characters, appending an ellipsis only when something was cut."""
    return text[:limit] + (ELLIPSIS if len(text) > limit else "")


def _homepage(pages: Sequence[PageRecord]) -> Optional[PageRecord]:
    return next((p for p in pages if p.path in ("/", "")), None)


def generate_digest(pages: Sequence[PageRecord], base_url: str) -> str:
    """
    Render the digest for ``pages`` of the site at ``base_url``.

    :param pages: extracted pages, in the order they should be listed
    :param base_url: seed URL; only its hostname is used
    :return: digest text, deterministic for the same input order
    """
    lines: List[str] = [f"# {urlparse(base_url).hostname or base_url}", ""]

    home = _homepage(pages)
    if home is not None and home.description:
        lines += [f"> {home.description}", ""]

    lines += ["## Pages", ""]
    for page in pages:
        lines.append(f"- [{page.title}]({page.url})")
        if page.description:
            lines.append(f"  {page.description}")
    lines.append("")

    lines += ["## Content", ""]
    for page in pages:
        if not page.headings and not page.paragraphs:
            continue
        lines += [f"### {page.title}", f"URL: {page.url}", ""]
        lines += [f"- {h.text}" for h in page.headings if h.level <= 2]
        if page.paragraphs:
            lines += ["", truncate(page.paragraphs[0])]
        lines.append("")

    return "\n".join(lines)


__all__ = ["ELLIPSIS", "SUMMARY_LIMIT", "generate_digest", "truncate"]
