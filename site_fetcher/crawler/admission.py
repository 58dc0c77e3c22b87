# site_fetcher/crawler/admission.py
"""
URL admission policy: decides which discovered URLs the fetch engine may download.

The predicate is pure. The fetch engine calls it from several workers at once.
"""
from __future__ import annotations

from functools import partial
from typing import Callable
from urllib.parse import urljoin, urlparse

from site_fetcher.utils import normalize_hostname

UrlFilter = Callable[[str], bool]

ADMIN_MARKERS = ("/wp-admin", "/wp-login")
ALLOWED_SCHEMES = ("http", "https")
_SKIPPED_PREFIXES = ("mailto:", "tel:", "javascript:", "#")


def _syntactic_fallback(candidate_url: str) -> bool:
    return not candidate_url.startswith(_SKIPPED_PREFIXES)


def admit(candidate_url: str, seed_url: str) -> bool:
    """
    Return True if ``candidate_url`` stays on the seed's site.

    Relative URLs are resolved against ``seed_url``. ``www.`` is ignored when
    comparing hosts, only http(s) is accepted and CMS admin/login paths are
    rejected. A URL that cannot be parsed is judged by its prefix alone.
    """
    try:
        resolved = urlparse(urljoin(seed_url, candidate_url))
        seed_host = urlparse(seed_url).hostname or ""
        candidate_host = resolved.hostname or ""
    except ValueError:
        return _syntactic_fallback(candidate_url)

    same_site = normalize_hostname(candidate_host) == normalize_hostname(seed_host)
    valid_scheme = resolved.scheme in ALLOWED_SCHEMES
    not_admin = not any(marker in resolved.path for marker in ADMIN_MARKERS)
    return same_site and valid_scheme and not_admin


def make_url_filter(seed_url: str) -> UrlFilter:
    """Bind ``seed_url`` so the predicate can be handed to a fetch engine."""
    return partial(_admit_for_seed, seed_url)


def _admit_for_seed(seed_url: str, candidate_url: str) -> bool:
    return admit(candidate_url, seed_url)


__all__ = ["ADMIN_MARKERS", "UrlFilter", "admit", "make_url_filter"]
