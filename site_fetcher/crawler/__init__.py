# File: site_fetcher/crawler/__init__.py
"""site_fetcher.crawler: URL admission, local path mapping and the bundled fetch engine."""

from site_fetcher.crawler.admission import admit, make_url_filter
from site_fetcher.crawler.crawler import AiohttpFetchEngine, AsyncCrawler
from site_fetcher.crawler.models import FetchEngine, FetchedResource, FetchRequest, ResourceSource
from site_fetcher.crawler.paths import local_path_for, reconstruct_url

__all__ = [
    "AiohttpFetchEngine",
    "AsyncCrawler",
    "FetchEngine",
    "FetchRequest",
    "FetchedResource",
    "ResourceSource",
    "admit",
    "local_path_for",
    "make_url_filter",
    "reconstruct_url",
]
