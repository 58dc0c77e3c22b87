# site_fetcher/crawler/sources.py
"""
Selector/attribute pairs telling the fetch engine which references to follow.
"""
from __future__ import annotations

from typing import List, Tuple

from site_fetcher.config import FetchConfig
from site_fetcher.crawler.models import ResourceSource

# Links go first: they drive recursive HTML crawling.
LINK_SOURCES = (ResourceSource("a[href]", "href"),)

CSS_SOURCES = (ResourceSource('link[rel="stylesheet"][href]', "href"),)

JS_SOURCES = (ResourceSource("script[src]", "src"),)

IMAGE_SOURCES = (
    ResourceSource("img[src]", "src"),
    ResourceSource("img[data-src]", "data-src"),
    ResourceSource("img[srcset]", "srcset"),
    ResourceSource("picture source[srcset]", "srcset"),
    ResourceSource("source[src]", "src"),
    ResourceSource('[style*="background"]', "style"),
)

ASSET_SOURCES = (
    ResourceSource('link[rel="icon"]', "href"),
    ResourceSource('link[rel="shortcut icon"]', "href"),
    ResourceSource('link[rel="apple-touch-icon"]', "href"),
    ResourceSource('link[rel="manifest"]', "href"),
    ResourceSource("video source", "src"),
    ResourceSource("video[src]", "src"),
    ResourceSource("audio source", "src"),
    ResourceSource("audio[src]", "src"),
    ResourceSource("object[data]", "data"),
    ResourceSource("embed[src]", "src"),
)


def build_sources(config: FetchConfig) -> Tuple[ResourceSource, ...]:
    """Sources enabled by the include_* toggles of ``config``."""
    sources: List[ResourceSource] = list(LINK_SOURCES)
    if config.include_css:
        sources.extend(CSS_SOURCES)
    if config.include_js:
        sources.extend(JS_SOURCES)
    if config.include_images:
        sources.extend(IMAGE_SOURCES)
    if config.include_assets:
        sources.extend(ASSET_SOURCES)
    return tuple(sources)


__all__ = ["build_sources", "LINK_SOURCES", "CSS_SOURCES", "JS_SOURCES", "IMAGE_SOURCES", "ASSET_SOURCES"]
