# File: site_fetcher/models.py
"""site_fetcher.models: records produced by extraction and aggregation.

Every record is a frozen Pydantic model so that the persisted JSON can be
parsed back into an equal object with ``Model.model_validate_json``.
"""

from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class Heading(_Record):
    level: int = Field(..., ge=1, le=6)
    text: str


class ListBlock(_Record):
    kind: Literal["unordered", "ordered"]
    items: List[str] = Field(default_factory=list)


class LinkRef(_Record):
    href: str
    text: str
    is_external: bool


class ImageRef(_Record):
    src: str
    alt: str = ""


class PageMetadata(_Record):
    """Single-attribute reads from <head> plus parsed JSON-LD blocks."""

    charset: Optional[str] = None
    viewport: Optional[str] = None
    robots: Optional[str] = None
    canonical: Optional[str] = None
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    og_image: Optional[str] = None
    structured_data: List[Any] = Field(default_factory=list)


class PageRecord(_Record):
    """Structured content of one HTML page."""

    url: str
    path: str
    title: str
    description: Optional[str] = None
    headings: List[Heading] = Field(default_factory=list)
    paragraphs: List[str] = Field(default_factory=list)
    lists: List[ListBlock] = Field(default_factory=list)
    links: List[LinkRef] = Field(default_factory=list)
    images: List[ImageRef] = Field(default_factory=list)
    metadata: PageMetadata = Field(default_factory=PageMetadata)
    raw_html: str = ""
    extracted_text: str = ""


AssetType = Literal["style", "script", "image", "font", "other"]


class AssetRecord(_Record):
    url: str
    local_path: str
    type: AssetType
    size: int = Field(..., ge=0)


class SitemapEntry(_Record):
    url: str
    title: str
    depth: int


class SiteContent(_Record):
    """Aggregate of one run; assembled once and persisted as site-content.json."""

    base_url: str
    fetched_at: str
    total_pages: int
    total_assets: int
    pages: List[PageRecord] = Field(default_factory=list)
    assets: List[AssetRecord] = Field(default_factory=list)
    sitemap: List[SitemapEntry] = Field(default_factory=list)
    digest: str = ""


__all__ = [
    "AssetRecord",
    "AssetType",
    "Heading",
    "ImageRef",
    "LinkRef",
    "ListBlock",
    "PageMetadata",
    "PageRecord",
    "SiteContent",
    "SitemapEntry",
]
