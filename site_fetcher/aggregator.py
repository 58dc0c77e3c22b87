# File: site_fetcher/aggregator.py
"""site_fetcher.aggregator: sitemap, asset catalog and assembly of the SiteContent aggregate."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from site_fetcher.crawler.paths import reconstruct_url
from site_fetcher.models import AssetRecord, AssetType, PageRecord, SiteContent, SitemapEntry
from site_fetcher.utils import find_all_files

ASSET_TYPES_BY_SUFFIX: Dict[str, AssetType] = {
    ".css": "style",
    ".js": "script",
    **{ext: "image" for ext in (".jpg", ".jpeg", ".png", ".gif", ".svg", ".webp", ".ico")},
    **{ext: "font" for ext in (".woff", ".woff2", ".ttf", ".eot", ".otf")},
}


def build_sitemap(pages: Sequence[PageRecord]) -> List[SitemapEntry]:
    """Одна запись на страницу; глубина = число символов '/' в path, стабильная сортировка."""
    entries = [SitemapEntry(url=p.url, title=p.title, depth=p.path.count("/")) for p in pages]
    return sorted(entries, key=lambda e: e.depth)


def classify_asset(path: Union[str, Path]) -> AssetType:
    return ASSET_TYPES_BY_SUFFIX.get(Path(path).suffix.lower(), "other")


def catalog_assets(assets_dir: Union[str, Path], seed_url: str) -> List[AssetRecord]:
    """Describe every file under ``assets_dir`` (HTML included) as an AssetRecord."""
    root = Path(assets_dir)
    records: List[AssetRecord] = []
    for file in find_all_files(root):
        relative = file.relative_to(root).as_posix()
        records.append(
            AssetRecord(
                url=reconstruct_url(seed_url, relative),
                local_path=relative,
                type=classify_asset(file),
                size=file.stat().st_size,
            )
        )
    return records


def assemble_site_content(
    base_url: str,
    pages: Sequence[PageRecord],
    assets: Sequence[AssetRecord],
    digest: str = "",
    fetched_at: Optional[str] = None,
) -> SiteContent:
    """Собирает итоговый SiteContent; после сборки объект не изменяется."""
    return SiteContent(
        base_url=base_url,
        fetched_at=fetched_at or datetime.now(timezone.utc).isoformat(),
        total_pages=len(pages),
        total_assets=len(assets),
        pages=list(pages),
        assets=list(assets),
        sitemap=build_sitemap(pages),
        digest=digest,
    )


__all__ = ["ASSET_TYPES_BY_SUFFIX", "assemble_site_content", "build_sitemap", "catalog_assets", "classify_asset"]
