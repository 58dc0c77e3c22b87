# site_fetcher/report/json_report.py

"""
JSON persistence for site_fetcher.

Writes the SiteContent aggregate, the asset catalog and per-page records as
indented JSON, and reads them back.
"""
from pathlib import Path
from typing import List, Sequence, Union

from pydantic import TypeAdapter

from site_fetcher.models import AssetRecord, PageRecord, SiteContent

_ASSET_LIST = TypeAdapter(List[AssetRecord])


def _prepare(output_path: Union[Path, str]) -> Path:
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    return output


def render_json(site_content: SiteContent, output_path: Union[Path, str]) -> Path:
    """
    Save ``site_content`` as indented JSON.

    :param site_content: aggregate of one run
    :param output_path: path of the JSON file
    :return: Path of the saved file
    """
    output = _prepare(output_path)
    output.write_text(site_content.model_dump_json(indent=2), encoding="utf-8")
    return output


def render_assets_index(assets: Sequence[AssetRecord], output_path: Union[Path, str]) -> Path:
    """Save the asset catalog as an indented JSON array."""
    output = _prepare(output_path)
    output.write_bytes(_ASSET_LIST.dump_json(list(assets), indent=2))
    return output


def page_json_path(relative_html_path: Union[Path, str]) -> Path:
    """``example.com/about/index.html`` → ``example.com/about/index.json``."""
    return Path(relative_html_path).with_suffix(".json")


def render_page_json(page: PageRecord, content_dir: Union[Path, str], relative_html_path: Union[Path, str]) -> Path:
    """Save one page record under ``content_dir``, mirroring the downloaded file layout."""
    output = _prepare(Path(content_dir) / page_json_path(relative_html_path))
    output.write_text(page.model_dump_json(indent=2), encoding="utf-8")
    return output


def load_site_content(path: Union[Path, str]) -> SiteContent:
    """Read a site-content.json written by :func:`render_json`."""
    return SiteContent.model_validate_json(Path(path).read_text(encoding="utf-8"))


def load_page(path: Union[Path, str]) -> PageRecord:
    return PageRecord.model_validate_json(Path(path).read_text(encoding="utf-8"))


def load_assets_index(path: Union[Path, str]) -> List[AssetRecord]:
    return _ASSET_LIST.validate_json(Path(path).read_bytes())


def dump_text(text: str, output_path: Union[Path, str]) -> Path:
    """Plain text writer used for the digest and the Markdown report."""
    output = _prepare(output_path)
    output.write_text(text, encoding="utf-8")
    return output


__all__ = [
    "dump_text",
    "load_assets_index",
    "load_page",
    "load_site_content",
    "page_json_path",
    "render_assets_index",
    "render_json",
    "render_page_json",
]
