# File: tests/conftest.py
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from site_fetcher.config import FetchConfig
from site_fetcher.crawler.models import FetchedResource, FetchRequest
from site_fetcher.models import Heading, ImageRef, PageRecord

HOME_PARAGRAPH = "Welcome to our small example site, enjoy the stay."  # 50 chars

HOME_HTML = f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><meta name="description" content="Example home page"></head>
<body>
  <h1>Home</h1>
  <p>{HOME_PARAGRAPH}</p>
  <a href="/about">About</a>
</body>
</html>
"""

ABOUT_HTML = """<!DOCTYPE html>
<html>
<head><title>About us</title></head>
<body>
  <p>Short text.</p>
  <a href="/">Back</a>
</body>
</html>
"""


class FakeFetchEngine:
    """In-memory FetchEngine: writes the given files into the request directory."""

    def __init__(self, files: Dict[str, str]) -> None:
        self.files = files
        self.requests: List[FetchRequest] = []

    async def fetch(self, request: FetchRequest) -> List[FetchedResource]:
        self.requests.append(request)
        resources: List[FetchedResource] = []
        for relative, body in self.files.items():
            target = Path(request.directory) / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(body, encoding="utf-8")
            resources.append(FetchedResource(url=relative, local_path=relative, size=len(body)))
        return resources


class FailingFetchEngine:
    """FetchEngine whose network phase always fails."""

    def __init__(self, message: str = "connection refused") -> None:
        self.message = message

    async def fetch(self, request: FetchRequest) -> List[FetchedResource]:
        raise ConnectionError(self.message)


@pytest.fixture()
def two_page_site() -> Dict[str, str]:
    """Home page linking to /about, plus one stylesheet."""
    return {
        "example.com/index.html": HOME_HTML,
        "example.com/about.html": ABOUT_HTML,
        "example.com/css/site.css": "body { color: black; }",
    }


@pytest.fixture()
def make_config(tmp_path):
    """Factory for a FetchConfig writing into tmp_path/out."""

    def _make(url: str = "https://example.com", **overrides) -> FetchConfig:
        return FetchConfig(url=url, output_dir=tmp_path / "out", **overrides)

    return _make


def make_page(
    path: str = "/",
    title: str = "Page",
    description: Optional[str] = None,
    headings: Optional[List[Heading]] = None,
    paragraphs: Optional[List[str]] = None,
    images: Optional[List[ImageRef]] = None,
    origin: str = "https://example.com",
) -> PageRecord:
    """Build a PageRecord directly, without parsing HTML."""
    return PageRecord(
        url=origin + path,
        path=path,
        title=title,
        description=description,
        headings=headings or [],
        paragraphs=paragraphs or [],
        images=images or [],
    )


@pytest.fixture()
def page_factory():
    return make_page
