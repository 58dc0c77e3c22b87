# site_fetcher/crawler/models.py
"""
Data models for the fetch engine and the port the orchestrator talks to.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Protocol, Tuple


@dataclass(slots=True, frozen=True)
class ResourceSource:
    """Where to look for resource references: a CSS selector and the attribute holding the URL."""

    selector: str
    attr: str


@dataclass(slots=True, frozen=True)
class FetchRequest:
    """Everything a fetch engine needs for one run."""

    url: str
    directory: Path
    url_filter: Callable[[str], bool]
    sources: Tuple[ResourceSource, ...] = ()
    recursive: bool = True
    max_depth: int = 10
    max_concurrency: int = 5
    timeout: float = 30.0
    user_agent: str = ""
    retry_times: int = 2


@dataclass(slots=True)
class FetchedResource:
    """Descriptor of one resource written under FetchRequest.directory."""

    url: str
    local_path: str
    content_type: str = ""
    size: int = 0


@dataclass(slots=True)
class FetchResponse:
    """Body and headers of a successful HTTP response."""

    url: str
    status: int
    content_type: str
    body: bytes = field(repr=False)
    encoding: Optional[str] = None

    @property
    def is_html(self) -> bool:
        return self.content_type in ("text/html", "application/xhtml+xml")

    def text(self) -> str:
        try:
            return self.body.decode(self.encoding or "utf-8", errors="replace")
        except LookupError:
            # unknown charset label in Content-Type
            return self.body.decode("utf-8", errors="replace")


class FetchEngine(Protocol):
    """Port implemented by anything able to download a site into a directory."""

    async def fetch(self, request: FetchRequest) -> List[FetchedResource]:
        ...


__all__ = ("FetchEngine", "FetchRequest", "FetchResponse", "FetchedResource", "ResourceSource")
