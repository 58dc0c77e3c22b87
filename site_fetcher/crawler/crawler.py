# === FILE: site_fetcher/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import time
from pathlib import Path
from typing import List, Optional, Set, Tuple
from urllib.parse import urldefrag

from aiohttp import ClientSession, ClientTimeout

from site_fetcher.crawler.fetcher import Fetcher
from site_fetcher.crawler.link_extractor import extract_references
from site_fetcher.crawler.models import FetchedResource, FetchRequest, FetchResponse
from site_fetcher.crawler.paths import local_path_for
from site_fetcher.logger import get_logger

__all__ = ("AsyncCrawler", "AiohttpFetchEngine")

_QueueItem = Tuple[str, int, bool]


class AsyncCrawler:
    """Asynchronous crawler mirroring a site into FetchRequest.directory."""

    def __init__(self, request: FetchRequest) -> None:
        self.request = request
        self.visited: Set[str] = set()
        self.written: Set[str] = set()
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None
        self.logger = get_logger("crawler")

    async def __aenter__(self) -> AsyncCrawler:
        timeout = ClientTimeout(total=self.request.timeout)
        headers = {"User-Agent": self.request.user_agent} if self.request.user_agent else None
        self.session = ClientSession(timeout=timeout, headers=headers, raise_for_status=False)
        self.fetcher = Fetcher(self.session, retry_times=self.request.retry_times)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> List[FetchedResource]:
        self.logger.info("Starting crawl: %s", self.request.url)
        start = time.monotonic()
        queue: asyncio.Queue[_QueueItem] = asyncio.Queue()
        root, _ = urldefrag(self.request.url)
        self.visited.add(root)
        await queue.put((root, 0, True))
        results: List[FetchedResource] = []
        workers = [
            asyncio.create_task(self._worker(queue, results))
            for _ in range(max(1, self.request.max_concurrency))
        ]
        await queue.join()
        for w in workers:
            w.cancel()
        await asyncio.gather(*workers, return_exceptions=True)
        duration = time.monotonic() - start
        self.logger.info("Crawl finished: %d resources in %.2f s", len(results), duration)
        return results

    async def _worker(self, queue: asyncio.Queue[_QueueItem], results: List[FetchedResource]) -> None:
        while True:
            url, depth, follow = await queue.get()
            try:
                await self._process(url, depth, follow, queue, results)
            except Exception as exc:
                self.logger.warning("Error processing %s: %s", url, exc)
            finally:
                queue.task_done()

    async def _process(
        self,
        url: str,
        depth: int,
        follow: bool,
        queue: asyncio.Queue[_QueueItem],
        results: List[FetchedResource],
    ) -> None:
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        response = await self.fetcher.fetch(url)
        if response is None:
            return

        local = local_path_for(url, response.is_html)
        if local in self.written:
            self.logger.debug("Already stored %s, skipping %s", local, url)
            return
        self.written.add(local)
        self._store(local, response.body)
        results.append(FetchedResource(url, local, response.content_type, len(response.body)))
        self.logger.debug("Saved %s -> %s", url, local)

        if follow and response.is_html:
            self._enqueue_references(response, depth, queue)

    def _store(self, local: str, body: bytes) -> None:
        target = Path(self.request.directory) / local
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(body)

    def _enqueue_references(self, response: FetchResponse, depth: int, queue: asyncio.Queue[_QueueItem]) -> None:
        req = self.request
        may_descend = req.recursive and depth < req.max_depth
        for ref in extract_references(response.text(), response.url, req.sources):
            if ref.url in self.visited or not req.url_filter(ref.url):
                continue
            if ref.is_link:
                if not may_descend:
                    continue
                item = (ref.url, depth + 1, True)
            else:
                # page assets are fetched at the page's depth and never followed
                item = (ref.url, depth, False)
            self.visited.add(ref.url)
            queue.put_nowait(item)


class AiohttpFetchEngine:
    """FetchEngine backed by :class:`AsyncCrawler`."""

    async def fetch(self, request: FetchRequest) -> List[FetchedResource]:
        Path(request.directory).mkdir(parents=True, exist_ok=True)
        async with AsyncCrawler(request) as crawler:
            return await crawler.crawl()
