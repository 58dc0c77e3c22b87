# site_fetcher/crawler/fetcher.py
"""
Fetcher module: one HTTP GET with retry/backoff on server errors.
"""
from __future__ import annotations

import asyncio
import random
from typing import Optional, Sequence

from aiohttp import ClientError, ClientSession

from site_fetcher.crawler.models import FetchResponse
from site_fetcher.logger import get_logger

RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)


class Fetcher:
    """Handles HTTP fetching with retries/backoff; the timeout lives on the session."""

    def __init__(
        self,
        session: ClientSession,
        retry_times: int = 2,
        retry_status: Sequence[int] = RETRY_STATUS,
        max_backoff: float = 60.0,
    ) -> None:
        self.session = session
        self.retry_times = retry_times
        self._retry_status = retry_status
        self._max_backoff = max_backoff
        self.logger = get_logger("fetcher")

    async def fetch(self, url: str) -> Optional[FetchResponse]:
        """
        Fetch ``url``.

        Returns FetchResponse for a 2xx answer, None for anything else
        (4xx, exhausted retries, timeout).
        """
        attempts = 0
        while True:
            try:
                async with self.session.get(url, raise_for_status=False) as resp:
                    if resp.status in self._retry_status:
                        raise ClientError(f"retryable status {resp.status}")
                    if not 200 <= resp.status < 300:
                        self.logger.debug("Skipping %s: HTTP %s", url, resp.status)
                        return None
                    body = await resp.read()
                    return FetchResponse(
                        url=str(resp.url),
                        status=resp.status,
                        content_type=resp.content_type.lower(),
                        body=body,
                        encoding=resp.charset,
                    )
            except asyncio.TimeoutError:
                # no retry on timeout
                self.logger.warning("Timeout fetching %s", url)
                return None
            except ClientError as exc:
                attempts += 1
                if attempts > self.retry_times:
                    self.logger.warning("Failed %s: %s", url, exc)
                    return None
                backoff = min(self._max_backoff, 2 ** (attempts - 1) * 0.1 + random.random() * 0.1)
                self.logger.debug("Retry %d/%d for %s after %.2f s", attempts, self.retry_times, url, backoff)
                await asyncio.sleep(backoff)


__all__ = ["Fetcher", "RETRY_STATUS"]
