"""HTTP GET with a fixed timeout and linear-backoff retries."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx

from ghscraper.core.config import ScraperConfig
from ghscraper.core.errors import FetchError

LOGGER = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]
BACKOFF_STEP_SECONDS = 1.0


class HttpFetcher:
    """Sequential page fetcher; one request outstanding at a time per caller."""

    def __init__(
        self,
        config: ScraperConfig | None = None,
        client: httpx.AsyncClient | None = None,
        sleep: SleepFn = asyncio.sleep,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or ScraperConfig()
        self._sleep = sleep
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.request_timeout_seconds),
            follow_redirects=True,
            transport=transport,
        )
        self.headers = {"User-Agent": self.config.user_agent, "Accept": "text/html"}

    async def fetch(self, url: str) -> str:
        """Return the response body, retrying up to `max_retry` attempts in total."""
        attempt = 1
        while True:
            try:
                resp = await self._client.get(
                    url,
                    headers=self.headers,
                    timeout=self.config.request_timeout_seconds,
                )
                resp.raise_for_status()
                return resp.text
            except httpx.HTTPError as exc:
                if attempt >= self.config.max_retry:
                    LOGGER.error(
                        "Giving up on %s after %d attempts: %s", url, attempt, exc
                    )
                    raise FetchError(url, exc) from exc
                delay = BACKOFF_STEP_SECONDS * attempt
                LOGGER.warning(
                    "Fetch attempt %d/%d for %s failed: %s; retrying in %.0fs",
                    attempt,
                    self.config.max_retry,
                    url,
                    exc,
                    delay,
                )
                await self._sleep(delay)
                attempt += 1

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpFetcher:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
