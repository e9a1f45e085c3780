from __future__ import annotations

import asyncio

import httpx
import pytest

from ghscraper.core.config import ScraperConfig
from ghscraper.core.errors import FetchError
from ghscraper.fetchers.http_fetcher import HttpFetcher

URL = "https://github.com/octocat"


def _fetch(handler, sleep, config: ScraperConfig | None = None) -> str:
    async def _run() -> str:
        async with HttpFetcher(
            config or ScraperConfig(), sleep=sleep, transport=httpx.MockTransport(handler)
        ) as fetcher:
            return await fetcher.fetch(URL)

    return asyncio.run(_run())


def test_fetch_sends_headers_and_returns_body(recording_sleep) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="<html>ok</html>")

    config = ScraperConfig(user_agent="test-agent/1.0")
    assert _fetch(handler, recording_sleep, config) == "<html>ok</html>"
    assert len(seen) == 1
    assert seen[0].headers["User-Agent"] == "test-agent/1.0"
    assert seen[0].headers["Accept"] == "text/html"
    assert recording_sleep.calls == []


def test_fetch_retries_then_succeeds(recording_sleep) -> None:
    statuses = iter([500, 502, 200])

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(next(statuses), text="body")

    assert _fetch(handler, recording_sleep) == "body"
    assert recording_sleep.calls == [1.0, 2.0]


def test_fetch_gives_up_after_max_retry(recording_sleep) -> None:
    attempts: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(str(request.url))
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchError) as info:
        _fetch(handler, recording_sleep, ScraperConfig(max_retry=4))

    assert len(attempts) == 4
    assert recording_sleep.calls == [1.0, 2.0, 3.0]
    assert info.value.url == URL
    assert isinstance(info.value.cause, httpx.ConnectError)
    assert info.value.__cause__ is info.value.cause
    assert info.value.status_code is None


def test_fetch_error_exposes_http_status(recording_sleep) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="missing")

    with pytest.raises(FetchError) as info:
        _fetch(handler, recording_sleep, ScraperConfig(max_retry=1))

    assert info.value.status_code == 404
    assert recording_sleep.calls == []
