"""GitHub profile scraper: profile page, paginated repository listing, stats, translation."""

from __future__ import annotations

import asyncio
import logging
import re

import httpx

from ghscraper.core.config import ScraperConfig
from ghscraper.core.errors import FetchError, InvalidUsernameError, NotFoundError
from ghscraper.core.models import Profile, RepositoryRecord, ScrapeResult, Stats
from ghscraper.core.stats import calculate_stats
from ghscraper.enrichers.translation import (
    TranslateOptions,
    TranslationEnricher,
    describe_error,
)
from ghscraper.fetchers.github_html import parse_profile_page, parse_repo_listing
from ghscraper.fetchers.http_fetcher import HttpFetcher, SleepFn

LOGGER = logging.getLogger(__name__)

USERNAME_RE = re.compile(r"^[A-Za-z0-9-]{1,39}$")


def validate_username(username: str) -> bool:
    return isinstance(username, str) and USERNAME_RE.fullmatch(username) is not None


def _require_valid_username(username: str) -> None:
    if not validate_username(username):
        raise InvalidUsernameError(username)


class GithubScraper:
    """Sequential scraper for one GitHub account at a time.

    Each call builds fresh result objects; the only state kept between calls is
    the HTTP client and the translation resolver, neither of which holds
    per-scrape data.
    """

    def __init__(
        self,
        config: ScraperConfig | None = None,
        client: httpx.AsyncClient | None = None,
        fetcher: HttpFetcher | None = None,
        enricher: TranslationEnricher | None = None,
        sleep: SleepFn = asyncio.sleep,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or ScraperConfig()
        self.fetcher = fetcher or HttpFetcher(
            self.config, client=client, sleep=sleep, transport=transport
        )
        self.enricher = enricher or TranslationEnricher(sleep=sleep)
        self._sleep = sleep

    def profile_url(self, username: str) -> str:
        return f"{self.config.base_url}/{username}"

    def listing_url(self, username: str, page: int) -> str:
        return f"{self.config.base_url}/{username}?page={page}&tab=repositories"

    async def scrape_profile(self, username: str) -> Profile:
        _require_valid_username(username)
        url = self.profile_url(username)
        try:
            html = await self.fetcher.fetch(url)
        except FetchError as exc:
            if exc.status_code == 404:
                raise NotFoundError(username) from exc
            raise
        profile = parse_profile_page(username, html, self.config.base_url)
        LOGGER.info(
            "Profile %s: %d followers, %d public repos",
            username,
            profile.followers,
            profile.public_repos,
        )
        return profile

    async def scrape_repos(self, username: str) -> list[RepositoryRecord]:
        """Walk listing pages until one yields no entries.

        An empty page is the only stop condition, so a page whose markup no
        longer matches any selector ends the walk early.
        """
        _require_valid_username(username)
        repos: list[RepositoryRecord] = []
        page = 1
        while True:
            html = await self.fetcher.fetch(self.listing_url(username, page))
            items = parse_repo_listing(html)
            if not items:
                LOGGER.info(
                    "Listing for %s ended at page %d with %d repositories",
                    username,
                    page,
                    len(repos),
                )
                return repos
            LOGGER.info(
                "Listing page %d for %s: %d/%d entries",
                page,
                username,
                len(items),
                self.config.per_page,
            )
            repos.extend(items)
            await self._sleep(self.config.scrape_delay_seconds)
            page += 1

    def calculate_stats(self, repos: list[RepositoryRecord]) -> Stats:
        return calculate_stats(repos)

    async def apply_translations(
        self, result: ScrapeResult, options: TranslateOptions | None
    ) -> ScrapeResult:
        return await self.enricher.enrich(result, options)

    async def scrape_user(
        self, username: str, translate: TranslateOptions | None = None
    ) -> ScrapeResult:
        """Scrape profile, all repositories and stats, then optionally translate."""
        _require_valid_username(username)

        profile = await self.scrape_profile(username)
        repos = await self.scrape_repos(username)
        stats = self.calculate_stats(repos)
        result = ScrapeResult(profile=profile, repos=repos, stats=stats)

        if translate is not None and translate.lang:
            try:
                result = await self.apply_translations(result, translate)
            except Exception as exc:  # noqa: BLE001
                if translate.fail_on_missing:
                    raise
                LOGGER.warning("Translation pass failed for %s: %s", username, exc)
                result.translation_error = describe_error(exc)

        return result

    async def aclose(self) -> None:
        await self.fetcher.aclose()

    async def __aenter__(self) -> GithubScraper:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


async def scrape_user(
    username: str,
    translate: TranslateOptions | None = None,
    config: ScraperConfig | None = None,
) -> ScrapeResult:
    async with GithubScraper(config or ScraperConfig.from_env()) as scraper:
        return await scraper.scrape_user(username, translate=translate)


async def scrape_profile(username: str, config: ScraperConfig | None = None) -> Profile:
    async with GithubScraper(config or ScraperConfig.from_env()) as scraper:
        return await scraper.scrape_profile(username)


async def scrape_repos(
    username: str, config: ScraperConfig | None = None
) -> list[RepositoryRecord]:
    async with GithubScraper(config or ScraperConfig.from_env()) as scraper:
        return await scraper.scrape_repos(username)
