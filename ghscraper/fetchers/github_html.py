"""Pure parsers for GitHub profile and repository-listing HTML.

Every field is read through an ordered chain of extractors. An extractor takes
the node to search under and returns the field text or ``None``; the first
non-empty value wins. When GitHub changes its markup, add a new extractor to
the front of the relevant chain.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from bs4 import BeautifulSoup, Tag

from ghscraper.core.errors import NotFoundError
from ghscraper.core.models import UNKNOWN_LANGUAGE, Profile, RepositoryRecord
from ghscraper.core.numbers import parse_count

Extractor = Callable[[Tag], str | None]

HTML_PARSER = "html.parser"
NOT_FOUND_MARKER = "Not Found"


def clean_text(value: str) -> str:
    return " ".join(value.split())


def select_text(selector: str) -> Extractor:
    """Extractor returning the text of the first node matching `selector`."""

    def _extract(node: Tag) -> str | None:
        found = node.select_one(selector)
        if found is None:
            return None
        return clean_text(found.get_text(" "))

    return _extract


def select_attr(selector: str, attribute: str) -> Extractor:
    def _extract(node: Tag) -> str | None:
        found = node.select_one(selector)
        if found is None:
            return None
        value = found.get(attribute)
        if isinstance(value, list):
            value = " ".join(value)
        return value.strip() if value else None

    return _extract


def first_match(node: Tag, chain: Sequence[Extractor], default: str = "") -> str:
    for extractor in chain:
        value = extractor(node)
        if value:
            return value
    return default


PROFILE_NAME_CHAIN: tuple[Extractor, ...] = (
    select_text('h1[class*="vcard-names"] .p-name'),
    select_text(".p-name.vcard-fullname"),
)
PROFILE_BIO_CHAIN: tuple[Extractor, ...] = (
    select_text('div[class*="p-note"]'),
    select_text('div[itemprop="description"]'),
)
FOLLOWERS_CHAIN: tuple[Extractor, ...] = (
    select_text('a[href$="?tab=followers"] .text-bold'),
    select_text('a[href$="?tab=followers"]'),
)
FOLLOWING_CHAIN: tuple[Extractor, ...] = (
    select_text('a[href$="?tab=following"] .text-bold'),
    select_text('a[href$="?tab=following"]'),
)
PUBLIC_REPOS_CHAIN: tuple[Extractor, ...] = (
    select_text('a[href$="?tab=repositories"] .Counter'),
    select_text('a[href$="?tab=repositories"]'),
)

REPO_ITEM_SELECTORS = ('li[itemprop="owns"]', "#user-repositories-list li")
REPO_NAME_CHAIN: tuple[Extractor, ...] = (
    select_text('a[itemprop="name codeRepository"]'),
    select_text("h3 a"),
)
REPO_STARS_CHAIN: tuple[Extractor, ...] = (
    select_text('a[href$="/stargazers"]'),
    select_text('svg[aria-label="star"] + span'),
)
REPO_FORKS_CHAIN: tuple[Extractor, ...] = (
    select_text('a[href$="/network/members"]'),
    select_text('a[href$="/forks"]'),
    select_text('svg[aria-label="fork"] + span'),
)
REPO_LANGUAGE_CHAIN: tuple[Extractor, ...] = (
    select_text('[itemprop="programmingLanguage"]'),
    select_text(".repo-language-color + span"),
)
REPO_DESCRIPTION_CHAIN: tuple[Extractor, ...] = (
    select_text('p[itemprop="description"]'),
    select_text("p.col-9"),
)
REPO_UPDATED_CHAIN: tuple[Extractor, ...] = (select_attr("relative-time", "datetime"),)


def is_not_found_page(soup: BeautifulSoup) -> bool:
    title = soup.title.get_text() if soup.title else ""
    return NOT_FOUND_MARKER in title


def parse_profile_page(username: str, html: str, base_url: str) -> Profile:
    """Parse a profile page; raises NotFoundError before reading any field."""
    soup = BeautifulSoup(html, HTML_PARSER)
    if is_not_found_page(soup):
        raise NotFoundError(username)

    return Profile(
        username=username,
        name=first_match(soup, PROFILE_NAME_CHAIN),
        bio=first_match(soup, PROFILE_BIO_CHAIN),
        followers=parse_count(first_match(soup, FOLLOWERS_CHAIN)),
        following=parse_count(first_match(soup, FOLLOWING_CHAIN)),
        public_repos=parse_count(first_match(soup, PUBLIC_REPOS_CHAIN)),
        profile_url=f"{base_url.rstrip('/')}/{username}",
    )


def find_repo_items(soup: BeautifulSoup) -> list[Tag]:
    for selector in REPO_ITEM_SELECTORS:
        items = soup.select(selector)
        if items:
            return items
    return []


def parse_repo_item(item: Tag) -> RepositoryRecord:
    return RepositoryRecord(
        name=first_match(item, REPO_NAME_CHAIN),
        description=first_match(item, REPO_DESCRIPTION_CHAIN),
        stars=parse_count(first_match(item, REPO_STARS_CHAIN)),
        forks=parse_count(first_match(item, REPO_FORKS_CHAIN)),
        language=first_match(item, REPO_LANGUAGE_CHAIN, default=UNKNOWN_LANGUAGE),
        updated_at=first_match(item, REPO_UPDATED_CHAIN),
    )


def parse_repo_listing(html: str) -> list[RepositoryRecord]:
    """Parse one listing page in site order; an empty list means no entries."""
    soup = BeautifulSoup(html, HTML_PARSER)
    return [parse_repo_item(item) for item in find_repo_items(soup)]
