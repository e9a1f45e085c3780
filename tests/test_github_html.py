from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from ghscraper.core.errors import NotFoundError
from ghscraper.fetchers.github_html import (
    first_match,
    parse_profile_page,
    parse_repo_listing,
    select_attr,
    select_text,
)

BASE_URL = "https://github.com"


def test_parse_profile_page_primary_selectors(load_fixture) -> None:
    profile = parse_profile_page("octocat", load_fixture("profile_octocat.html"), BASE_URL)

    assert profile.username == "octocat"
    assert profile.name == "The Octocat"
    assert profile.bio == "Halo dunia, saya suka kode"
    assert profile.followers == 1200
    assert profile.following == 9
    assert profile.public_repos == 8
    assert profile.profile_url == "https://github.com/octocat"


def test_parse_profile_page_fallback_selectors(load_fixture) -> None:
    profile = parse_profile_page("legacy-user", load_fixture("profile_legacy.html"), BASE_URL)

    assert profile.name == "Legacy User"
    assert profile.bio == "Old-style bio block"
    assert profile.followers == 3400
    assert profile.following == 12
    assert profile.public_repos == 1500000


def test_parse_profile_page_missing_fields_default() -> None:
    profile = parse_profile_page("ghost", "<html><title>ghost</title></html>", BASE_URL + "/")

    assert profile.name == ""
    assert profile.bio == ""
    assert profile.followers == 0
    assert profile.profile_url == "https://github.com/ghost"


def test_parse_profile_page_not_found_title(load_fixture) -> None:
    with pytest.raises(NotFoundError) as info:
        parse_profile_page("nobody", load_fixture("profile_not_found.html"), BASE_URL)
    assert info.value.code == "NOT_FOUND"


def test_parse_profile_page_lowercase_not_found_in_name() -> None:
    html = (
        "<html><head><title>nfound (not found fan) · GitHub</title></head>"
        '<body><span class="p-name vcard-fullname">not found fan</span></body></html>'
    )

    profile = parse_profile_page("nfound", html, BASE_URL)

    assert profile.name == "not found fan"
    assert profile.username == "nfound"


def test_parse_repo_listing_primary_selectors(load_fixture) -> None:
    repos = parse_repo_listing(load_fixture("repos_page_1.html"))

    assert [repo.name for repo in repos] == ["Hello-World", "dotfiles"]
    hello, dotfiles = repos
    assert hello.description == "Mi primer repositorio"
    assert hello.language == "JavaScript"
    assert hello.stars == 2600
    assert hello.forks == 1204
    assert hello.updated_at == "2024-03-01T10:20:30Z"

    assert dotfiles.description == ""
    assert dotfiles.language == "Unknown"
    assert dotfiles.stars == 15
    assert dotfiles.forks == 3
    assert dotfiles.updated_at == ""


def test_parse_repo_listing_container_fallback(load_fixture) -> None:
    repos = parse_repo_listing(load_fixture("repos_legacy.html"))

    assert len(repos) == 1
    repo = repos[0]
    assert repo.name == "tooling"
    assert repo.description == "Scripts for the build"
    assert repo.language == "Python"
    assert repo.stars == 42
    assert repo.forks == 7
    assert repo.updated_at == "2023-11-05T08:00:00Z"


def test_parse_repo_listing_empty_page(load_fixture) -> None:
    assert parse_repo_listing(load_fixture("repos_empty.html")) == []
    assert parse_repo_listing("") == []


def test_first_match_uses_chain_order() -> None:
    soup = BeautifulSoup(
        '<div><p class="b">second</p><p class="a">  </p><time datetime="2020"></time></div>',
        "html.parser",
    )
    chain = (select_text("p.a"), select_text("p.missing"), select_text("p.b"))
    assert first_match(soup, chain) == "second"
    assert first_match(soup, (select_text("span"),), default="none") == "none"
    assert first_match(soup, (select_attr("time", "datetime"),)) == "2020"
