#!/usr/bin/env python3
"""
Scrape a public GitHub profile and its repositories.

Usage:
  python scripts/scrape_github_user.py octocat
  python scripts/scrape_github_user.py octocat --json --output octocat.json
  python scripts/scrape_github_user.py octocat --lang en --translate-fields bio,all_repos
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from ghscraper.core.config import ScraperConfig  # noqa: E402
from ghscraper.core.errors import ScraperError  # noqa: E402
from ghscraper.core.models import ScrapeResult  # noqa: E402
from ghscraper.core.numbers import format_count  # noqa: E402
from ghscraper.enrichers.translation import TranslateOptions  # noqa: E402
from ghscraper.fetchers.github_profile_scraper import (  # noqa: E402
    GithubScraper,
    validate_username,
)

SAMPLE_REPO_COUNT = 10


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Scrape a GitHub profile and its repositories.")
    parser.add_argument("username", help="GitHub username to scrape.")
    parser.add_argument("-j", "--json", action="store_true", help="Print the raw JSON result.")
    parser.add_argument("-o", "--output", default=None, help="Write the JSON result to this file.")
    parser.add_argument(
        "-l",
        "--lang",
        default=None,
        help="Translate selected text fields to this language (e.g. en, id).",
    )
    parser.add_argument(
        "--translate-fields",
        default=None,
        help="Comma-separated fields to translate (bio,repo_descriptions,repo_names,all_repos).",
    )
    parser.add_argument(
        "--strict-translation",
        action="store_true",
        help="Fail when no translation backend is available.",
    )
    parser.add_argument("--base-url", default=None, help="Override the GitHub base URL.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level.",
    )
    return parser.parse_args(argv)


def render_summary(result: ScrapeResult) -> str:
    profile = result.profile
    stats = result.stats
    lines = [
        "",
        "========== GITHUB ACCOUNT ==========",
        "",
        f"Username  : {profile.username}",
        f"Name      : {profile.name or '-'}",
        f"Bio       : {profile.bio or '-'}",
    ]
    if profile.bio_translated:
        lines.append(f"Bio (translated): {profile.bio_translated}")
    lines += [
        f"Followers : {format_count(profile.followers)}",
        f"Following : {format_count(profile.following)}",
        f"Repos     : {format_count(profile.public_repos)}",
        f"Profile   : {profile.profile_url}",
        "",
        "------- Repository Statistics -------",
        "",
        f"Total Repository : {format_count(stats.total_repositories)}",
        f"Total Stars      : {format_count(stats.total_stars)}",
        f"Total Forks      : {format_count(stats.total_forks)}",
        "",
        "Top Languages:",
    ]
    lines += [f"• {item.language} ({item.repos})" for item in stats.top_languages]

    if result.repos:
        lines += ["", "Sample repositories:"]
        for repo in result.repos[:SAMPLE_REPO_COUNT]:
            line = (
                f"- {repo.name} ({repo.language}) ★{format_count(repo.stars)} "
                f"Forks:{format_count(repo.forks)}"
            )
            if repo.description_translated:
                line += f"\n    → {repo.description_translated}"
            lines.append(line)

    lines += ["", "===================================="]
    return "\n".join(lines)


def write_json(path: str, payload: dict) -> None:
    target = Path(path).resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


async def run(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    if not validate_username(args.username):
        print("Invalid GitHub username format.", file=sys.stderr)
        return 1

    translate = None
    if args.lang:
        translate = TranslateOptions.from_csv(
            args.lang, args.translate_fields, fail_on_missing=args.strict_translation
        )

    config = ScraperConfig.from_env(base_url=args.base_url)
    try:
        async with GithubScraper(config) as scraper:
            result = await scraper.scrape_user(args.username, translate=translate)
    except ScraperError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        cause = getattr(exc, "cause", None) or exc.__cause__
        if cause is not None:
            print(f"Cause: {cause}", file=sys.stderr)
        return 1

    payload = result.to_dict()
    if args.json and not args.output:
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    elif not args.json:
        print(render_summary(result))
    if args.output:
        write_json(args.output, payload)
        print(f"Written JSON to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(run()))
