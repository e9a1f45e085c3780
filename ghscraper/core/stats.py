"""Aggregate statistics over scraped repository records."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from ghscraper.core.models import UNKNOWN_LANGUAGE, LanguageCount, RepositoryRecord, Stats


def calculate_stats(repos: Iterable[RepositoryRecord]) -> Stats:
    """Sum stars/forks and rank languages by repository count.

    Languages with equal counts keep the order in which they were first seen.
    """
    total = 0
    total_stars = 0
    total_forks = 0
    language_counts: Counter[str] = Counter()
    for repo in repos:
        total += 1
        total_stars += repo.stars or 0
        total_forks += repo.forks or 0
        language_counts[repo.language or UNKNOWN_LANGUAGE] += 1

    ranked = sorted(language_counts.items(), key=lambda item: item[1], reverse=True)
    return Stats(
        total_repositories=total,
        total_stars=total_stars,
        total_forks=total_forks,
        top_languages=tuple(LanguageCount(language=lang, repos=count) for lang, count in ranked),
    )
