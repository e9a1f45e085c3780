from __future__ import annotations

from ghscraper.core.models import LanguageCount, RepositoryRecord
from ghscraper.core.stats import calculate_stats


def _repos() -> list[RepositoryRecord]:
    return [
        RepositoryRecord(name="a", stars=10, forks=1, language="Go"),
        RepositoryRecord(name="b", stars=5, forks=0, language="Python"),
        RepositoryRecord(name="c", stars=0, forks=2, language="Unknown"),
        RepositoryRecord(name="d", stars=1, forks=1, language="Python"),
        RepositoryRecord(name="e", stars=4, forks=0, language="Rust"),
        RepositoryRecord(name="f", stars=0, forks=0, language="Go"),
    ]


def test_calculate_stats_totals_and_language_ranking() -> None:
    stats = calculate_stats(_repos())

    assert stats.total_repositories == 6
    assert stats.total_stars == 20
    assert stats.total_forks == 4
    assert stats.top_languages == (
        LanguageCount("Go", 2),
        LanguageCount("Python", 2),
        LanguageCount("Unknown", 1),
        LanguageCount("Rust", 1),
    )


def test_calculate_stats_is_idempotent_and_does_not_mutate_input() -> None:
    repos = _repos()
    snapshot = [repo.to_dict() for repo in repos]

    first = calculate_stats(repos)
    second = calculate_stats(repos)

    assert first == second
    assert [repo.to_dict() for repo in repos] == snapshot


def test_calculate_stats_empty_list() -> None:
    stats = calculate_stats([])
    assert stats.to_dict() == {
        "total_repositories": 0,
        "total_stars": 0,
        "total_forks": 0,
        "top_languages": [],
    }
