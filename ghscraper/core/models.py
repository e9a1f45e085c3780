"""Domain records produced by a scrape."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

UNKNOWN_LANGUAGE = "Unknown"


def _without_unset(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


@dataclass(slots=True)
class Profile:
    username: str
    name: str = ""
    bio: str = ""
    followers: int = 0
    following: int = 0
    public_repos: int = 0
    profile_url: str = ""
    bio_translated: str | None = None
    bio_source_lang: str | None = None
    bio_translation_meta: dict[str, str] | None = None
    bio_translation_error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _without_unset(asdict(self))


@dataclass(slots=True)
class RepositoryRecord:
    name: str
    description: str = ""
    stars: int = 0
    forks: int = 0
    language: str = UNKNOWN_LANGUAGE
    updated_at: str = ""
    description_translated: str | None = None
    description_source_lang: str | None = None
    description_translation_meta: dict[str, str] | None = None
    description_translation_error: str | None = None
    name_translated: str | None = None
    name_source_lang: str | None = None
    name_translation_meta: dict[str, str] | None = None
    name_translation_error: str | None = None
    translation_internal_error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _without_unset(asdict(self))


@dataclass(frozen=True, slots=True)
class LanguageCount:
    language: str
    repos: int


@dataclass(frozen=True, slots=True)
class Stats:
    total_repositories: int
    total_stars: int
    total_forks: int
    top_languages: tuple[LanguageCount, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_repositories": self.total_repositories,
            "total_stars": self.total_stars,
            "total_forks": self.total_forks,
            "top_languages": [asdict(item) for item in self.top_languages],
        }


@dataclass(slots=True)
class ScrapeResult:
    """Combined output of one scrape; owned by the caller, never shared."""

    profile: Profile
    repos: list[RepositoryRecord]
    stats: Stats
    translation_note: dict[str, Any] | None = None
    translation_error: str | None = None
    translation_profile_error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "profile": self.profile.to_dict(),
            "repos": [repo.to_dict() for repo in self.repos],
            "stats": self.stats.to_dict(),
        }
        payload.update(
            _without_unset(
                {
                    "translation_note": self.translation_note,
                    "translation_error": self.translation_error,
                    "translation_profile_error": self.translation_profile_error,
                }
            )
        )
        return payload
