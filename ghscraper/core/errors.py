"""Error taxonomy shared by the fetchers, enrichers and outer surfaces."""

from __future__ import annotations


class ScraperError(Exception):
    """Base class for scraper failures; `code` is a stable machine-readable tag."""

    code = "SCRAPER_ERROR"


class InvalidUsernameError(ScraperError):
    code = "INVALID_USERNAME"

    def __init__(self, username: str) -> None:
        super().__init__(f"Invalid GitHub username format: {username!r}")
        self.username = username


class NotFoundError(ScraperError):
    code = "NOT_FOUND"

    def __init__(self, username: str) -> None:
        super().__init__(f"GitHub user not found: {username}")
        self.username = username


class FetchError(ScraperError):
    """Raised once every fetch attempt for `url` has failed."""

    code = "FETCH_FAILED"

    def __init__(self, url: str, cause: BaseException) -> None:
        super().__init__(f"Failed to fetch {url}: {cause}")
        self.url = url
        self.cause = cause

    @property
    def status_code(self) -> int | None:
        response = getattr(self.cause, "response", None)
        return getattr(response, "status_code", None)


class TranslatorMissingError(ScraperError):
    code = "TRANSLATOR_MISSING"


class TranslationItemError(ScraperError):
    """A single translation call failed; recorded next to the field, never fatal."""

    code = "TRANSLATION_FAILED"
