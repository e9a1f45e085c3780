from collections.abc import AsyncIterator
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ghscraper.core.config import ScraperConfig
from ghscraper.core.errors import (
    FetchError,
    InvalidUsernameError,
    NotFoundError,
    TranslatorMissingError,
)
from ghscraper.enrichers.translation import TranslateOptions
from ghscraper.fetchers.github_profile_scraper import GithubScraper

router = APIRouter(tags=["profiles"])


class ScrapeResponse(BaseModel):
    profile: dict[str, Any]
    repos: list[dict[str, Any]] = Field(default_factory=list)
    stats: dict[str, Any]
    translation_note: dict[str, Any] | None = None
    translation_error: str | None = None
    translation_profile_error: str | None = None


async def get_scraper() -> AsyncIterator[GithubScraper]:
    async with GithubScraper(ScraperConfig.from_env()) as scraper:
        yield scraper


@router.get(
    "/profiles/{username}",
    response_model=ScrapeResponse,
    response_model_exclude_none=True,
)
async def get_profile(
    username: str,
    lang: str | None = None,
    translate_fields: str | None = None,
    strict: bool = False,
    scraper: GithubScraper = Depends(get_scraper),
) -> ScrapeResponse:
    translate = None
    if lang:
        translate = TranslateOptions.from_csv(lang, translate_fields, fail_on_missing=strict)

    try:
        result = await scraper.scrape_user(username, translate=translate)
    except InvalidUsernameError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except FetchError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except TranslatorMissingError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    return ScrapeResponse.model_validate(result.to_dict())
