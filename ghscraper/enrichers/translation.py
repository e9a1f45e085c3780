"""Optional translation enrichment for scraped profiles and repositories.

The translation backend is an opaque, optional capability. It is resolved
lazily, at most once per resolver, and its absence is an expected condition:
enrichment is then skipped with a note unless the caller asked for strict mode.
Individual translation failures are recorded next to the field they concern and
never abort the rest of the pass.
"""

from __future__ import annotations

import asyncio
import importlib
import inspect
import logging
import os
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from threading import Lock
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ghscraper.core.errors import TranslationItemError, TranslatorMissingError
from ghscraper.core.models import ScrapeResult

LOGGER = logging.getLogger(__name__)

TRANSLATOR_ENV = "GHSCRAPER_TRANSLATOR"
BIO_TIMEOUT_MS = 5_000
DESCRIPTION_TIMEOUT_MS = 5_000
NAME_TIMEOUT_MS = 3_000
DEFAULT_FIELDS = ("bio", "repo_descriptions")
FIELD_ALIASES = {"all_repos": ("repo_descriptions", "repo_names")}
MISSING_TRANSLATOR_MESSAGE = (
    "Optional translator is not available. Set GHSCRAPER_TRANSLATOR=module:attribute "
    "or OPENAI_API_KEY to enable translations."
)

Translator = Callable[..., Awaitable[Any]]
SleepFn = Callable[[float], Awaitable[None]]


class TranslationResult(BaseModel):
    """Normalised payload returned by a translation backend."""

    model_config = ConfigDict(populate_by_name=True)

    translated_text: str = Field(alias="translatedText")
    source_lang: str = Field(default="", alias="sourceLang")
    target_lang: str = Field(default="", alias="targetLang")
    service_status: Literal["ok", "error"] = Field(default="ok", alias="serviceStatus")
    raw: Any = None

    @classmethod
    def from_payload(cls, payload: Any, target_lang: str) -> TranslationResult:
        if isinstance(payload, TranslationResult):
            return payload
        if not isinstance(payload, dict):
            raise TranslationItemError("Translation service returned unexpected payload")
        cleaned = {key: value for key, value in payload.items() if value is not None}
        try:
            result = cls.model_validate(cleaned)
        except ValidationError as exc:
            raise TranslationItemError(
                "Translation service returned unexpected payload"
            ) from exc
        if not result.target_lang:
            result.target_lang = target_lang
        if result.raw is None:
            result.raw = payload
        return result


class CallableTranslator:
    """Adapts a sync or async `translate(text, target_lang, timeout_ms=...)` callable."""

    def __init__(self, fn: Callable[..., Any]) -> None:
        self._fn = fn
        self._is_async = inspect.iscoroutinefunction(fn) or inspect.iscoroutinefunction(
            getattr(fn, "__call__", None)
        )

    async def __call__(
        self, text: str, target_lang: str, *, timeout_ms: int | None = None
    ) -> TranslationResult:
        if self._is_async:
            payload = await self._fn(text, target_lang, timeout_ms=timeout_ms)
        else:
            payload = await asyncio.to_thread(self._fn, text, target_lang, timeout_ms=timeout_ms)
        return TranslationResult.from_payload(payload, target_lang)


def _load_from_import_path(spec: str) -> Translator | None:
    module_name, _, attr = spec.partition(":")
    module = importlib.import_module(module_name.strip())
    impl: Any = getattr(module, attr.strip()) if attr.strip() else module
    translate = getattr(impl, "translate", None)
    if callable(translate):
        return CallableTranslator(translate)
    if callable(impl):
        return CallableTranslator(impl)
    LOGGER.warning("%s=%s does not name a translate callable", TRANSLATOR_ENV, spec)
    return None


def load_default_translator() -> Translator | None:
    """Locate a translation backend; returns None when none is usable."""
    spec = os.getenv(TRANSLATOR_ENV, "").strip()
    if spec:
        try:
            translator = _load_from_import_path(spec)
        except (ImportError, AttributeError) as exc:
            LOGGER.warning("Could not load translator %s: %s", spec, exc)
        else:
            if translator is not None:
                return translator

    if os.getenv("OPENAI_API_KEY"):
        try:
            from ghscraper.enrichers.openai_translator import OpenAITranslator
        except ImportError as exc:
            LOGGER.warning("OpenAI translator unavailable: %s", exc)
            return None
        return OpenAITranslator()

    LOGGER.debug("No translation backend configured")
    return None


class TranslatorResolver:
    """Resolves the translation backend once and memoises the outcome."""

    def __init__(self, loader: Callable[[], Translator | None] = load_default_translator) -> None:
        self._loader = loader
        self._translator: Translator | None = None
        self._resolved = False
        self._lock = Lock()

    def resolve(self) -> Translator | None:
        if self._resolved:
            return self._translator
        with self._lock:
            if not self._resolved:
                self._translator = self._loader()
                self._resolved = True
        return self._translator


default_resolver = TranslatorResolver()


@dataclass(frozen=True, slots=True)
class TranslateOptions:
    lang: str | None
    fields: tuple[str, ...] = DEFAULT_FIELDS
    per_item_delay_ms: int = 120
    fail_on_missing: bool = False

    def expanded_fields(self) -> set[str]:
        expanded: set[str] = set()
        for name in self.fields:
            expanded.update(FIELD_ALIASES.get(name, (name,)))
        return expanded

    @classmethod
    def from_csv(
        cls, lang: str | None, fields: str | None = None, **kwargs: Any
    ) -> TranslateOptions:
        parsed: Iterable[str] = DEFAULT_FIELDS
        if fields:
            parsed = [item.strip() for item in fields.split(",") if item.strip()]
        return cls(lang=lang, fields=tuple(parsed), **kwargs)


def describe_error(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


class TranslationEnricher:
    """Adds translated copies of selected text fields to a ScrapeResult in place."""

    def __init__(
        self,
        resolver: TranslatorResolver | None = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self.resolver = resolver or default_resolver
        self._sleep = sleep

    async def enrich(self, result: ScrapeResult, options: TranslateOptions | None) -> ScrapeResult:
        if options is None or not options.lang:
            return result
        fields = options.expanded_fields()

        translator = self.resolver.resolve()
        if translator is None:
            if options.fail_on_missing:
                raise TranslatorMissingError(MISSING_TRANSLATOR_MESSAGE)
            LOGGER.info("Skipping translation: %s", MISSING_TRANSLATOR_MESSAGE)
            result.translation_note = {"skipped": True, "reason": MISSING_TRANSLATOR_MESSAGE}
            return result

        try:
            if "bio" in fields and result.profile.bio:
                await self._translate_into(
                    translator, result.profile, "bio", options.lang, BIO_TIMEOUT_MS
                )
        except Exception as exc:  # noqa: BLE001
            result.translation_profile_error = describe_error(exc)

        for repo in result.repos:
            try:
                if "repo_descriptions" in fields and repo.description:
                    await self._translate_into(
                        translator, repo, "description", options.lang, DESCRIPTION_TIMEOUT_MS
                    )
                if "repo_names" in fields and repo.name:
                    await self._translate_into(
                        translator, repo, "name", options.lang, NAME_TIMEOUT_MS
                    )
            except Exception as exc:  # noqa: BLE001
                repo.translation_internal_error = describe_error(exc)
            await self._sleep(options.per_item_delay_ms / 1000)

        return result

    async def _translate_into(
        self,
        translator: Translator,
        record: Any,
        field_name: str,
        lang: str,
        timeout_ms: int,
    ) -> None:
        text = getattr(record, field_name)
        try:
            payload = await asyncio.wait_for(
                translator(text, lang, timeout_ms=timeout_ms), timeout=timeout_ms / 1000
            )
            outcome = TranslationResult.from_payload(payload, lang)
        except Exception as exc:  # noqa: BLE001
            message = describe_error(exc)
            LOGGER.warning("Translation of %s failed: %s", field_name, message)
            setattr(record, f"{field_name}_translation_error", message)
            return

        setattr(record, f"{field_name}_translated", outcome.translated_text)
        setattr(record, f"{field_name}_source_lang", outcome.source_lang or None)
        setattr(record, f"{field_name}_translation_meta", {"service_status": outcome.service_status})


async def translate_text(
    text: str,
    target_lang: str,
    timeout_ms: int = BIO_TIMEOUT_MS,
    resolver: TranslatorResolver | None = None,
) -> TranslationResult:
    """Translate one string with the resolved backend."""
    translator = (resolver or default_resolver).resolve()
    if translator is None:
        raise TranslatorMissingError(MISSING_TRANSLATOR_MESSAGE)
    payload = await translator(text, target_lang, timeout_ms=timeout_ms)
    return TranslationResult.from_payload(payload, target_lang)
