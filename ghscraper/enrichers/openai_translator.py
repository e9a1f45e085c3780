"""Translation backend built on the OpenAI Responses API."""

from __future__ import annotations

import asyncio
import json
import os
from typing import Any

from ghscraper.core.errors import TranslationItemError
from ghscraper.core.openai_client import create_response
from ghscraper.enrichers.translation import TranslationResult

MODEL_ENV = "GHSCRAPER_TRANSLATION_MODEL"
DEFAULT_MODEL = "gpt-4o-mini"

TRANSLATION_JSON_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "translated_text": {"type": "string"},
        "source_lang": {"type": "string"},
    },
    "required": ["translated_text", "source_lang"],
    "additionalProperties": False,
}

TEXT_FORMAT: dict[str, Any] = {
    "type": "json_schema",
    "name": "translation_output",
    "strict": True,
    "schema": TRANSLATION_JSON_SCHEMA,
}

SYSTEM_INSTRUCTION = (
    "You are a translation service. Translate the user's text into the requested "
    "target language. Keep code identifiers, URLs and emoji unchanged. Report the "
    "detected source language as an ISO 639-1 code. Output only JSON matching the schema."
)


def _find_response_json(payload: dict[str, Any]) -> dict[str, Any]:
    output = payload.get("output")
    if isinstance(output, list):
        for item in output:
            if not isinstance(item, dict):
                continue
            content = item.get("content")
            if not isinstance(content, list):
                continue
            for entry in content:
                if not isinstance(entry, dict):
                    continue
                if entry.get("type") in {"output_text", "text"}:
                    text_value = entry.get("text")
                    if isinstance(text_value, str):
                        return json.loads(text_value)
    output_text = payload.get("output_text")
    if isinstance(output_text, str):
        return json.loads(output_text)
    raise TranslationItemError("OpenAI response did not contain parseable JSON output.")


class OpenAITranslator:
    def __init__(self, model: str | None = None) -> None:
        self.model = model or os.getenv(MODEL_ENV) or DEFAULT_MODEL

    def translate_sync(
        self, text: str, target_lang: str, timeout_ms: int | None = None
    ) -> TranslationResult:
        response_payload = create_response(
            model=self.model,
            input=[
                {"role": "system", "content": SYSTEM_INSTRUCTION},
                {
                    "role": "user",
                    "content": json.dumps({"target_lang": target_lang, "text": text}),
                },
            ],
            text_format=TEXT_FORMAT,
            timeout=timeout_ms / 1000 if timeout_ms else None,
        )
        parsed = _find_response_json(response_payload)
        return TranslationResult(
            translated_text=parsed["translated_text"],
            source_lang=parsed.get("source_lang", ""),
            target_lang=target_lang,
            service_status="ok",
            raw=response_payload,
        )

    async def __call__(
        self, text: str, target_lang: str, *, timeout_ms: int | None = None
    ) -> TranslationResult:
        return await asyncio.to_thread(self.translate_sync, text, target_lang, timeout_ms)
