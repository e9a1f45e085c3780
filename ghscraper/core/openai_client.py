"""Shared OpenAI client for the translation backend."""

from __future__ import annotations

import os
from threading import Lock
from typing import Any

from dotenv import load_dotenv
from openai import OpenAI

from ghscraper.core.errors import TranslatorMissingError

API_KEY_ENV = "OPENAI_API_KEY"
BASE_URL_ENV = "GHSCRAPER_OPENAI_BASE_URL"
MAX_OUTPUT_TOKENS = 700

_client: OpenAI | None = None
_client_lock = Lock()


def _build_client() -> OpenAI:
    load_dotenv()
    api_key = os.getenv(API_KEY_ENV)
    if not api_key:
        raise TranslatorMissingError(
            f"OpenAI translation needs {API_KEY_ENV} in the environment or .env file."
        )
    return OpenAI(api_key=api_key, base_url=os.getenv(BASE_URL_ENV) or None)


def get_openai_client() -> OpenAI:
    """Return the process-wide client, building it on first use."""
    global _client
    with _client_lock:
        if _client is None:
            _client = _build_client()
        return _client


def create_response(
    model: str,
    input: list[dict[str, Any]],
    text_format: dict[str, Any],
    timeout: float | None = None,
) -> dict[str, Any]:
    client = get_openai_client()
    if timeout is not None:
        client = client.with_options(timeout=timeout)
    response = client.responses.create(
        model=model,
        input=input,
        text={"format": text_format},
        max_output_tokens=MAX_OUTPUT_TOKENS,
    )
    return response.model_dump()
