"""Scraper configuration with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any

from dotenv import load_dotenv

ENV_PREFIX = "GHSCRAPER_"
DEFAULT_BASE_URL = "https://github.com"
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; ghscraper/1.0; +https://github.com/)"


@dataclass(frozen=True, slots=True)
class ScraperConfig:
    base_url: str = DEFAULT_BASE_URL
    request_timeout_ms: int = 15_000
    max_retry: int = 3
    scrape_delay_ms: int = 400
    user_agent: str = DEFAULT_USER_AGENT
    per_page: int = 30

    def __post_init__(self) -> None:
        if self.max_retry < 1:
            raise ValueError("max_retry must be >= 1")
        if self.request_timeout_ms <= 0:
            raise ValueError("request_timeout_ms must be > 0")
        if self.scrape_delay_ms < 0:
            raise ValueError("scrape_delay_ms must be >= 0")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def request_timeout_seconds(self) -> float:
        return self.request_timeout_ms / 1000

    @property
    def scrape_delay_seconds(self) -> float:
        return self.scrape_delay_ms / 1000

    @classmethod
    def from_env(cls, **overrides: Any) -> ScraperConfig:
        """Build a config from GHSCRAPER_* variables (and .env); keyword overrides win."""
        load_dotenv()
        values: dict[str, Any] = {}
        for item in fields(cls):
            raw = os.getenv(f"{ENV_PREFIX}{item.name.upper()}")
            if raw is None or not raw.strip():
                continue
            values[item.name] = int(raw) if item.type == "int" else raw.strip()
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
