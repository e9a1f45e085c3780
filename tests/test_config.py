from __future__ import annotations

import pytest

from ghscraper.core.config import DEFAULT_BASE_URL, ScraperConfig


def test_defaults() -> None:
    config = ScraperConfig()
    assert config.base_url == DEFAULT_BASE_URL
    assert config.request_timeout_ms == 15000
    assert config.max_retry == 3
    assert config.scrape_delay_ms == 400
    assert config.per_page == 30
    assert config.request_timeout_seconds == 15.0
    assert config.scrape_delay_seconds == 0.4


def test_from_env_reads_prefixed_variables(monkeypatch) -> None:
    monkeypatch.setenv("GHSCRAPER_BASE_URL", "http://localhost:8080/")
    monkeypatch.setenv("GHSCRAPER_MAX_RETRY", "5")
    monkeypatch.setenv("GHSCRAPER_SCRAPE_DELAY_MS", "0")
    monkeypatch.setenv("GHSCRAPER_USER_AGENT", "  agent/2  ")
    monkeypatch.delenv("GHSCRAPER_REQUEST_TIMEOUT_MS", raising=False)

    config = ScraperConfig.from_env(max_retry=2, user_agent=None)

    assert config.base_url == "http://localhost:8080"
    assert config.max_retry == 2
    assert config.scrape_delay_ms == 0
    assert config.user_agent == "agent/2"
    assert config.request_timeout_ms == 15000


def test_invalid_values_are_rejected() -> None:
    with pytest.raises(ValueError):
        ScraperConfig(max_retry=0)
    with pytest.raises(ValueError):
        ScraperConfig(request_timeout_ms=0)
    with pytest.raises(ValueError):
        ScraperConfig(scrape_delay_ms=-1)
