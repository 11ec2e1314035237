"""Tests for the interchangeable fetcher factory."""

import pytest

from page_fetch.config import AppConfig, BrowserConfig, FetchConfig
from page_fetch.fetch.base import ContentFetcher
from page_fetch.fetch.browser import BrowserFetcher
from page_fetch.fetch.direct import DirectFetcher
from page_fetch.fetch.factory import available_fetchers, create_fetcher
from page_fetch.fetch.params import NullParamsProvider


def test_available_fetchers_contains_expected_backends():
    names = available_fetchers()
    assert "fetch" in names
    assert "playwright" in names
    assert "browser" in names


def test_create_fetcher_direct():
    cfg = AppConfig(fetch=FetchConfig(timeout_seconds=7))
    fetcher = create_fetcher("fetch", cfg)
    assert isinstance(fetcher, DirectFetcher)
    assert isinstance(fetcher, ContentFetcher)
    assert fetcher.cfg.timeout_seconds == 7
    assert fetcher.max_body_chars == cfg.logging.max_body_chars


def test_create_fetcher_browser_alias_is_case_insensitive():
    provider = NullParamsProvider()
    cfg = AppConfig(browser=BrowserConfig(microservice_url="http://svc/html"))
    fetcher = create_fetcher("  Browser ", cfg, params_provider=provider)
    assert isinstance(fetcher, BrowserFetcher)
    assert fetcher.params_provider is provider
    assert fetcher.name == "playwright"


def test_create_fetcher_rejects_unknown_backend():
    with pytest.raises(ValueError, match="Unsupported fetcher"):
        create_fetcher("selenium")
