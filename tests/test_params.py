"""Tests for per-URL request parameter resolution."""

from __future__ import annotations

import asyncio

from page_fetch.fetch.params import NullParamsProvider, SiteParamsProvider, resolve_wait


class _StaticProvider:
    def __init__(self, params):
        self.params = params

    async def resolve(self, url):
        return self.params


def test_site_params_match_host_without_www():
    provider = SiteParamsProvider({"www.Example.com": {"wait": 1000}})

    assert asyncio.run(provider.resolve("https://example.com/a")) == {"wait": 1000}
    assert asyncio.run(provider.resolve("http://WWW.example.com/b?c=1")) == {"wait": 1000}


def test_site_params_unknown_host_is_empty():
    provider = SiteParamsProvider({"example.com": {"wait": 1000}})

    assert asyncio.run(provider.resolve("https://other.org/")) == {}
    assert asyncio.run(provider.resolve("not a url")) == {}


def test_resolve_wait_without_provider_uses_fallback():
    assert asyncio.run(resolve_wait(None, "https://example.com", 300)) == 300
    assert asyncio.run(resolve_wait(NullParamsProvider(), "https://example.com", 300)) == 300


def test_resolve_wait_prefers_provider_value():
    provider = _StaticProvider({"wait": 5000})

    assert asyncio.run(resolve_wait(provider, "https://example.com", 300)) == 5000


def test_resolve_wait_accepts_zero_override():
    provider = _StaticProvider({"wait": 0})

    assert asyncio.run(resolve_wait(provider, "https://example.com", 300)) == 0


def test_resolve_wait_ignores_unusable_values():
    for params in ({"wait": None}, {"wait": "soon"}, {"wait": True}, {"other": 1}, None):
        provider = _StaticProvider(params)
        assert asyncio.run(resolve_wait(provider, "https://example.com", 300)) == 300


def test_resolve_wait_ignores_non_mapping_params():
    for params in (["wait", 100], "wait=100", 42):
        provider = _StaticProvider(params)
        assert asyncio.run(resolve_wait(provider, "https://example.com", 300)) == 300


def test_resolve_wait_ignores_infinite_wait():
    for wait in (float("inf"), float("-inf"), float("nan")):
        provider = _StaticProvider({"wait": wait})
        assert asyncio.run(resolve_wait(provider, "https://example.com", 300)) == 300
