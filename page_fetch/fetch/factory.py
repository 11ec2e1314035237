"""Fetcher factory and registry for interchangeable fetch backends."""

from __future__ import annotations

import logging

from ..config import AppConfig
from .base import ContentFetcher
from .browser import BrowserFetcher
from .direct import DirectFetcher
from .params import ParamsProvider


_FETCHER_REGISTRY: dict[str, type[ContentFetcher]] = {
    "fetch": DirectFetcher,
    "direct": DirectFetcher,
    "httpx": DirectFetcher,
    "playwright": BrowserFetcher,
    "browser": BrowserFetcher,
}


def available_fetchers() -> list[str]:
    """Return the set of registered fetcher names."""
    return sorted(_FETCHER_REGISTRY.keys())


def create_fetcher(
    name: str,
    cfg: AppConfig | None = None,
    params_provider: ParamsProvider | None = None,
    logger: logging.Logger | None = None,
) -> ContentFetcher:
    """Build a fetcher instance from runtime config."""
    cfg = cfg or AppConfig()
    builder = _FETCHER_REGISTRY.get(name.lower().strip())
    if builder is None:
        supported = ", ".join(available_fetchers())
        raise ValueError(f"Unsupported fetcher: {name}. Supported: {supported}")
    max_body_chars = cfg.logging.max_body_chars
    if builder is BrowserFetcher:
        return BrowserFetcher(
            cfg.browser,
            params_provider=params_provider,
            logger=logger,
            max_body_chars=max_body_chars,
        )
    return builder(cfg.fetch, logger=logger, max_body_chars=max_body_chars)
