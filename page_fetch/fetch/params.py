"""
Per-URL request parameters for the browser backend.

A params provider maps a URL to a dict of overrides, currently only
``wait`` (post-load wait in milliseconds) is consumed. Lookups may be
asynchronous and may fail; a failing provider never fails a fetch.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol
from urllib.parse import urlsplit


class ParamsProvider(Protocol):
    async def resolve(self, url: str) -> Mapping[str, Any]:
        ...


class NullParamsProvider:
    """Provider that never overrides anything."""

    async def resolve(self, url: str) -> Mapping[str, Any]:
        return {}


class SiteParamsProvider:
    """Static table of request parameters keyed by hostname.

    Hostnames are compared case-insensitively with a leading ``www.``
    stripped, so ``https://www.Example.com/a`` matches an ``example.com``
    entry.

    Attributes:
        site_params: Mapping of hostname to parameter dict
    """

    def __init__(self, site_params: Mapping[str, Mapping[str, Any]] | None = None):
        self.site_params = {
            _normalize_host(host): dict(params) for host, params in (site_params or {}).items()
        }

    async def resolve(self, url: str) -> Mapping[str, Any]:
        host = _normalize_host(urlsplit(url).hostname or "")
        return self.site_params.get(host, {})


async def resolve_wait(
    provider: ParamsProvider | None,
    url: str,
    fallback_ms: int,
    logger: logging.Logger | None = None,
) -> int:
    """Return the effective post-load wait for url.

    A ``wait`` value supplied by the provider takes precedence over
    fallback_ms. Missing providers, lookup errors and unusable values all
    fall back to fallback_ms.
    """
    if provider is None:
        return fallback_ms
    try:
        params = await provider.resolve(url)
    except Exception as exc:  # noqa: BLE001
        if logger is not None:
            logger.warning("Request params lookup failed for %s: %s", url, exc)
        return fallback_ms

    if params is not None and not isinstance(params, Mapping):
        if logger is not None:
            logger.warning("Ignoring non-mapping request params %r for %s", params, url)
        return fallback_ms

    wait = (params or {}).get("wait")
    if wait is None or isinstance(wait, bool):
        return fallback_ms
    try:
        return max(int(wait), 0)
    except (TypeError, ValueError, OverflowError):
        if logger is not None:
            logger.warning("Ignoring non-numeric wait %r for %s", wait, url)
        return fallback_ms


def _normalize_host(host: str) -> str:
    host = host.strip().lower()
    if host.startswith("www."):
        host = host[4:]
    return host
