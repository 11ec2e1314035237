"""
Page fetching backends.

This package holds the two interchangeable fetch backends, the content
classifier they share, and the factory that builds them from config.
"""

from .base import ContentFetcher
from .browser import BrowserFetcher, fetch_via_browser
from .classifier import is_binary_content
from .direct import DirectFetcher, fetch_direct
from .factory import available_fetchers, create_fetcher
from .params import NullParamsProvider, SiteParamsProvider

__all__ = [
    "ContentFetcher",
    "DirectFetcher",
    "BrowserFetcher",
    "fetch_direct",
    "fetch_via_browser",
    "is_binary_content",
    "available_fetchers",
    "create_fetcher",
    "NullParamsProvider",
    "SiteParamsProvider",
]
