"""
Page Fetch - unified content fetching for text extraction pipelines.

This package retrieves a URL's body either with a direct HTTP GET or
through a browser-automation microservice, and rejects PDF/binary
payloads before they reach text extraction. Both backends return the
same FetchResult.

Main entry point for scripts is the CLI via the `page-fetch` command.

Example:
    $ page-fetch https://example.com --backend playwright --wait-for 2000
"""

__all__ = [
    "__version__",
    "FetchResult",
    "ContentFetcher",
    "create_fetcher",
    "fetch_direct",
    "fetch_via_browser",
    "is_binary_content",
]
__version__ = "0.1.0"

from .fetch import ContentFetcher, create_fetcher, fetch_direct, fetch_via_browser, is_binary_content
from .types import FetchResult
