"""
Abstract base class for fetch backends.

New backends should inherit from ContentFetcher and implement fetch,
returning a FetchResult on every expected failure instead of raising.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping

from ..types import FetchResult


class ContentFetcher(ABC):
    """Abstract base class for fetch backends.

    Concrete implementations (DirectFetcher, BrowserFetcher) share only
    the pure content classifier; each call is independent and safe to run
    concurrently with others.

    Attributes:
        name: Backend name reported in fetch log records
    """

    name: str = ""

    @abstractmethod
    async def fetch(
        self,
        url: str,
        wait_for_ms: int | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> FetchResult:
        """Fetch the body of url.

        Args:
            url: The URL to fetch
            wait_for_ms: Post-load wait for backends that render pages
            headers: Extra headers to send to the origin

        Returns:
            FetchResult with content on success or page_error on failure
        """
        raise NotImplementedError


def describe_error(exc: BaseException) -> str:
    """Human-readable description of a transport error."""
    message = str(exc).strip()
    return message or type(exc).__name__
