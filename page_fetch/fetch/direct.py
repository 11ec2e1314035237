"""
Direct HTTP fetching with httpx.

A single GET against the target URL; the body is kept as raw text and
checked for PDF/binary content before it is returned.
"""

from __future__ import annotations

import logging
from typing import Mapping

import httpx

from ..config import FetchConfig
from ..logging_utils import get_logger
from ..types import PDF_CONTENT_ERROR, TIMEOUT_ERROR, FetchResult
from .base import ContentFetcher, describe_error
from .classifier import is_binary_content
from .tracking import fetch_log_scope


BACKEND_NAME = "fetch"


async def fetch_direct(
    url: str,
    timeout_seconds: float,
    headers: Mapping[str, str] | None = None,
    user_agent: str | None = None,
    trust_env: bool = True,
    follow_redirects: bool = True,
    logger: logging.Logger | None = None,
    max_body_chars: int | None = None,
) -> FetchResult:
    """Fetch a URL with a single GET request.

    Any status other than 200 is a failure carrying the status and its
    reason phrase. A 200 body that looks like a PDF is rejected. Timeouts
    and other transport errors are reported without a status code.

    Args:
        url: The URL to fetch
        timeout_seconds: Request timeout in seconds
        headers: Extra request headers, applied over the User-Agent
        user_agent: User-Agent header string
        trust_env: Whether to respect system proxy settings from environment
        follow_redirects: Whether to follow redirects before checking status
        logger: Logger receiving debug messages and the fetch record
        max_body_chars: Truncation limit for the logged body snapshot

    Returns:
        FetchResult with the untouched body on success or page_error on failure
    """
    log = logger or get_logger("fetch")
    request_headers: dict[str, str] = {}
    if user_agent:
        request_headers["User-Agent"] = user_agent
    if headers:
        request_headers.update(headers)

    with fetch_log_scope(url, BACKEND_NAME, log, max_body_chars) as record:
        try:
            async with httpx.AsyncClient(
                timeout=timeout_seconds,
                headers=request_headers,
                follow_redirects=follow_redirects,
                trust_env=trust_env,
            ) as client:
                resp = await client.get(url)
        except httpx.TimeoutException:
            log.debug("Direct fetch timed out for %s", url)
            return record.record(FetchResult.failure(TIMEOUT_ERROR))
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log.debug("Direct fetch failed for %s: %s", url, exc)
            return record.record(FetchResult.failure(describe_error(exc)))

        if resp.status_code != 200:
            log.debug("Direct fetch for %s returned status %s", url, resp.status_code)
            reason = resp.reason_phrase or f"HTTP {resp.status_code}"
            return record.record(FetchResult.failure(reason, resp.status_code))

        text = resp.text
        if is_binary_content(text):
            log.debug("Detected PDF content for %s, skipping", url)
            return record.record(FetchResult.failure(PDF_CONTENT_ERROR, resp.status_code))

        return record.record(FetchResult(content=text, page_status_code=resp.status_code))


class DirectFetcher(ContentFetcher):
    """Backend performing a plain GET; ignores wait_for_ms."""

    name = BACKEND_NAME

    def __init__(
        self,
        cfg: FetchConfig | None = None,
        logger: logging.Logger | None = None,
        max_body_chars: int | None = None,
    ):
        self.cfg = cfg or FetchConfig()
        self.logger = logger
        self.max_body_chars = max_body_chars

    async def fetch(
        self,
        url: str,
        wait_for_ms: int | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> FetchResult:
        return await fetch_direct(
            url,
            timeout_seconds=self.cfg.timeout_seconds,
            headers=headers,
            user_agent=self.cfg.user_agent,
            trust_env=self.cfg.trust_env,
            follow_redirects=self.cfg.follow_redirects,
            logger=self.logger,
            max_body_chars=self.max_body_chars,
        )
