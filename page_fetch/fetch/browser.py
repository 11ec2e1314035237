"""
Page fetching through a browser-automation microservice.

The microservice renders the page in a headless browser and answers with
a JSON envelope ``{content, pageStatusCode, pageError}`` describing the
real outcome. The envelope is decoded here, not by the HTTP client.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import httpx

from ..config import BrowserConfig, get_microservice_url
from ..logging_utils import get_logger
from ..types import PDF_CONTENT_ERROR, TIMEOUT_ERROR, FetchResult
from .base import ContentFetcher, describe_error
from .classifier import is_binary_content
from .params import ParamsProvider, SiteParamsProvider, resolve_wait
from .tracking import fetch_log_scope


BACKEND_NAME = "playwright"
MISSING_ENDPOINT_ERROR = "Browser microservice URL is not configured"


async def fetch_via_browser(
    url: str,
    microservice_url: str | None,
    wait_for_ms: int = 0,
    headers: Mapping[str, str] | None = None,
    base_timeout_seconds: float = 30.0,
    params_provider: ParamsProvider | None = None,
    trust_env: bool = True,
    logger: logging.Logger | None = None,
    max_body_chars: int | None = None,
) -> FetchResult:
    """Fetch a URL by asking the browser microservice to render it.

    The effective post-load wait comes from params_provider when it has a
    ``wait`` for this URL, otherwise from wait_for_ms. The request timeout
    is base_timeout_seconds plus that wait, so slow pages are not cut off.

    Args:
        url: The URL to render
        microservice_url: Endpoint accepting render requests
        wait_for_ms: Post-load wait in milliseconds
        headers: Headers the browser should send to the origin
        base_timeout_seconds: Timeout before the wait is added
        params_provider: Source of per-URL overrides
        trust_env: Whether to respect system proxy settings from environment
        logger: Logger receiving debug messages and the fetch record
        max_body_chars: Truncation limit for the logged body snapshot

    Returns:
        FetchResult built from the microservice envelope, or a failure
    """
    log = logger or get_logger("browser")

    with fetch_log_scope(url, BACKEND_NAME, log, max_body_chars) as record:
        wait_ms = await resolve_wait(params_provider, url, wait_for_ms, log)

        if not microservice_url:
            log.debug("No browser microservice configured, cannot fetch %s", url)
            return record.record(FetchResult.failure(MISSING_ENDPOINT_ERROR))

        payload = {
            "url": url,
            "wait_after_load": wait_ms,
            "headers": dict(headers or {}),
        }
        timeout = base_timeout_seconds + wait_ms / 1000

        try:
            async with httpx.AsyncClient(timeout=timeout, trust_env=trust_env) as client:
                resp = await client.post(
                    microservice_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.TimeoutException:
            log.debug("Browser fetch timed out for %s", url)
            return record.record(FetchResult.failure(TIMEOUT_ERROR))
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log.debug("Browser fetch failed for %s: %s", url, exc)
            return record.record(FetchResult.failure(describe_error(exc)))

        if resp.status_code != 200:
            # The microservice may report a richer error inside a non-200 reply
            try:
                envelope = parse_envelope(resp.text)
            except ValueError:
                envelope = {}
            status = _optional_status(envelope.get("pageStatusCode"))
            error = _optional_text(envelope.get("pageError"))
            log.debug(
                "Browser fetch for %s failed with status %s, error: %s",
                url,
                resp.status_code,
                error,
            )
            return record.record(
                FetchResult.failure(
                    error or resp.reason_phrase or f"HTTP {resp.status_code}",
                    status if status is not None else resp.status_code,
                )
            )

        try:
            envelope = parse_envelope(resp.text)
        except ValueError as exc:
            log.debug("Error parsing microservice response for %s: %s", url, exc)
            return record.record(FetchResult.failure(describe_error(exc)))

        content = envelope.get("content")
        status = _optional_status(envelope.get("pageStatusCode"))
        if is_binary_content(content):
            log.debug("Detected PDF content for %s, skipping", url)
            return record.record(FetchResult.failure(PDF_CONTENT_ERROR, status))

        return record.record(
            FetchResult(
                content=content if isinstance(content, str) else "",
                page_status_code=status,
                page_error=_optional_text(envelope.get("pageError")),
            )
        )


def parse_envelope(text: str) -> dict[str, Any]:
    """Decode the microservice response body into a dict.

    Raises:
        ValueError: The body is not JSON or not a JSON object
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object from the microservice, got {type(data).__name__}")
    return data


def _optional_status(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return None


def _optional_text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return value if isinstance(value, str) else str(value)


class BrowserFetcher(ContentFetcher):
    """Backend delegating rendering to the browser-automation microservice.

    Attributes:
        cfg: Microservice settings
        params_provider: Source of per-URL wait overrides, built from
            cfg.site_params when not given
    """

    name = BACKEND_NAME

    def __init__(
        self,
        cfg: BrowserConfig | None = None,
        params_provider: ParamsProvider | None = None,
        logger: logging.Logger | None = None,
        max_body_chars: int | None = None,
    ):
        self.cfg = cfg or BrowserConfig()
        self.params_provider = params_provider or SiteParamsProvider(self.cfg.site_params)
        self.logger = logger
        self.max_body_chars = max_body_chars

    async def fetch(
        self,
        url: str,
        wait_for_ms: int | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> FetchResult:
        return await fetch_via_browser(
            url,
            microservice_url=get_microservice_url(self.cfg),
            wait_for_ms=self.cfg.default_wait_ms if wait_for_ms is None else wait_for_ms,
            headers=headers,
            base_timeout_seconds=self.cfg.timeout_seconds,
            params_provider=self.params_provider,
            trust_env=self.cfg.trust_env,
            logger=self.logger,
            max_body_chars=self.max_body_chars,
        )
