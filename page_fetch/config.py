"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- FetchConfig: Direct HTTP fetching settings
- BrowserConfig: Browser-automation microservice settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml


MICROSERVICE_URL_ENV = "PLAYWRIGHT_MICROSERVICE_URL"


@dataclass
class FetchConfig:
    """Configuration for direct HTTP fetching.

    Attributes:
        timeout_seconds: Request timeout for a single GET
        user_agent: HTTP User-Agent header string
        trust_env: Whether to respect system proxy settings
        follow_redirects: Whether redirects are followed before the status check
    """

    timeout_seconds: float = 30.0
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
    trust_env: bool = True
    follow_redirects: bool = True


@dataclass
class BrowserConfig:
    """Configuration for the browser-automation microservice.

    Attributes:
        microservice_url: Endpoint receiving render requests (falls back to
            the PLAYWRIGHT_MICROSERVICE_URL environment variable)
        timeout_seconds: Base timeout; the effective wait is added on top
        default_wait_ms: Post-load wait used when the caller passes none
        trust_env: Whether to respect system proxy settings
        site_params: Per-hostname request parameters, e.g.
            {"example.com": {"wait": 3000}}
    """

    microservice_url: str | None = None
    timeout_seconds: float = 30.0
    default_wait_ms: int = 0
    trust_env: bool = True
    site_params: dict[str, dict[str, Any]] = field(default_factory=dict)


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
        max_body_chars: Truncation limit for the body snapshot in fetch records
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "fetch.jsonl"
    max_body_chars: int = 2000


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    fetch: FetchConfig = field(default_factory=FetchConfig)
    browser: BrowserConfig = field(default_factory=BrowserConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")
    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "fetch": {
            "timeout_seconds": cfg.fetch.timeout_seconds,
            "user_agent": cfg.fetch.user_agent,
            "trust_env": cfg.fetch.trust_env,
            "follow_redirects": cfg.fetch.follow_redirects,
        },
        "browser": {
            "microservice_url": cfg.browser.microservice_url,
            "timeout_seconds": cfg.browser.timeout_seconds,
            "default_wait_ms": cfg.browser.default_wait_ms,
            "trust_env": cfg.browser.trust_env,
            "site_params": dict(cfg.browser.site_params),
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
            "max_body_chars": cfg.logging.max_body_chars,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    try:
        return AppConfig(
            fetch=FetchConfig(**data["fetch"]),
            browser=BrowserConfig(**data["browser"]),
            logging=LoggingConfig(**data["logging"]),
        )
    except TypeError as exc:
        raise ValueError(f"Invalid config: {exc}") from exc


def get_microservice_url(cfg: BrowserConfig) -> str | None:
    """Get the microservice URL from inline config or environment variable."""
    if cfg.microservice_url:
        return cfg.microservice_url
    return os.getenv(MICROSERVICE_URL_ENV)
