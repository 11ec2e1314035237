"""
Core data types for page fetching.

This module defines the structures that cross the fetch boundary:
- FetchResult: Uniform outcome returned by every fetch backend
- FetchLogRecord: Per-call record handed to the logging sink
"""

from __future__ import annotations

from dataclasses import dataclass, field
import time
from typing import Any

from .logging_utils import truncate_text


PDF_CONTENT_ERROR = "PDF content detected - not suitable for text extraction"
TIMEOUT_ERROR = "Request timed out"


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a single fetch, shared by all backends.

    A fetch succeeded when page_error is None and content is non-empty.
    On every failure path content is the empty string. page_status_code
    is None when no status could be determined (e.g. a transport timeout).

    Attributes:
        content: The raw page body, or "" on failure
        page_status_code: Status reported by the origin or the microservice
        page_error: Human-readable failure reason, None on success
    """
    content: str = ""
    page_status_code: int | None = None
    page_error: str | None = None

    @property
    def ok(self) -> bool:
        return self.page_error is None and self.content != ""

    @classmethod
    def failure(cls, error: str, status_code: int | None = None) -> FetchResult:
        return cls(content="", page_status_code=status_code, page_error=error)

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the field names of the microservice envelope."""
        return {
            "content": self.content,
            "pageStatusCode": self.page_status_code,
            "pageError": self.page_error,
        }


@dataclass
class FetchLogRecord:
    """Mutable record describing one fetch call for the logging sink.

    Fields keep their defaults on early-exit paths; time_taken_seconds is
    filled in by finalize() exactly once.

    Attributes:
        url: The URL being fetched
        backend: Name of the backend performing the fetch
        success: Whether the fetch produced usable content
        response_code: Status code seen by the backend, if any
        time_taken_seconds: Elapsed wall-clock time, set on finalize
        error_message: Failure reason, if any
        html: Snapshot of the raw body on success
    """
    url: str
    backend: str
    success: bool = False
    response_code: int | None = None
    time_taken_seconds: float | None = None
    error_message: str | None = None
    html: str = ""
    started_at: float = field(default_factory=time.monotonic, repr=False)

    def record(self, result: FetchResult) -> FetchResult:
        """Copy the outcome of result into the record and pass it through."""
        self.response_code = result.page_status_code
        self.error_message = result.page_error
        if result.ok:
            self.success = True
            self.html = result.content
        return result

    def finalize(self) -> float:
        if self.time_taken_seconds is None:
            self.time_taken_seconds = time.monotonic() - self.started_at
        return self.time_taken_seconds

    def as_fields(self, max_body_chars: int | None = None) -> dict[str, Any]:
        html = self.html
        if max_body_chars is not None:
            html = truncate_text(html, max_body_chars)
        return {
            "url": self.url,
            "backend": self.backend,
            "success": self.success,
            "response_code": self.response_code,
            "time_taken_seconds": self.time_taken_seconds,
            "error_message": self.error_message,
            "html": html,
        }
