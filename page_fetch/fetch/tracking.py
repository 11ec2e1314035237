"""Scoped fetch log records."""

from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import Iterator

from ..logging_utils import log_event
from ..types import FetchLogRecord


@contextmanager
def fetch_log_scope(
    url: str,
    backend: str,
    logger: logging.Logger | None,
    max_body_chars: int | None = None,
) -> Iterator[FetchLogRecord]:
    """Yield a fresh FetchLogRecord and emit it once the block exits.

    The record is finalized and logged on every exit path, including
    exceptions raised inside the block, which are re-raised unchanged.
    """
    record = FetchLogRecord(url=url, backend=backend)
    try:
        yield record
    finally:
        record.finalize()
        log_event(
            logger,
            "Fetch complete",
            event="fetch_complete",
            **record.as_fields(max_body_chars),
        )
