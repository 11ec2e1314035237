"""Tests for logging setup and scoped fetch records."""

from __future__ import annotations

import json
import logging

import pytest

from page_fetch.config import LoggingConfig
from page_fetch.fetch.tracking import fetch_log_scope
from page_fetch.logging_utils import JsonlFormatter, setup_logging
from page_fetch.types import FetchResult


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def list_logger():
    logger = logging.getLogger("test_tracking")
    logger.handlers = []
    logger.propagate = False
    logger.setLevel(logging.INFO)
    handler = _ListHandler()
    logger.addHandler(handler)
    yield logger, handler
    logger.handlers = []


def test_scope_emits_defaults_on_early_exit(list_logger):
    logger, handler = list_logger

    with fetch_log_scope("https://example.com", "fetch", logger):
        pass

    assert len(handler.records) == 1
    record = handler.records[0]
    assert record.event == "fetch_complete"
    assert record.success is False
    assert record.response_code is None
    assert record.error_message is None
    assert record.html == ""
    assert record.time_taken_seconds >= 0


def test_scope_emits_once_when_block_raises(list_logger):
    logger, handler = list_logger

    with pytest.raises(KeyError):
        with fetch_log_scope("https://example.com", "playwright", logger) as rec:
            rec.response_code = 500
            raise KeyError("defect")

    assert len(handler.records) == 1
    assert handler.records[0].response_code == 500
    assert handler.records[0].time_taken_seconds is not None


def test_record_copies_result_fields(list_logger):
    logger, handler = list_logger

    with fetch_log_scope("https://example.com", "fetch", logger) as rec:
        result = rec.record(FetchResult(content="body", page_status_code=200))

    assert result.content == "body"
    emitted = handler.records[0]
    assert emitted.success is True
    assert emitted.html == "body"
    assert emitted.response_code == 200


def test_finalize_sets_elapsed_time_once():
    with fetch_log_scope("https://example.com", "fetch", None) as rec:
        pass
    first = rec.time_taken_seconds

    assert rec.finalize() == first


def test_fetch_result_wire_dict():
    result = FetchResult.failure("Not Found", 404)

    assert result.to_dict() == {"content": "", "pageStatusCode": 404, "pageError": "Not Found"}
    assert not result.ok


def test_jsonl_file_log_contains_fetch_fields(tmp_path):
    cfg = LoggingConfig(level="INFO", console=False, file=True, filename="fetch.jsonl")
    logger = setup_logging(cfg, tmp_path)

    with fetch_log_scope("https://example.com", "fetch", logger) as rec:
        rec.record(FetchResult.failure("Request timed out"))

    for handler in logger.handlers:
        handler.flush()
        handler.close()
    logger.handlers = []

    lines = (tmp_path / "fetch.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    payload = json.loads(lines[0])
    assert payload["message"] == "Fetch complete"
    assert payload["event"] == "fetch_complete"
    assert payload["url"] == "https://example.com"
    assert payload["error_message"] == "Request timed out"
    assert payload["success"] is False
    assert "lineno" not in payload


def test_jsonl_formatter_keeps_extras():
    record = logging.LogRecord("page_fetch", logging.INFO, __file__, 1, "hello", (), None)
    record.backend = "fetch"

    payload = json.loads(JsonlFormatter().format(record))

    assert payload["message"] == "hello"
    assert payload["backend"] == "fetch"
    assert payload["level"] == "INFO"


def test_setup_logging_respects_level():
    logger = setup_logging(LoggingConfig(level="warning", console=True, file=False))

    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
    logger.handlers = []
