"""Tests for observability utilities."""

import json
import logging

from apartly.observability.correlation import (
    get_correlation_id,
    reset_correlation_id,
    resolve_correlation_id,
    set_correlation_id,
)
from apartly.observability.logging import JsonFormatter, get_logger


def _record(message: str = "booking created", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="apartly.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def test_base_fields(self):
        out = json.loads(JsonFormatter(service="apartly-test").format(_record()))

        assert out["level"] == "INFO"
        assert out["logger"] == "apartly.test"
        assert out["message"] == "booking created"
        assert out["service"] == "apartly-test"
        assert "timestamp" in out
        assert "correlationId" not in out

    def test_includes_correlation_id(self):
        token = set_correlation_id("cid-1")
        try:
            out = json.loads(JsonFormatter().format(_record()))
        finally:
            reset_correlation_id(token)

        assert out["correlationId"] == "cid-1"

    def test_merges_extra_fields(self):
        record = _record(extra_fields={"booking_id": "bk-1", "period_count": 3})

        out = json.loads(JsonFormatter().format(record))

        assert out["booking_id"] == "bk-1"
        assert out["period_count"] == 3

    def test_non_json_values_stringified(self):
        from datetime import datetime
        from decimal import Decimal

        record = _record(extra_fields={"total": Decimal("600.00"), "at": datetime(2024, 6, 1)})

        out = json.loads(JsonFormatter().format(record))

        assert out["total"] == "600.00"
        assert out["at"] == "2024-06-01 00:00:00"


class TestGetLogger:
    def test_single_handler(self):
        logger = get_logger("apartly.test.single")
        again = get_logger("apartly.test.single")

        assert logger is again
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JsonFormatter)
        assert logger.propagate is False

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")

        logger = get_logger("apartly.test.level")

        assert logger.level == logging.WARNING


class TestCorrelation:
    def test_default_is_empty(self):
        assert get_correlation_id() == ""

    def test_set_and_reset(self):
        token = set_correlation_id("abc")
        assert get_correlation_id() == "abc"
        reset_correlation_id(token)
        assert get_correlation_id() == ""

    def test_resolve_keeps_usable_id(self):
        assert resolve_correlation_id("  req-1  ") == "req-1"

    def test_resolve_generates_for_missing(self):
        assert len(resolve_correlation_id(None)) == 36
        assert len(resolve_correlation_id("   ")) == 36

    def test_resolve_rejects_control_characters(self):
        assert resolve_correlation_id("bad\nid") != "bad\nid"
