"""Tests for structured logging."""
import json
import logging

from lineage.observability.logging import (
    ConsoleFormatter,
    JSONFormatter,
    LogContext,
    clear_trace_id,
    get_trace_id,
    set_trace_id,
)


def make_record(msg="Resolved ancestors", level=logging.INFO, **extra):
    record = logging.LogRecord("lineage.test", level, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra_fields():
    output = json.loads(JSONFormatter("api").format(make_record(location="Paris", depth=1)))

    assert output["service"] == "api"
    assert output["level"] == "INFO"
    assert output["message"] == "Resolved ancestors"
    assert output["location"] == "Paris"
    assert output["depth"] == 1
    assert "trace_id" not in output


def test_json_formatter_stringifies_unserializable_extra():
    output = json.loads(JSONFormatter("api").format(make_record(payload={1, 2})))

    assert isinstance(output["payload"], str)


def test_json_formatter_adds_location_for_errors():
    output = json.loads(JSONFormatter("api").format(make_record(level=logging.ERROR)))

    assert output["line"] == 10
    assert "file" in output


def test_json_formatter_includes_trace_id():
    with LogContext("abc123"):
        output = json.loads(JSONFormatter("api").format(make_record()))

    assert output["trace_id"] == "abc123"


def test_log_context_restores_previous_trace_id():
    set_trace_id("outer")
    try:
        with LogContext("inner"):
            assert get_trace_id() == "inner"
        assert get_trace_id() == "outer"
    finally:
        clear_trace_id()

    assert get_trace_id() is None


def test_console_formatter():
    formatter = ConsoleFormatter("api", use_colors=False)

    with LogContext("0123456789abcdef"):
        line = formatter.format(make_record(location="Paris"))

    assert line == "[INFO] api/test: [01234567] Resolved ancestors {location=Paris}"
