import json
import logging

from request_core.infrastructure.logging.logger import RequestLogFormatter


def make_record(msg, extra=None):
    record = logging.LogRecord("request_core", logging.WARNING, __file__, 1, msg, None, None)
    if extra is not None:
        record.extra = extra
    return record


def test_request_fields_always_present():
    line = RequestLogFormatter(redact=False).format(make_record("cache hit"))
    payload = json.loads(line)
    assert payload["msg"] == "cache hit"
    assert payload["level"] == "WARNING"
    assert payload["url"] is None
    assert payload["kind"] is None
    assert payload["code"] is None


def test_request_fields_and_extra():
    record = make_record(
        "request failed",
        {"url": "http://api.test/users?token=secret", "kind": "timeout", "code": 502, "path": "/users"},
    )
    payload = json.loads(RequestLogFormatter(redact=False).format(record))
    assert payload["url"] == "http://api.test/users?token=secret"
    assert payload["kind"] == "timeout"
    assert payload["code"] == 502
    assert payload["path"] == "/users"


def test_redaction_strips_query_and_truncates():
    record = make_record("x" * 100, {"url": "http://api.test/users?token=secret"})
    payload = json.loads(RequestLogFormatter(redact=True).format(record))
    assert payload["url"] == "http://api.test/users"
    assert len(payload["msg"]) == 64
