"""Structured Logging - JSON formatter output shape."""

import json
import logging

from app.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "app.infrastructure.chat_dao", logging.INFO, __file__, 1,
        "Created user %s", ("alice",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_core_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "INFO"
    assert out["logger"] == "app.infrastructure.chat_dao"
    assert out["message"] == "Created user alice"
    assert "timestamp" in out


def test_json_formatter_surfaces_known_extras_only():
    out = json.loads(JSONFormatter().format(
        _record(operation="create_user", user_id=3, password="x"),
    ))
    assert out["operation"] == "create_user"
    assert out["user_id"] == 3
    assert "password" not in out
