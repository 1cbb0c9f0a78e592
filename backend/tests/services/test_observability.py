"""Structured logging — JSON formatter surfaces reconciliation extras."""

import json
import logging

from studbook.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "studbook.test", logging.ERROR, __file__, 1, "write failed", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_persistence_extras():
    line = JSONFormatter().format(_record(
        operation="delete_project", committed_steps=["individuals"],
        failed_step="species", affected_ids=["C"],
    ))
    payload = json.loads(line)
    assert payload["level"] == "ERROR"
    assert payload["message"] == "write failed"
    assert payload["committed_steps"] == ["individuals"]
    assert payload["failed_step"] == "species"
    assert payload["affected_ids"] == ["C"]


def test_json_formatter_omits_absent_extras():
    payload = json.loads(JSONFormatter().format(_record()))
    assert "operation" not in payload
    assert "failed_step" not in payload
