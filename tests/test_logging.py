from __future__ import annotations

import json
import logging

from intake.core.logging import JsonFormatter, TextFormatter, build_formatter, get_logger


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="intake.services.action_items.service",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="action_items.created",
        args=None,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra_fields() -> None:
    payload = json.loads(JsonFormatter().format(_record(analysis_id="a-1", action_id="act-1")))
    assert payload["msg"] == "action_items.created"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "intake.services.action_items.service"
    assert payload["analysis_id"] == "a-1"
    assert payload["action_id"] == "act-1"


def test_text_formatter_appends_extra_pairs() -> None:
    line = TextFormatter().format(_record(status="Done"))
    assert "action_items.created" in line
    assert "status='Done'" in line


def test_build_formatter_selects_format() -> None:
    assert isinstance(build_formatter("json", use_utc=False), JsonFormatter)
    assert isinstance(build_formatter("text", use_utc=True), TextFormatter)


def test_get_logger_namespaces_under_application() -> None:
    assert get_logger("intake.db.session").name == "intake.db.session"
    assert get_logger("alembic").name == "intake.alembic"
