"""Unit tests for structured logging."""

from __future__ import annotations

import json
import logging

import pytest

from github_bot_platform.logging import JsonFormatter, configure_logging
from github_bot_platform.platform import ExecutionContext


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="github_bot_platform.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Issue created",
        args=None,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra_fields() -> None:
    payload = json.loads(JsonFormatter().format(_record(repo="acme/repo1", issue_number=7)))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "github_bot_platform.test"
    assert payload["message"] == "Issue created"
    assert payload["extra"] == {"repo": "acme/repo1", "issue_number": 7}


def test_json_formatter_stringifies_opaque_contexts() -> None:
    context = ExecutionContext(context_id="conversation-1")

    payload = json.loads(JsonFormatter().format(_record(context=context)))

    assert "conversation-1" in payload["extra"]["context"]


def test_configure_logging_installs_single_json_handler() -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        configure_logging("debug")
        configure_logging("debug")

        json_handlers = [h for h in root.handlers if isinstance(h.formatter, JsonFormatter)]
        assert len(json_handlers) == 1
        assert root.level == logging.DEBUG
        assert logging.getLogger("github").level == logging.INFO
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)


@pytest.mark.parametrize("level", ["INFO", "warning"])
def test_configure_logging_accepts_any_case(level: str) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        configure_logging(level)
        assert root.level == getattr(logging, level.upper())
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
