from __future__ import annotations

import json
import logging
import sys

from airquality.utils.logging import JsonFormatter, setup_logging


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord(
        name="airquality.data.csv_loader",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Skipping malformed reading: %s",
        args=("line 7",),
        exc_info=None,
    )
    record.line_number = 7
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "airquality.data.csv_loader"
    assert payload["message"] == "Skipping malformed reading: line 7"
    assert payload["line_number"] == 7
    assert "lineno" not in payload


def test_setup_logging_writes_to_stderr() -> None:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    try:
        setup_logging("debug", "json")
        (handler,) = root.handlers
        assert handler.stream is sys.stderr  # type: ignore[attr-defined]
        assert isinstance(handler.formatter, JsonFormatter)
        assert root.level == logging.DEBUG
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)
