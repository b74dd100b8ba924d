"""
Tests for the log formatters
"""

import json
import logging
import sys

from blog_api.app.core.logging_config import ConsoleFormatter, JsonFormatter


def make_record(msg="Post updated: %s", args=("T",), level=logging.INFO, exc_info=None):
    return logging.LogRecord("blog_api.test", level, __file__, 1, msg, args, exc_info)


class TestJsonFormatter:
    def test_one_json_object_per_record(self):
        line = JsonFormatter().format(make_record())

        entry = json.loads(line)
        assert entry["level"] == "info"
        assert entry["logger"] == "blog_api.test"
        assert entry["message"] == "Post updated: T"
        assert "timestamp" in entry
        assert "stack" not in entry
        assert "\n" not in line

    def test_exception_adds_stack(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = make_record("failed", (), logging.ERROR, sys.exc_info())

        entry = json.loads(JsonFormatter().format(record))

        assert entry["level"] == "error"
        assert "RuntimeError: boom" in entry["stack"]


class TestConsoleFormatter:
    def test_plain_line_without_colour(self):
        line = ConsoleFormatter(use_colour=False).format(make_record(level=logging.WARNING))

        assert "[WARNING] blog_api.test: Post updated: T" in line
        assert "\x1b[" not in line

    def test_line_coloured_by_level(self):
        line = ConsoleFormatter().format(make_record(level=logging.ERROR))

        assert line.startswith(ConsoleFormatter.COLOURS[logging.ERROR])
        assert line.endswith(ConsoleFormatter.reset)
