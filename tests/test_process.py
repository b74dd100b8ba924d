"""
Tests for the process level error policy
"""

import asyncio
import logging

import pytest

from blog_api.app.core import process


def test_async_errors_are_logged(caplog):
    loop = asyncio.new_event_loop()
    try:
        process.install_loop_exception_handler(loop)
        with caplog.at_level(logging.ERROR):
            loop.call_exception_handler(
                {"message": "Task exception was never retrieved", "exception": ValueError("lost")}
            )
    finally:
        loop.close()

    record = caplog.records[-1]
    assert record.levelno == logging.ERROR
    assert "Task exception was never retrieved" in record.getMessage()
    assert record.exc_info[0] is ValueError


def test_async_errors_without_exception(caplog):
    with caplog.at_level(logging.ERROR):
        process.log_unhandled_async_error(None, {"message": "something odd"})
    assert "something odd" in caplog.text


def test_run_supervised_returns_normally():
    calls = []

    async def main():
        calls.append(asyncio.get_running_loop().get_exception_handler())

    process.run_supervised(main)

    assert calls == [process.log_unhandled_async_error]


def test_fatal_error_exits_with_failure(caplog):
    async def main():
        raise RuntimeError("corrupted state")

    with pytest.raises(SystemExit) as excinfo:
        process.run_supervised(main)

    assert excinfo.value.code == process.FATAL_EXIT_CODE
    assert any(r.levelno == logging.CRITICAL and "corrupted state" in r.getMessage() for r in caplog.records)


def test_keyboard_interrupt_passes_through():
    async def main():
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        process.run_supervised(main)
