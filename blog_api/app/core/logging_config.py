"""
Logging configuration for the application.

Outside production log lines are human readable and coloured by level
on a terminal.  In production each record is written as one JSON
object per line so log shippers can parse it without a custom grok
pattern.  ``setup_logging`` is safe to call repeatedly: handlers are
only attached once, but the level is applied every time.
"""

import json
import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ConsoleFormatter(logging.Formatter):
    """Plain text formatter that colours the whole line by level."""

    reset = "\x1b[0m"
    COLOURS = {
        logging.DEBUG: "\x1b[30;1m",
        logging.INFO: "\x1b[37;20m",
        logging.WARNING: "\x1b[33;20m",
        logging.ERROR: "\x1b[31;20m",
        logging.CRITICAL: "\x1b[31;1m",
    }

    def __init__(self, use_colour: bool = True) -> None:
        super().__init__(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
        self.use_colour = use_colour

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        colour = self.COLOURS.get(record.levelno)
        if not self.use_colour or colour is None:
            return line
        return f"{colour}{line}{self.reset}"


class JsonFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, logger, message.

    ``stack`` is added when the record carries exception info.
    """

    def __init__(self) -> None:
        super().__init__(datefmt=DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["stack"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, json_format: bool = False) -> None:
    """Configure root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive.  Unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path to a file to log messages to.  File output is never
        coloured.
    json_format : bool
        Emit JSON lines instead of plain text (used in production).
    """
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if logger.handlers:
        # Already configured, e.g. by uvicorn or by a previous
        # ``create_app`` call in the test suite.
        return

    console_handler = logging.StreamHandler()
    if json_format:
        console_handler.setFormatter(JsonFormatter())
    else:
        console_handler.setFormatter(ConsoleFormatter(use_colour=console_handler.stream.isatty()))
    logger.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(JsonFormatter() if json_format else ConsoleFormatter(use_colour=False))
        logger.addHandler(file_handler)
